"""Audio composition backends."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence

from pydub import AudioSegment

# ffmpeg muxer and codec per export extension
EXPORT_FORMATS = {
    "mp3": ("mp3", None),
    "m4a": ("ipod", "aac"),
    "wav": ("wav", None),
}


class AudioComposer(ABC):
    """Decoding, concatenation and encoding of audio files."""

    @abstractmethod
    def load(self, path: Path) -> Any:
        """Decode an audio file; raises if it cannot be read."""
        pass

    @abstractmethod
    def duration(self, audio: Any) -> float:
        """Length of decoded audio in seconds."""
        pass

    @abstractmethod
    def concatenate(self, audios: Sequence[Any]) -> Any:
        """Place decoded audios back to back."""
        pass

    @abstractmethod
    def export(self, audio: Any, path: Path, fmt: str) -> None:
        """Encode audio to ``path`` in format ``fmt``."""
        pass

    @abstractmethod
    def probe_duration(self, path: Path) -> float:
        """Length of an encoded file in seconds."""
        pass


class PydubComposer(AudioComposer):
    """pydub/ffmpeg implementation of audio composer."""

    def __init__(self, bitrate: str = "128k") -> None:
        self.bitrate = bitrate

    def load(self, path: Path) -> AudioSegment:
        return AudioSegment.from_file(str(path))

    def duration(self, audio: AudioSegment) -> float:
        return len(audio) / 1000.0

    def concatenate(self, audios: Sequence[AudioSegment]) -> AudioSegment:
        combined = AudioSegment.empty()
        for audio in audios:
            combined += audio
        return combined

    def export(self, audio: AudioSegment, path: Path, fmt: str) -> None:
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt}")
        ffmpeg_format, codec = EXPORT_FORMATS[fmt]

        options = {"format": ffmpeg_format}
        if codec:
            options["codec"] = codec
        if fmt != "wav":
            options["bitrate"] = self.bitrate

        audio.export(str(path), **options).close()

    def probe_duration(self, path: Path) -> float:
        return self.duration(self.load(path))
