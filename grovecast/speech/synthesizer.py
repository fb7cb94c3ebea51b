"""Sequential, rate-limited speech synthesis of script sections."""

import threading
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..errors import PipelineCancelled
from ..generation.models import Section
from ..workspace import RunWorkspace
from .chunker import DEFAULT_MAX_CHARS, split_text
from .scheduler import CallScheduler, MinIntervalScheduler
from .tts_provider import TTSProvider

console = Console()


class SpeechSynthesizer:
    """Turn section text into audio segment files, one TTS call per chunk."""

    def __init__(
        self,
        tts_provider: TTSProvider,
        workspace: RunWorkspace,
        scheduler: Optional[CallScheduler] = None,
        max_chunk_chars: int = DEFAULT_MAX_CHARS,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """
        Initialize speech synthesizer.

        Args:
            tts_provider: Provider performing the TTS calls
            workspace: Run workspace receiving segment files
            scheduler: Spacing policy shared by every call of the run
            max_chunk_chars: Per-request character limit
            cancel_event: Checked before each chunk
        """
        self.tts_provider = tts_provider
        self.workspace = workspace
        self.scheduler = scheduler or MinIntervalScheduler()
        self.max_chunk_chars = max_chunk_chars
        self.cancel_event = cancel_event
        self.calls_made = 0

    def synthesize_section(self, section: Section) -> List[Path]:
        """
        Synthesize every chunk of a section, strictly one after another.

        Returns:
            Segment files in chunk order
        """
        chunks = split_text(section.text, self.max_chunk_chars)
        segments = []

        for chunk_index, chunk in enumerate(chunks):
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise PipelineCancelled(f"Cancelled before {section.key} chunk {chunk_index}")

            path = self.workspace.path_for(
                f"{section.key}_{section.index}_{chunk_index}",
                self.tts_provider.audio_format,
            )

            self.scheduler.before_call()
            try:
                audio = self.tts_provider.synthesize(chunk)
            finally:
                self.scheduler.after_call()
            self.calls_made += 1

            path.write_bytes(audio)
            segments.append(path)

        console.print(
            f"[dim]Synthesized {section.key}: {len(chunks)} chunk(s)[/dim]"
        )
        return segments
