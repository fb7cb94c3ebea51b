"""Ordered assembly of audio segments into one file."""

from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field
from rich.console import Console

from ..errors import AudioProcessingError
from ..workspace import RunWorkspace
from .composer import AudioComposer

console = Console()


class SegmentResult(BaseModel):
    """Outcome of loading one segment for composition."""

    index: int = Field(..., description="Position in the requested order")
    path: Path = Field(..., description="Segment file")
    loaded: bool = Field(..., description="Whether the segment made it into the output")
    duration: float = Field(0.0, description="Segment length in seconds")
    error: Optional[str] = Field(None, description="Why the segment was skipped")


class CombineReport(BaseModel):
    """Result of one combine call."""

    output_path: Path = Field(..., description="Encoded output file")
    results: List[SegmentResult] = Field(default_factory=list)

    @property
    def included(self) -> List[SegmentResult]:
        return [r for r in self.results if r.loaded]

    @property
    def skipped(self) -> List[SegmentResult]:
        return [r for r in self.results if not r.loaded]

    @property
    def total_duration(self) -> float:
        return sum(r.duration for r in self.included)


class AudioAssembler:
    """
    Concatenate segment files in the order given.

    Segments that cannot be decoded, or decode to nothing, are left out and
    reported; only a failed export stops the run.
    """

    def __init__(self, composer: AudioComposer, workspace: RunWorkspace, export_format: str = "mp3") -> None:
        self.composer = composer
        self.workspace = workspace
        self.export_format = export_format

    def combine(self, paths: Sequence[Path], output_name: str) -> CombineReport:
        """
        Combine segment files into ``<run_id>_<output_name>.<format>``.

        Args:
            paths: Segment files in playback order
            output_name: Name of the output within the run workspace

        Returns:
            Report with the output path and per-segment outcomes

        Raises:
            AudioProcessingError: Nothing could be loaded or export failed
        """
        results = []
        audios = []

        for index, path in enumerate(paths):
            try:
                audio = self.composer.load(path)
                duration = self.composer.duration(audio)
            except Exception as e:
                console.print(f"[yellow]Skipping segment {path.name}: {e}[/yellow]")
                results.append(SegmentResult(index=index, path=path, loaded=False, error=str(e)))
                continue

            if duration <= 0:
                console.print(f"[yellow]Skipping segment {path.name}: no audio[/yellow]")
                results.append(SegmentResult(index=index, path=path, loaded=False, error="no audio"))
                continue

            results.append(SegmentResult(index=index, path=path, loaded=True, duration=duration))
            audios.append(audio)

        output_path = self.workspace.path_for(output_name, self.export_format)
        report = CombineReport(output_path=output_path, results=results)

        if not audios:
            raise AudioProcessingError(f"Failed to process audio files: no usable segments for {output_name}")

        try:
            combined = self.composer.concatenate(audios)
            output_path.unlink(missing_ok=True)
            self.composer.export(combined, output_path, self.export_format)
        except Exception as e:
            raise AudioProcessingError(f"Failed to process audio files: {e}") from e

        return report
