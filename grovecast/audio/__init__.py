"""Audio composition."""

from .assembler import AudioAssembler, CombineReport, SegmentResult
from .composer import EXPORT_FORMATS, AudioComposer, PydubComposer

__all__ = [
    "AudioAssembler",
    "AudioComposer",
    "PydubComposer",
    "CombineReport",
    "SegmentResult",
    "EXPORT_FORMATS",
]
