"""End-to-end episode generation pipeline."""

from .orchestrator import (
    STATUS_AUDIO,
    STATUS_SCRIPT,
    PipelineOrchestrator,
    PipelineStage,
    PipelineState,
)
from .storage import build_episode_filename, persist_episode_audio, sanitize_title

__all__ = [
    "PipelineOrchestrator",
    "PipelineStage",
    "PipelineState",
    "STATUS_SCRIPT",
    "STATUS_AUDIO",
    "build_episode_filename",
    "persist_episode_audio",
    "sanitize_title",
]
