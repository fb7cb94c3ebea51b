"""Podcast episode model."""

from typing import Optional

from pydantic import Field

from .base import RecordModel


class PodcastEpisode(RecordModel):
    """A generated episode whose audio lives in the episodes folder."""

    title: str = Field(..., description="Episode title")
    filename: str = Field(..., description="Audio file name in the episodes folder")
    duration: Optional[float] = Field(None, description="Duration in seconds", ge=0.0)

    @property
    def duration_label(self) -> str:
        """Duration formatted as M:SS."""
        if self.duration is None:
            return "-"
        minutes, seconds = divmod(int(round(self.duration)), 60)
        return f"{minutes}:{seconds:02d}"
