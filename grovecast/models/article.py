"""Article model for queued article texts."""

from typing import Any, Optional

import pendulum
from pydantic import Field, model_validator

from .base import RecordModel

PREVIEW_CHARS = 100


class Article(RecordModel):
    """Article queued for the next episode."""

    title: str = Field("", description="Article title")
    content: str = Field(..., description="Article body text")

    @model_validator(mode="before")
    @classmethod
    def default_title(cls, data: Any) -> Any:
        """Name untitled articles after the time they were added."""
        if isinstance(data, dict) and not (data.get("title") or "").strip():
            stamp = pendulum.now().format("MMM D, YYYY h:mm A")
            data = {**data, "title": f"Article {stamp}"}
        return data

    @property
    def preview(self) -> str:
        """Short excerpt for listings."""
        suffix = "..." if len(self.content) > PREVIEW_CHARS else ""
        return self.content[:PREVIEW_CHARS] + suffix

    def edit(self, title: Optional[str] = None, content: Optional[str] = None) -> "Article":
        """Return a copy with title and/or body replaced."""
        update = {}
        if title is not None:
            update["title"] = title
        if content is not None:
            update["content"] = content
        return self.model_copy(update=update)
