"""Data models for generation."""

import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError

from ..errors import DecodingError

STORY_PREFIX = "story_"


class Section(BaseModel):
    """One named unit of episode content."""

    index: int = Field(..., description="Position in the episode")
    key: str = Field(..., description="intro, story_<n> or outro")
    text: str = Field(..., description="Narration text")


class PodcastScript(BaseModel):
    """Structured script returned by the LLM."""

    episode_title: str = Field(..., description="Episode title")
    intro: str = Field(..., description="Intro narration")
    outro: str = Field(..., description="Outro narration")
    stories: Dict[str, str] = Field(default_factory=dict, description="story_<n> -> narration")

    @classmethod
    def from_mapping(cls, data: Any) -> "PodcastScript":
        """
        Build a script from a decoded JSON object.

        Story keys are not known up front: every top-level key starting
        with ``story_`` is taken as a story.
        """
        if not isinstance(data, dict):
            raise DecodingError(f"Decoding failed: expected a JSON object, got {type(data).__name__}")

        fields = {k: data[k] for k in ("episode_title", "intro", "outro") if k in data}
        fields["stories"] = {k: v for k, v in data.items() if k.startswith(STORY_PREFIX)}

        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise DecodingError(f"Decoding failed: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> "PodcastScript":
        """Decode a script from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodingError(f"Decoding failed: {e}") from e
        return cls.from_mapping(data)

    def story_keys(self) -> List[str]:
        """Story keys in plain string order (story_10 sorts before story_2)."""
        return sorted(self.stories)

    def sections(self) -> List[Section]:
        """Intro, stories, outro as an ordered list."""
        ordered = [("intro", self.intro)]
        ordered.extend((key, self.stories[key]) for key in self.story_keys())
        ordered.append(("outro", self.outro))
        return [Section(index=i, key=key, text=text) for i, (key, text) in enumerate(ordered)]


class GenerationStats(BaseModel):
    """Statistics for generation process."""

    articles_processed: int = Field(..., description="Number of articles processed")
    stories_written: int = Field(0, description="Number of story sections in the script")
    tokens_used: int = Field(0, description="Total tokens used")
    api_calls: int = Field(0, description="Number of API calls made")
    processing_time: float = Field(0.0, description="Processing time in seconds")
