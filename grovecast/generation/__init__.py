"""Script generation."""

from .llm_provider import AnthropicProvider, LLMProvider
from .models import GenerationStats, PodcastScript, Section
from .prompt_cache import PromptTemplateCache
from .script import ScriptWriter, clean_json_response, join_articles

__all__ = [
    "LLMProvider",
    "AnthropicProvider",
    "PromptTemplateCache",
    "ScriptWriter",
    "PodcastScript",
    "Section",
    "GenerationStats",
    "clean_json_response",
    "join_articles",
]
