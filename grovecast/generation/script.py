"""Script writer turning queued articles into a structured podcast script."""

import re
import time
from typing import Optional, Sequence

from rich.console import Console

from ..errors import DecodingError
from ..models import Article
from .llm_provider import LLMProvider
from .models import GenerationStats, PodcastScript
from .prompt_cache import PromptTemplateCache

console = Console()

ARTICLE_SEPARATOR = "\n\n---\n\n"

_LEADING_FENCE = re.compile(r"^```(?:json)?")
_TRAILING_FENCE = "```"


def clean_json_response(text: str) -> str:
    """
    Strip an optional code fence around a JSON reply.

    Args:
        text: Raw model output

    Returns:
        The JSON payload without surrounding fence markers
    """
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    if cleaned.endswith(_TRAILING_FENCE):
        cleaned = cleaned[: -len(_TRAILING_FENCE)]
    return cleaned.strip()


def join_articles(articles: Sequence[Article]) -> str:
    """Join article bodies with the prompt separator."""
    return ARTICLE_SEPARATOR.join(article.content for article in articles)


class ScriptWriter:
    """Generate podcast scripts from article bodies."""

    def __init__(self, llm_provider: LLMProvider, prompt_cache: PromptTemplateCache) -> None:
        """
        Initialize script writer.

        Args:
            llm_provider: LLM provider for script generation
            prompt_cache: Source of the prompt template
        """
        self.llm_provider = llm_provider
        self.prompt_cache = prompt_cache
        self.last_stats: Optional[GenerationStats] = None

    def generate(self, articles: Sequence[Article]) -> PodcastScript:
        """
        Generate a script covering the given articles.

        Args:
            articles: Articles in queue order

        Returns:
            Decoded podcast script

        Raises:
            ValueError: No articles were given
            PromptFetchError: The template could not be fetched
            DecodingError: The reply is not a valid script
        """
        if not articles:
            raise ValueError("At least one article is required")

        start_time = time.time()

        # Template fetch happens before the main request so its failure pre-empts it
        prompt = self.prompt_cache.render(join_articles(articles))
        reply = self.llm_provider.complete(prompt)

        if not reply.strip():
            raise DecodingError("Invalid response from API: empty text")

        script = PodcastScript.from_json(clean_json_response(reply))

        if len(script.stories) != len(articles):
            console.print(
                f"[yellow]Warning: script has {len(script.stories)} stories "
                f"for {len(articles)} articles[/yellow]"
            )

        llm_stats = self.llm_provider.get_usage_stats()
        self.last_stats = GenerationStats(
            articles_processed=len(articles),
            stories_written=len(script.stories),
            tokens_used=llm_stats.get("total_tokens", 0),
            api_calls=llm_stats.get("api_calls", 0),
            processing_time=time.time() - start_time,
        )

        return script
