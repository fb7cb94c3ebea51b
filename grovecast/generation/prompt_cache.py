"""Remote prompt template with a time-bounded cache."""

import time
from typing import Callable, Optional

import httpx
from rich.console import Console

from ..errors import PromptFetchError

console = Console()

ARTICLES_PLACEHOLDER = "{{ARTICLES}}"
DEFAULT_TTL_SECONDS = 300.0


class PromptTemplateCache:
    """Fetch the script prompt template and keep it for ``ttl`` seconds."""

    def __init__(
        self,
        url: str,
        client: httpx.Client,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize prompt cache.

        Args:
            url: Location of the plain-text template
            client: HTTP client used for fetches
            ttl: Seconds a fetched template stays valid
            clock: Wall-clock source (seconds)
        """
        self.url = url
        self.client = client
        self.ttl = ttl
        self.clock = clock
        self.value: Optional[str] = None
        self.fetched_at: Optional[float] = None

    def is_fresh(self) -> bool:
        """Whether the cached template can be served without a fetch."""
        if self.value is None or self.fetched_at is None:
            return False
        return self.clock() - self.fetched_at < self.ttl

    def invalidate(self) -> None:
        """Drop the cached template."""
        self.value = None
        self.fetched_at = None

    def get(self) -> str:
        """Return the template, fetching it when missing or expired."""
        if self.is_fresh():
            return self.value

        template = self._fetch()
        self.value = template
        self.fetched_at = self.clock()
        return template

    def render(self, articles_text: str) -> str:
        """Substitute the joined article text into the template."""
        return self.get().replace(ARTICLES_PLACEHOLDER, articles_text)

    def _fetch(self) -> str:
        try:
            response = self.client.get(self.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PromptFetchError(f"Prompt fetch error: {e}") from e

        if response.status_code != 200:
            raise PromptFetchError(
                f"Failed to fetch prompt from server (HTTP {response.status_code})"
            )

        try:
            template = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PromptFetchError("Invalid prompt data received") from e

        console.print(f"[dim]Fetched prompt template ({len(template)} chars)[/dim]")
        return template
