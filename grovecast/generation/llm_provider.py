"""LLM provider interface and implementations."""

from abc import ABC, abstractmethod
from typing import Dict

import httpx
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console

from ..config import LLMConfig
from ..errors import DecodingError
from ..transport import post_json

console = Console()


class ContentBlock(BaseModel):
    """One item of a Messages API response."""

    type: str
    text: str = ""


class Usage(BaseModel):
    """Token usage of a Messages API response."""

    input_tokens: int = 0
    output_tokens: int = 0


class MessagesResponse(BaseModel):
    """Subset of the Messages API response we rely on."""

    content: list[ContentBlock] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Send a single-turn prompt.

        Args:
            prompt: User message content

        Returns:
            Text of the first content item of the reply
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class AnthropicProvider(LLMProvider):
    """Anthropic Messages API implementation of LLM provider."""

    def __init__(self, api_key: str, config: LLMConfig, client: httpx.Client) -> None:
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            config: Model and endpoint settings
            client: HTTP client to send requests with
        """
        self.api_key = api_key
        self.config = config
        self.client = client
        self.total_tokens = 0
        self.api_calls = 0

    def complete(self, prompt: str) -> str:
        """Generate a reply using the Messages API."""
        payload = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.config.api_version,
        }

        self.api_calls += 1
        response = post_json(
            self.client, self.config.base_url, payload, headers, service="Anthropic", timeout=self.config.timeout
        )

        try:
            message = MessagesResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodingError(f"Invalid response from Anthropic API: {e}") from e

        self.total_tokens += message.usage.input_tokens + message.usage.output_tokens

        if not message.content:
            raise DecodingError("Invalid response from Anthropic API: no content")

        return message.content[0].text

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.config.model,
        }
