"""Error types raised by the generation pipeline."""

from typing import Optional


class GrovecastError(Exception):
    """Base class for all pipeline failures."""


class ConfigurationError(GrovecastError):
    """A required setting or credential is missing."""


class PromptFetchError(GrovecastError):
    """The prompt template could not be fetched."""


class EncodingError(GrovecastError):
    """A request could not be built (bad URL or unencodable body)."""


class NetworkError(GrovecastError):
    """Transport-level failure talking to a remote service."""


class HTTPError(NetworkError):
    """A remote service answered with a non-200 status."""

    def __init__(self, status_code: int, service: str = "API", body: Optional[str] = None) -> None:
        self.status_code = status_code
        self.service = service
        self.body = body
        super().__init__(f"{service} HTTP error: {status_code}")


class DecodingError(GrovecastError):
    """A response body could not be parsed."""


class AudioProcessingError(GrovecastError):
    """Exporting or probing assembled audio failed."""


class PipelineCancelled(GrovecastError):
    """The run was cancelled between two synthesis calls."""
