"""Text-to-speech provider interface and implementations."""

import base64
import binascii
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from ..config import TTSConfig
from ..errors import DecodingError
from ..transport import post_json


class SpeechResponse(BaseModel):
    """JSON variant of a speech response."""

    audio_data: Optional[str] = None


class TTSProvider(ABC):
    """Abstract base class for TTS providers."""

    @property
    @abstractmethod
    def audio_format(self) -> str:
        """File extension of the audio returned by ``synthesize``."""
        pass

    @abstractmethod
    def synthesize(self, text: str) -> bytes:
        """
        Convert one chunk of text to audio.

        Args:
            text: Chunk within the provider's size limit

        Returns:
            Encoded audio bytes
        """
        pass


class SpeechifyProvider(TTSProvider):
    """Speechify implementation of TTS provider."""

    def __init__(self, api_key: str, config: TTSConfig, client: httpx.Client) -> None:
        """
        Initialize Speechify provider.

        Args:
            api_key: Speechify API key
            config: Voice and endpoint settings
            client: HTTP client to send requests with
        """
        self.api_key = api_key
        self.config = config
        self.client = client

    @property
    def audio_format(self) -> str:
        return self.config.audio_format

    def synthesize(self, text: str) -> bytes:
        """Synthesize one chunk using the Speechify speech endpoint."""
        payload = {
            "input": text,
            "voice_id": self.config.voice_id,
            "model": self.config.model,
            "emotion": self.config.emotion,
            "pitch": self.config.pitch,
            "speed": self.config.speed,
            "text_normalization": self.config.text_normalization,
            "audio_format": self.config.audio_format,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        response = post_json(
            self.client, self.config.base_url, payload, headers, service="Speechify", timeout=self.config.timeout
        )
        return extract_audio(response)


def extract_audio(response: httpx.Response) -> bytes:
    """
    Get audio bytes from a speech response.

    JSON bodies carry base64 audio in ``audio_data``; ``audio/*`` bodies
    are the audio itself.
    """
    content_type = response.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            speech = SpeechResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodingError(f"Invalid response from API: {e}") from e
        if not speech.audio_data:
            raise DecodingError("Invalid audio data received: audio_data missing")
        try:
            return base64.b64decode(speech.audio_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodingError(f"Invalid audio data received: {e}") from e

    if "audio/" in content_type:
        return response.content

    raise DecodingError(f"Invalid response from API: unexpected content type '{content_type}'")
