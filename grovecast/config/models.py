"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr, field_validator


class LLMConfig(BaseModel):
    """Script-writing LLM configuration."""

    model: str = Field("claude-3-5-sonnet-20241022", description="Model name")
    max_tokens: int = Field(8192, description="Maximum tokens in the response", ge=1)
    temperature: float = Field(0.7, ge=0.0, le=1.0)
    api_key_env: Optional[str] = Field(
        "ANTHROPIC_API_KEY", description="Environment variable for API key"
    )
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: str = Field("https://api.anthropic.com/v1/messages", description="Messages endpoint")
    api_version: str = Field("2023-06-01", description="anthropic-version header")
    prompt_url: str = Field(
        "https://grovehouse.xyz/grovenews/scriptprompt.txt",
        description="Prompt template location",
    )
    prompt_cache_ttl: float = Field(300.0, description="Prompt template cache lifetime (seconds)", ge=0.0)
    timeout: float = Field(120.0, description="Request timeout (seconds)", gt=0.0)


class TTSConfig(BaseModel):
    """Text-to-speech configuration."""

    api_key_env: Optional[str] = Field(
        "SPEECHIFY_API_KEY", description="Environment variable for API key"
    )
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: str = Field("https://api.sws.speechify.com/v1/audio/speech", description="Speech endpoint")
    voice_id: str = Field("kristy", description="Voice identifier")
    model: str = Field("simba-english", description="TTS model")
    emotion: str = Field("assertive", description="Voice emotion")
    pitch: int = Field(0, description="Pitch adjustment")
    speed: float = Field(1.0, description="Speaking rate", gt=0.0)
    text_normalization: bool = Field(True, description="Let the service normalize text")
    audio_format: str = Field("mp3", description="Audio format requested per chunk")
    max_chunk_chars: int = Field(2000, description="Maximum characters per request", ge=1)
    min_call_interval: float = Field(
        1.5, description="Minimum seconds between consecutive requests", ge=0.0
    )
    timeout: float = Field(60.0, description="Request timeout (seconds)", gt=0.0)


class AudioConfig(BaseModel):
    """Episode audio output configuration."""

    export_format: str = Field("mp3", description="Format of assembled audio (mp3, m4a, wav)")

    @field_validator("export_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Normalize and check the export format."""
        v = v.lower().lstrip(".")
        if v not in ("mp3", "m4a", "wav"):
            raise ValueError(f"Unsupported export format: {v}")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    workspace_root: str = Field("~/Documents", description="Root directory for outputs")
    episodes_subdir: str = Field("Podcasts", description="Episode folder under workspace root")
    temp_root: Optional[str] = Field(None, description="Temp directory (system default if unset)")
    max_queue_articles: int = Field(5, description="Maximum queued articles", ge=1)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    tts: TTSConfig = Field(default_factory=TTSConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)


class Credentials(BaseModel):
    """API keys read once per pipeline run."""

    anthropic_api_key: Optional[SecretStr] = None
    speechify_api_key: Optional[SecretStr] = None
