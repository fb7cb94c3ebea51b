"""Configuration management for Grovecast."""

from .loader import Config, load_config, save_config
from .models import AudioConfig, ConfigModel, Credentials, LLMConfig, TTSConfig

__all__ = [
    "Config",
    "ConfigModel",
    "Credentials",
    "LLMConfig",
    "TTSConfig",
    "AudioConfig",
    "load_config",
    "save_config",
]
