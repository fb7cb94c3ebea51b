"""Text chunking and speech synthesis."""

from .chunker import DEFAULT_MAX_CHARS, split_text
from .scheduler import CallScheduler, MinIntervalScheduler
from .synthesizer import SpeechSynthesizer
from .tts_provider import SpeechifyProvider, TTSProvider, extract_audio

__all__ = [
    "split_text",
    "DEFAULT_MAX_CHARS",
    "CallScheduler",
    "MinIntervalScheduler",
    "TTSProvider",
    "SpeechifyProvider",
    "SpeechSynthesizer",
    "extract_audio",
]
