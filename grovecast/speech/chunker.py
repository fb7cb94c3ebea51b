"""Sentence-aware text chunking for TTS request limits."""

from typing import List

DEFAULT_MAX_CHARS = 2000


def split_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> List[str]:
    """
    Split text into pieces of at most ``max_chars`` characters.

    Each window is cut after its last period when it has one, otherwise at
    the raw boundary. Joining the pieces gives back the input exactly.

    Args:
        text: Section text
        max_chars: Maximum characters per piece

    Returns:
        Pieces in original order
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    if len(text) <= max_chars:
        return [text]

    chunks = []
    start = 0
    while start < len(text):
        end = min(start + max_chars, len(text))
        if end < len(text):
            period = text.rfind(".", start, end)
            if period != -1:
                end = period + 1
        chunks.append(text[start:end])
        start = end

    return chunks
