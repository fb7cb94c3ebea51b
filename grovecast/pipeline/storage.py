"""Persistent storage of finished episode audio."""

import re
import shutil
from pathlib import Path

_DISALLOWED_TITLE_CHARS = re.compile(r"[^a-zA-Z0-9\s_-]")


def sanitize_title(title: str) -> str:
    """Keep only letters, digits, whitespace, underscore and hyphen."""
    return _DISALLOWED_TITLE_CHARS.sub("", title)


def build_episode_filename(title: str, run_date: str, extension: str) -> str:
    """File name ``"<YYYY-MM-DD> <title>.<ext>"`` for an episode."""
    return f"{run_date} {sanitize_title(title)}.{extension.lstrip('.')}"


def persist_episode_audio(source: Path, episodes_dir: Path, filename: str) -> Path:
    """
    Move assembled audio into the episodes folder.

    An existing file with the same name is replaced.

    Returns:
        Final path of the episode audio
    """
    episodes_dir.mkdir(parents=True, exist_ok=True)
    target = episodes_dir / filename

    if target.exists():
        target.unlink()

    shutil.move(str(source), str(target))
    return target
