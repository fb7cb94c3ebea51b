"""Local JSON library of queued articles and generated episodes."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..models import Article, PodcastEpisode


class LibraryData(BaseModel):
    """On-disk library document."""

    articles: List[Article] = Field(default_factory=list)
    podcasts: List[PodcastEpisode] = Field(default_factory=list)


class Library:
    """Article queue and podcast list, saved after every change."""

    def __init__(self, path: Path, max_articles: int = 5) -> None:
        """Initialize library backed by ``path``."""
        self.path = path
        self.max_articles = max_articles
        self._data: Optional[LibraryData] = None

    @property
    def data(self) -> LibraryData:
        """Get loaded library."""
        if self._data is None:
            self._data = load_library(self.path)
        return self._data

    @property
    def articles(self) -> List[Article]:
        return list(self.data.articles)

    @property
    def podcasts(self) -> List[PodcastEpisode]:
        return list(self.data.podcasts)

    @property
    def is_full(self) -> bool:
        return len(self.data.articles) >= self.max_articles

    def save(self) -> None:
        save_library(self.data, self.path)

    def find_article(self, key: str) -> Optional[Article]:
        """Find an article by 1-based queue position or id prefix."""
        return _find(self.data.articles, key)

    def find_podcast(self, key: str) -> Optional[PodcastEpisode]:
        """Find an episode by 1-based list position or id prefix."""
        return _find(self.data.podcasts, key)

    def add_article(self, article: Article) -> bool:
        """Append an article; returns False when the queue is full."""
        if self.is_full:
            return False
        self.data.articles.append(article)
        self.save()
        return True

    def update_article(self, article: Article) -> bool:
        """Replace the stored article with the same id."""
        for i, existing in enumerate(self.data.articles):
            if existing.id == article.id:
                self.data.articles[i] = article
                self.save()
                return True
        return False

    def remove_article(self, article: Article) -> None:
        self.data.articles = [a for a in self.data.articles if a.id != article.id]
        self.save()

    def clear_queue(self) -> None:
        self.data.articles = []
        self.save()

    def add_podcast(self, episode: PodcastEpisode) -> None:
        """Record an episode; newest first."""
        self.data.podcasts.insert(0, episode)
        self.save()

    def remove_podcast(self, episode: PodcastEpisode) -> None:
        self.data.podcasts = [p for p in self.data.podcasts if p.id != episode.id]
        self.save()


def _find(records, key: str):
    key = key.strip()
    if key.isdigit():
        position = int(key)
        if 1 <= position <= len(records):
            return records[position - 1]
        return None

    matches = [r for r in records if str(r.id).startswith(key.lower())]
    return matches[0] if len(matches) == 1 else None


def load_library(path: Path) -> LibraryData:
    """Load library from JSON file; a missing file is an empty library."""
    if not path.exists():
        return LibraryData()

    try:
        return LibraryData.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ValueError(f"Invalid library file {path}: {e}")


def save_library(data: LibraryData, path: Path) -> None:
    """Save library to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
