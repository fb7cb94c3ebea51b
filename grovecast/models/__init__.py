"""Data models for Grovecast."""

from .article import Article
from .base import RecordModel
from .episode import PodcastEpisode

__all__ = ["Article", "PodcastEpisode", "RecordModel"]
