"""Data models for Cosmos DB document types."""

from twiglet_store.models.changelog import ChangelogEntry
from twiglet_store.models.model import Model, ModelEntity
from twiglet_store.models.twiglet import Twiglet

__all__ = [
    "ChangelogEntry",
    "Model",
    "ModelEntity",
    "Twiglet",
]
