"""Repository modules for each Cosmos DB container."""

from twiglet_store.database.repositories.base import NamedDocumentRepository
from twiglet_store.database.repositories.models import ModelRepository
from twiglet_store.database.repositories.twiglets import TwigletRepository

__all__ = [
    "ModelRepository",
    "NamedDocumentRepository",
    "TwigletRepository",
]
