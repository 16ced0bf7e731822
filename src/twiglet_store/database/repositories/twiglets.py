"""Repository for the twiglets container (partitioned by /id)."""

from __future__ import annotations

from twiglet_store.database.client import TWIGLETS_CONTAINER
from twiglet_store.database.repositories.base import NamedDocumentRepository
from twiglet_store.models.twiglet import Twiglet


class TwigletRepository(NamedDocumentRepository[Twiglet]):
    container_name = TWIGLETS_CONTAINER
    model_class = Twiglet
    update_fields = ("name", "description", "nodes", "links")
