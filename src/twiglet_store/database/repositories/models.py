"""Repository for the organisation-models container (partitioned by /id)."""

from __future__ import annotations

from twiglet_store.database.client import MODELS_CONTAINER
from twiglet_store.database.repositories.base import NamedDocumentRepository
from twiglet_store.models.model import Model


class ModelRepository(NamedDocumentRepository[Model]):
    container_name = MODELS_CONTAINER
    model_class = Model
    update_fields = ("name", "entities")
