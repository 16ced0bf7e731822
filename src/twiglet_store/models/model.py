"""Model document: the entity-type catalogue a twiglet is drawn with."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from twiglet_store.models.base import DocumentBase
from twiglet_store.models.changelog import ChangelogEntry


class ModelEntity(BaseModel):
    """Definition of one entity type within a model."""

    model_config = ConfigDict(populate_by_name=True)

    class_: str = Field(alias="class")
    color: str | None = None
    image: str
    size: str | float | None = None
    type: str | None = None


class Model(DocumentBase):
    name: str
    entities: dict[str, ModelEntity] = Field(default_factory=dict)
    changelog: list[ChangelogEntry] = Field(default_factory=list)
