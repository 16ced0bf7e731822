"""Request and response payloads for the model and twiglet routes."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from twiglet_store.models.changelog import ChangelogEntry
from twiglet_store.models.model import ModelEntity

# Names become a single URL path segment.
DocumentName = Annotated[str, Field(min_length=1, pattern=r"^[^/]+$")]


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateModelRequest(_Payload):
    name: DocumentName
    entities: dict[str, ModelEntity] = Field(default_factory=dict)
    commit_message: str = Field(alias="commitMessage")


class UpdateModelRequest(CreateModelRequest):
    rev: str = Field(alias="_rev")


class ModelView(_Payload):
    name: str
    entities: dict[str, ModelEntity]
    rev: str | None = Field(default=None, alias="_rev")
    url: str
    changelog_url: str


class CreateTwigletRequest(_Payload):
    name: DocumentName
    description: str = ""
    model: str
    commit_message: str = Field(alias="commitMessage")
    clone_twiglet: str | None = Field(default=None, alias="cloneTwiglet")


class UpdateTwigletRequest(_Payload):
    name: DocumentName
    description: str = ""
    nodes: list[dict[str, Any]] = Field(default_factory=list)
    links: list[dict[str, Any]] = Field(default_factory=list)
    commit_message: str = Field(alias="commitMessage")
    rev: str = Field(alias="_rev")


class TwigletView(_Payload):
    name: str
    description: str
    model: str
    nodes: list[dict[str, Any]]
    links: list[dict[str, Any]]
    rev: str | None = Field(default=None, alias="_rev")
    url: str
    model_url: str
    changelog_url: str


class DocumentSummary(BaseModel):
    name: str
    url: str


class ChangelogView(BaseModel):
    changelog: list[ChangelogEntry]
