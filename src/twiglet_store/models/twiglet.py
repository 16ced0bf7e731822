"""Twiglet document: a graph of nodes and links drawn against a model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from twiglet_store.models.base import DocumentBase
from twiglet_store.models.changelog import ChangelogEntry


class Twiglet(DocumentBase):
    name: str
    description: str = ""
    model: str
    nodes: list[dict[str, Any]] = Field(default_factory=list)
    links: list[dict[str, Any]] = Field(default_factory=list)
    changelog: list[ChangelogEntry] = Field(default_factory=list)
