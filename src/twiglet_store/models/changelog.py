"""Changelog entry: one immutable record of a create or update."""

from __future__ import annotations

from pydantic import BaseModel


class ChangelogEntry(BaseModel):
    message: str
    user: str
    timestamp: str
