"""Changelog recording: prepend one entry per successful create or update."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def _entry(message: str, actor: str, now: datetime | None) -> dict[str, str]:
    timestamp = (now or datetime.now(UTC)).isoformat()
    return {"message": message, "user": actor, "timestamp": timestamp}


def append_entry(
    document: dict[str, Any],
    message: str,
    actor: str,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Return ``document`` with a new entry at the head of its changelog.

    Existing entries are kept as they are; order is by position, newest first.
    """
    changelog = [_entry(message, actor, now), *document.get("changelog", [])]
    return {**document, "changelog": changelog}


def new_changelog(message: str, actor: str, *, now: datetime | None = None) -> list[dict[str, str]]:
    """Build the single-entry changelog written when a document is created."""
    return [_entry(message, actor, now)]
