"""Revision guard: read-verify-write for every update and delete."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from twiglet_store.errors import Result, conflict

if TYPE_CHECKING:
    from twiglet_store.database.store import DocumentStore

logger = logging.getLogger(__name__)

Mutation = Callable[[dict[str, Any]], dict[str, Any]]


async def guarded_update(
    store: DocumentStore,
    current: dict[str, Any],
    supplied_revision: str,
    mutate: Mutation,
) -> Result[dict[str, Any]]:
    """Apply ``mutate`` to ``current`` and write it back if the revision still matches.

    ``current`` is the document as just resolved from the store. A stale
    ``supplied_revision`` fails with a conflict carrying the stored revision.
    If another writer gets in between resolve and write, the store's own etag
    check rejects the write and that conflict is returned as is; no retry is
    attempted. On success the document is re-read so the caller sees the new
    revision.
    """
    stored_revision = current.get("_etag")
    if supplied_revision != stored_revision:
        logger.debug(
            "Stale revision for id=%s supplied=%s stored=%s",
            current.get("id"),
            supplied_revision,
            stored_revision,
        )
        return conflict("Conflict, bad revision number", revision=stored_revision)

    updated = mutate(copy.deepcopy(current))
    updated["id"] = current["id"]
    updated["_etag"] = stored_revision

    written = await store.put(updated)
    if not written.ok:
        return written
    return await store.read(current["id"])


async def guarded_remove(store: DocumentStore, current: dict[str, Any]) -> Result[None]:
    """Remove ``current`` by internal id, conditional on its resolved revision."""
    return await store.remove(current["id"], current["_etag"])
