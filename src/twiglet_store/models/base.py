"""Shared base for every document stored in Cosmos DB."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

# Properties owned by Cosmos DB; never sent back on writes.
SYSTEM_PROPERTIES = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DocumentBase(BaseModel):
    """Fields common to every document: identity, revision and timestamps."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    etag: str | None = Field(default=None, alias="_etag")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def revision(self) -> str | None:
        """The opaque revision token assigned by the store."""
        return self.etag

    def to_document(self) -> dict:
        """Serialise to a storable body, without store-managed properties."""
        return self.model_dump(mode="json", by_alias=True, exclude={"etag"})
