"""Document store adapter over a single Cosmos DB container (partitioned by /id)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError

from twiglet_store.errors import ErrorKind, Result, conflict, not_found
from twiglet_store.models.base import SYSTEM_PROPERTIES

if TYPE_CHECKING:
    from azure.cosmos.aio import ContainerProxy

logger = logging.getLogger(__name__)

_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409
_HTTP_PRECONDITION_FAILED = 412


def _strip_system(body: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in body.items() if k not in SYSTEM_PROPERTIES}


class DocumentStore:
    """Raw create/read/list/put/remove against one container.

    No domain logic lives here. Every Cosmos error is classified into a
    ``Result`` failure; anything that is not a 404, 409 or 412 is reported as
    a store failure.
    """

    def __init__(self, container: ContainerProxy) -> None:
        self._container = container

    async def fetch_all(self) -> Result[list[dict[str, Any]]]:
        """Return every document with its body, in store iteration order."""
        try:
            items = [
                cast("dict[str, Any]", item)
                async for item in self._container.read_all_items()
            ]
        except CosmosHttpResponseError as exc:
            return self._failure("fetch_all", exc)
        return Result.success(items)

    async def find(self, field: str, value: Any) -> Result[list[dict[str, Any]]]:
        """Return documents whose top-level ``field`` equals ``value``."""
        try:
            items = [
                cast("dict[str, Any]", item)
                async for item in self._container.query_items(
                    f"SELECT * FROM c WHERE c.{field} = @value",
                    parameters=[{"name": "@value", "value": value}],
                )
            ]
        except CosmosHttpResponseError as exc:
            return self._failure("find", exc)
        return Result.success(items)

    async def read(self, internal_id: str) -> Result[dict[str, Any]]:
        try:
            item = await self._container.read_item(item=internal_id, partition_key=internal_id)
        except CosmosHttpResponseError as exc:
            return self._failure("read", exc)
        return Result.success(cast("dict[str, Any]", item))

    async def create(self, body: dict[str, Any]) -> Result[dict[str, Any]]:
        """Insert a new document; a duplicate internal id is a conflict."""
        try:
            item = await self._container.create_item(body=_strip_system(body))
        except CosmosHttpResponseError as exc:
            return self._failure("create", exc)
        return Result.success(cast("dict[str, Any]", item))

    async def put(self, body: dict[str, Any]) -> Result[dict[str, Any]]:
        """Replace a document only if its stored etag still equals ``body["_etag"]``."""
        revision = body.get("_etag")
        if not isinstance(revision, str):
            return conflict("Document has no revision to compare against")
        try:
            item = await self._container.replace_item(
                item=body["id"],
                body=_strip_system(body),
                etag=revision,
                match_condition=MatchConditions.IfNotModified,
            )
        except CosmosHttpResponseError as exc:
            return self._failure("put", exc)
        return Result.success(cast("dict[str, Any]", item))

    async def remove(self, internal_id: str, revision: str) -> Result[None]:
        """Delete a document only if its stored etag still equals ``revision``."""
        try:
            await self._container.delete_item(
                item=internal_id,
                partition_key=internal_id,
                etag=revision,
                match_condition=MatchConditions.IfNotModified,
            )
        except CosmosHttpResponseError as exc:
            return self._failure("remove", exc)
        return Result.success(None)

    def _failure(self, operation: str, exc: CosmosHttpResponseError) -> Result:
        if exc.status_code == _HTTP_NOT_FOUND:
            return not_found()
        if exc.status_code == _HTTP_CONFLICT:
            return conflict("Document already exists")
        if exc.status_code == _HTTP_PRECONDITION_FAILED:
            return conflict("Conflict, bad revision number")
        logger.error(
            "Cosmos %s failed on container=%s status=%s",
            operation,
            getattr(self._container, "id", "?"),
            exc.status_code,
            exc_info=True,
        )
        return Result.failure(ErrorKind.STORE_FAILURE, exc.message or "Storage failure")
