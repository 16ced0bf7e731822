"""In-memory stand-ins for the Cosmos DB async container and database proxies.

Each operation yields to the event loop once, so concurrent tasks interleave
at the same points they would against a real store.
"""

from __future__ import annotations

import asyncio
import copy
import re
import uuid
from collections.abc import AsyncIterator
from typing import Any

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError

_EQUALITY = re.compile(r"c\.(\w+) = @value")


class FakeContainer:
    """Mimics the parts of ``azure.cosmos.aio.ContainerProxy`` the store uses."""

    def __init__(self, container_id: str = "container") -> None:
        self.id = container_id
        self.items: dict[str, dict[str, Any]] = {}
        self.writes = 0

    def _stamp(self, body: dict[str, Any]) -> dict[str, Any]:
        self.writes += 1
        return {
            **copy.deepcopy(body),
            "_etag": f'"{uuid.uuid4()}"',
            "_rid": "rid",
            "_ts": self.writes,
        }

    def _existing(self, item: str) -> dict[str, Any]:
        if item not in self.items:
            raise CosmosHttpResponseError(status_code=404, message="Resource Not Found")
        return self.items[item]

    @staticmethod
    def _check(current: dict[str, Any], etag: str | None, match_condition: Any) -> None:
        if match_condition is MatchConditions.IfNotModified and current["_etag"] != etag:
            raise CosmosHttpResponseError(status_code=412, message="Precondition Failed")

    async def create_item(self, body: dict[str, Any], **_kwargs: Any) -> dict[str, Any]:
        await asyncio.sleep(0)
        if body["id"] in self.items:
            raise CosmosHttpResponseError(status_code=409, message="Conflict")
        self.items[body["id"]] = self._stamp(body)
        return copy.deepcopy(self.items[body["id"]])

    async def read_item(self, item: str, partition_key: str, **_kwargs: Any) -> dict[str, Any]:
        await asyncio.sleep(0)
        return copy.deepcopy(self._existing(item))

    async def replace_item(
        self,
        item: str,
        body: dict[str, Any],
        *,
        etag: str | None = None,
        match_condition: Any = None,
        **_kwargs: Any,
    ) -> dict[str, Any]:
        await asyncio.sleep(0)
        self._check(self._existing(item), etag, match_condition)
        self.items[item] = self._stamp(body)
        return copy.deepcopy(self.items[item])

    async def delete_item(
        self,
        item: str,
        partition_key: str,
        *,
        etag: str | None = None,
        match_condition: Any = None,
        **_kwargs: Any,
    ) -> None:
        await asyncio.sleep(0)
        self._check(self._existing(item), etag, match_condition)
        del self.items[item]

    def read_all_items(self, **_kwargs: Any) -> AsyncIterator[dict[str, Any]]:
        return self._iterate(list(self.items.values()))

    def query_items(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
        **_kwargs: Any,
    ) -> AsyncIterator[dict[str, Any]]:
        match = _EQUALITY.search(query)
        assert match is not None, f"unsupported query: {query}"
        field = match.group(1)
        value = (parameters or [{}])[0].get("value")
        return self._iterate([item for item in self.items.values() if item.get(field) == value])

    @staticmethod
    async def _iterate(items: list[dict[str, Any]]) -> AsyncIterator[dict[str, Any]]:
        await asyncio.sleep(0)
        for item in items:
            yield copy.deepcopy(item)


class FakeDatabase:
    def __init__(self) -> None:
        self.containers: dict[str, FakeContainer] = {}

    def get_container_client(self, name: str) -> FakeContainer:
        return self.containers.setdefault(name, FakeContainer(name))


class FakeTenants:
    """Stands in for ``TenantDatabases`` on ``app.state``."""

    def __init__(self) -> None:
        self.databases: dict[str, FakeDatabase] = {}

    async def database(self, tenant: str) -> FakeDatabase:
        return self.databases.setdefault(tenant, FakeDatabase())
