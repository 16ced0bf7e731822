"""Async Cosmos DB client and the per-tenant database handle pool."""

from __future__ import annotations

import asyncio
import logging

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient
from azure.cosmos.aio import DatabaseProxy

from twiglet_store.config import CosmosConfig

logger = logging.getLogger(__name__)

MODELS_CONTAINER = "organisation-models"
TWIGLETS_CONTAINER = "twiglets"

_CONTAINERS = (MODELS_CONTAINER, TWIGLETS_CONTAINER)


class TenantDatabases:
    """Owns the Cosmos client and lazily provisions one database per tenant.

    Handles are opened on first use and cached for the lifetime of the
    process; ``close()`` drops them along with the client.
    """

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._databases: dict[str, DatabaseProxy] = {}
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Create the underlying client."""
        self._client = AzureCosmosClient(self._config.endpoint, credential=self._config.key)

    async def close(self) -> None:
        """Close the underlying client and forget every tenant handle."""
        if self._client:
            await self._client.close()
            self._client = None
        self._databases.clear()

    async def database(self, tenant: str) -> DatabaseProxy:
        """Return the tenant's database, provisioning it on first use."""
        cached = self._databases.get(tenant)
        if cached is not None:
            return cached
        if self._client is None:
            raise RuntimeError("TenantDatabases not initialized; call initialize() first")

        async with self._lock:
            cached = self._databases.get(tenant)
            if cached is not None:
                return cached
            name = self._config.database_name(tenant)
            database = await self._client.create_database_if_not_exists(id=name)
            for container in _CONTAINERS:
                await database.create_container_if_not_exists(
                    id=container, partition_key=PartitionKey(path="/id")
                )
            self._databases[tenant] = database
            logger.info("Opened tenant database %s", name)
            return database
