"""Generic repository for documents addressed by a unique, human-readable name."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from twiglet_store.core.changelog import append_entry, new_changelog
from twiglet_store.core.revisions import guarded_remove, guarded_update
from twiglet_store.database.store import DocumentStore
from twiglet_store.errors import ErrorKind, Result, conflict, not_found
from twiglet_store.models.base import DocumentBase
from twiglet_store.models.changelog import ChangelogEntry

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

T = TypeVar("T", bound=DocumentBase)

logger = logging.getLogger(__name__)


class NamedDocumentRepository(Generic[T]):
    """CRUD by name on top of the revision guard and changelog recorder.

    Name uniqueness is a read-then-write check with no store-level index, so
    two concurrent creates (or renames) onto one name can both succeed.
    """

    container_name: ClassVar[str]
    model_class: ClassVar[type[DocumentBase]]
    update_fields: ClassVar[tuple[str, ...]] = ("name",)

    def __init__(self, database: DatabaseProxy) -> None:
        self._container = database.get_container_client(self.container_name)
        self._store = DocumentStore(self._container)

    def _validated(self, result: Result[dict[str, Any]]) -> Result[T]:
        if not result.ok:
            return result.propagate()
        return Result.success(self.model_class.model_validate(result.value))

    async def _resolve(self, name: str) -> Result[dict[str, Any]]:
        found = await self._store.find("name", name)
        if not found.ok:
            return found.propagate()
        if not found.value:
            return not_found()
        if len(found.value) > 1:
            logger.warning(
                "Name %r matches %d documents in %s; using the first",
                name,
                len(found.value),
                self.container_name,
            )
        return Result.success(found.value[0])

    async def _name_is_free(self, name: str) -> Result[None]:
        existing = await self._resolve(name)
        if existing.ok:
            return conflict(f"{name} already exists")
        if existing.error and existing.error.kind is ErrorKind.NOT_FOUND:
            return Result.success(None)
        return existing.propagate()

    async def find_by_name(self, name: str) -> Result[T]:
        """Fetch the live document called ``name``."""
        return self._validated(await self._resolve(name))

    async def list_all(self) -> Result[list[T]]:
        """Fetch every document, in whatever order the store yields them."""
        raw = await self._store.fetch_all()
        if not raw.ok:
            return raw.propagate()
        return Result.success(
            [self.model_class.model_validate(item) for item in raw.value or []]
        )

    async def create(self, document: T, commit_message: str, actor: str) -> Result[T]:
        """Persist a new document whose changelog holds only the creation entry."""
        free = await self._name_is_free(document.name)
        if not free.ok:
            return free.propagate()

        body = document.to_document()
        body["changelog"] = new_changelog(commit_message, actor)
        created = await self._store.create(body)
        if not created.ok:
            return created.propagate()
        return self._validated(await self._store.read(created.value["id"]))

    async def update(
        self,
        name: str,
        revision: str,
        changes: dict[str, Any],
        commit_message: str,
        actor: str,
    ) -> Result[T]:
        """Replace the updatable fields of ``name`` if ``revision`` is current."""
        current = await self._resolve(name)
        if not current.ok:
            return current.propagate()

        fields = {key: changes[key] for key in self.update_fields if key in changes}
        new_name = fields.get("name", name)
        if new_name != name and revision == current.value.get("_etag"):
            free = await self._name_is_free(new_name)
            if not free.ok:
                return free.propagate()

        def mutate(document: dict[str, Any]) -> dict[str, Any]:
            document.update(fields)
            document["updated_at"] = datetime.now(UTC).isoformat()
            return append_entry(document, commit_message, actor)

        written = await guarded_update(self._store, current.value, revision, mutate)
        return self._validated(written)

    async def delete(self, name: str) -> Result[None]:
        """Permanently remove ``name``; no tombstone is kept."""
        current = await self._resolve(name)
        if not current.ok:
            return current.propagate()
        return await guarded_remove(self._store, current.value)

    async def changelog(self, name: str) -> Result[list[ChangelogEntry]]:
        """Return the changelog of ``name``, newest entry first."""
        document = await self.find_by_name(name)
        if not document.ok:
            return document.propagate()
        return Result.success(list(document.value.changelog))
