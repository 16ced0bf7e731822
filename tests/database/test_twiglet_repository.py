"""Tests for TwigletRepository against an in-memory container."""

import asyncio

from twiglet_store.database.client import TWIGLETS_CONTAINER
from twiglet_store.database.repositories.twiglets import TwigletRepository
from twiglet_store.errors import ErrorKind
from twiglet_store.models.twiglet import Twiglet


def _twiglet(name: str = "twig-a") -> Twiglet:
    return Twiglet(name=name, description="foo bar baz", model="model-a")


class TestTwigletRepository:
    """Test the Twiglet Repository."""

    async def test_create_starts_with_empty_graph(self, twiglet_repo: TwigletRepository) -> None:
        created = (await twiglet_repo.create(_twiglet(), "fee fie fo fum", "alice")).unwrap()

        assert created.nodes == []
        assert created.links == []
        assert created.model == "model-a"
        assert [entry.message for entry in created.changelog] == ["fee fie fo fum"]

    async def test_update_replaces_graph_and_identity(
        self, twiglet_repo: TwigletRepository
    ) -> None:
        """Verify name, description, nodes and links are replaced; model is kept."""
        created = (await twiglet_repo.create(_twiglet(), "create", "alice")).unwrap()

        updated = (
            await twiglet_repo.update(
                "twig-a",
                created.revision,
                {
                    "name": "a different name",
                    "description": "a different description",
                    "nodes": [{"a": "node"}],
                    "links": [{"a": "link"}],
                    "model": "ignored",
                },
                "this was totally updated!",
                "bob",
            )
        ).unwrap()

        assert updated.name == "a different name"
        assert updated.description == "a different description"
        assert updated.nodes == [{"a": "node"}]
        assert updated.links == [{"a": "link"}]
        assert updated.model == "model-a"
        assert updated.changelog[0].message == "this was totally updated!"

    async def test_duplicate_name_conflicts(self, twiglet_repo: TwigletRepository) -> None:
        await twiglet_repo.create(_twiglet("dup"), "first", "alice")

        second = await twiglet_repo.create(_twiglet("dup"), "second", "alice")

        assert second.error is not None
        assert second.error.kind is ErrorKind.CONFLICT

    async def test_delete_then_recreate_same_name(self, twiglet_repo: TwigletRepository) -> None:
        """Verify a deleted name is free again and the new document is distinct."""
        first = (await twiglet_repo.create(_twiglet(), "first", "alice")).unwrap()
        await twiglet_repo.delete("twig-a")

        second = (await twiglet_repo.create(_twiglet(), "second", "alice")).unwrap()

        assert second.id != first.id
        assert len(second.changelog) == 1

    async def test_delete_after_update_with_old_view_still_deletes(
        self, twiglet_repo: TwigletRepository
    ) -> None:
        """Verify delete resolves the current revision itself."""
        created = (await twiglet_repo.create(_twiglet(), "create", "alice")).unwrap()
        await twiglet_repo.update("twig-a", created.revision, {"nodes": [{"a": 1}]}, "m", "bob")

        result = await twiglet_repo.delete("twig-a")

        assert result.ok

    async def test_racing_creates_leave_documents_intact(
        self, twiglet_repo: TwigletRepository, database
    ) -> None:
        """Verify concurrent same-name creates never corrupt what they store."""
        results = await asyncio.gather(
            twiglet_repo.create(_twiglet("race"), "first", "alice"),
            twiglet_repo.create(_twiglet("race"), "second", "bob"),
        )

        assert any(result.ok for result in results)
        for result in results:
            if not result.ok:
                assert result.error is not None
                assert result.error.kind is ErrorKind.CONFLICT
        stored = database.containers[TWIGLETS_CONTAINER].items.values()
        for item in stored:
            twiglet = Twiglet.model_validate(item)
            assert twiglet.name == "race"
            assert twiglet.model == "model-a"
            assert len(twiglet.changelog) == 1
