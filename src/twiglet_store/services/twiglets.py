"""Twiglet business logic: create (optionally as a clone) and model lookup."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from twiglet_store.errors import Result
from twiglet_store.models.twiglet import Twiglet

if TYPE_CHECKING:
    from twiglet_store.database.repositories.models import ModelRepository
    from twiglet_store.database.repositories.twiglets import TwigletRepository
    from twiglet_store.models.model import Model

logger = logging.getLogger(__name__)


async def clone_twiglet(
    twiglets_repo: TwigletRepository,
    source_name: str,
    new_name: str,
    new_description: str,
    commit_message: str,
    actor: str,
) -> Result[Twiglet]:
    """Create ``new_name`` from the graph and model reference of ``source_name``.

    Nodes and links are deep-copied, so later edits to either twiglet leave
    the other untouched. Name, description and changelog come from the
    caller, never from the source.
    """
    source = await twiglets_repo.find_by_name(source_name)
    if not source.ok:
        return source
    original = source.unwrap()

    clone = Twiglet(
        name=new_name,
        description=new_description,
        model=original.model,
        nodes=copy.deepcopy(original.nodes),
        links=copy.deepcopy(original.links),
    )
    created = await twiglets_repo.create(clone, commit_message, actor)
    if created.ok:
        logger.info("Cloned twiglet %s into %s", source_name, new_name)
    return created


async def create_twiglet(
    twiglets_repo: TwigletRepository,
    twiglet: Twiglet,
    commit_message: str,
    actor: str,
    *,
    clone_from: str | None = None,
) -> Result[Twiglet]:
    """Create ``twiglet``, seeding it from ``clone_from`` when one is given."""
    if clone_from:
        return await clone_twiglet(
            twiglets_repo,
            clone_from,
            twiglet.name,
            twiglet.description,
            commit_message,
            actor,
        )
    return await twiglets_repo.create(twiglet, commit_message, actor)


async def get_twiglet_model(
    twiglets_repo: TwigletRepository,
    models_repo: ModelRepository,
    name: str,
) -> Result[Model]:
    """Resolve the model a twiglet references by name."""
    twiglet = await twiglets_repo.find_by_name(name)
    if not twiglet.ok:
        return twiglet.propagate()
    return await models_repo.find_by_name(twiglet.unwrap().model)
