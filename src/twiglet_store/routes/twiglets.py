"""Twiglet routes: create (or clone), list, view, update, delete, changelog, model."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status

from twiglet_store.auth.middleware import actor_name, require_authenticated_user
from twiglet_store.database.repositories.models import ModelRepository
from twiglet_store.database.repositories.twiglets import TwigletRepository
from twiglet_store.models.twiglet import Twiglet
from twiglet_store.routes.dependencies import get_model_repository, get_twiglet_repository
from twiglet_store.routes.errors import raise_for_error
from twiglet_store.routes.models import model_view
from twiglet_store.routes.schemas import (
    ChangelogView,
    CreateTwigletRequest,
    DocumentSummary,
    ModelView,
    TwigletView,
    UpdateTwigletRequest,
)
from twiglet_store.services import twiglets as twiglets_svc

router = APIRouter(prefix="/twiglets", tags=["twiglets"])
logger = logging.getLogger(__name__)

Repository = Annotated[TwigletRepository, Depends(get_twiglet_repository)]
Models = Annotated[ModelRepository, Depends(get_model_repository)]
User = Annotated[dict[str, Any], Depends(require_authenticated_user)]


def twiglet_view(request: Request, twiglet: Twiglet) -> TwigletView:
    return TwigletView(
        name=twiglet.name,
        description=twiglet.description,
        model=twiglet.model,
        nodes=twiglet.nodes,
        links=twiglet.links,
        rev=twiglet.revision,
        url=str(request.url_for("get_twiglet", name=twiglet.name)),
        model_url=str(request.url_for("get_twiglet_model", name=twiglet.name)),
        changelog_url=str(request.url_for("get_twiglet_changelog", name=twiglet.name)),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TwigletView)
async def create_twiglet(
    request: Request,
    response: Response,
    payload: CreateTwigletRequest,
    repo: Repository,
    user: User,
) -> TwigletView:
    """Create a twiglet, or clone one when ``cloneTwiglet`` names a source."""
    twiglet = Twiglet(
        name=payload.name,
        description=payload.description,
        model=payload.model,
    )
    result = await twiglets_svc.create_twiglet(
        repo,
        twiglet,
        payload.commit_message,
        actor_name(user),
        clone_from=payload.clone_twiglet,
    )
    raise_for_error(result, action=f"Create twiglet {payload.name!r}")

    view = twiglet_view(request, result.unwrap())
    response.headers["Location"] = view.url
    logger.info(
        "Twiglet created: name=%s clone_of=%s by=%s",
        payload.name,
        payload.clone_twiglet,
        actor_name(user),
    )
    return view


@router.get("", response_model=list[DocumentSummary])
async def list_twiglets(request: Request, repo: Repository) -> list[DocumentSummary]:
    result = await repo.list_all()
    raise_for_error(result, action="List twiglets")
    return [
        DocumentSummary(
            name=twiglet.name,
            url=str(request.url_for("get_twiglet", name=twiglet.name)),
        )
        for twiglet in result.unwrap()
    ]


@router.get("/{name}", response_model=TwigletView)
async def get_twiglet(request: Request, name: str, repo: Repository) -> TwigletView:
    result = await repo.find_by_name(name)
    raise_for_error(result, action=f"Get twiglet {name!r}")
    return twiglet_view(request, result.unwrap())


@router.put("/{name}", response_model=TwigletView)
async def update_twiglet(
    request: Request,
    name: str,
    payload: UpdateTwigletRequest,
    repo: Repository,
    user: User,
) -> TwigletView:
    """Update a twiglet's graph and identity fields; 409 with ``_rev`` if stale."""
    changes = payload.model_dump(
        mode="json",
        include={"name", "description", "nodes", "links"},
        exclude_unset=True,
    )
    changes["name"] = payload.name
    result = await repo.update(
        name, payload.rev, changes, payload.commit_message, actor_name(user)
    )
    raise_for_error(result, action=f"Update twiglet {name!r}")
    logger.info("Twiglet updated: name=%s by=%s", name, actor_name(user))
    return twiglet_view(request, result.unwrap())


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_twiglet(name: str, repo: Repository, user: User) -> Response:
    result = await repo.delete(name)
    raise_for_error(result, action=f"Delete twiglet {name!r}")
    logger.info("Twiglet deleted: name=%s by=%s", name, actor_name(user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{name}/changelog", response_model=ChangelogView)
async def get_twiglet_changelog(name: str, repo: Repository) -> ChangelogView:
    result = await repo.changelog(name)
    raise_for_error(result, action=f"Get twiglet changelog {name!r}")
    return ChangelogView(changelog=result.unwrap())


@router.get("/{name}/model", response_model=ModelView, response_model_exclude_none=True)
async def get_twiglet_model(
    request: Request,
    name: str,
    repo: Repository,
    models: Models,
) -> ModelView:
    """Return the model the twiglet is drawn against."""
    result = await twiglets_svc.get_twiglet_model(repo, models, name)
    raise_for_error(result, action=f"Get model of twiglet {name!r}")
    return model_view(request, result.unwrap())
