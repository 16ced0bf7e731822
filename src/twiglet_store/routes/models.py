"""Model routes: create, list, view, update, delete, changelog."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status

from twiglet_store.auth.middleware import actor_name, require_authenticated_user
from twiglet_store.database.repositories.models import ModelRepository
from twiglet_store.models.model import Model
from twiglet_store.routes.dependencies import get_model_repository
from twiglet_store.routes.errors import raise_for_error
from twiglet_store.routes.schemas import (
    ChangelogView,
    CreateModelRequest,
    DocumentSummary,
    ModelView,
    UpdateModelRequest,
)

router = APIRouter(prefix="/models", tags=["models"])
logger = logging.getLogger(__name__)

Repository = Annotated[ModelRepository, Depends(get_model_repository)]
User = Annotated[dict[str, Any], Depends(require_authenticated_user)]


def model_view(request: Request, model: Model) -> ModelView:
    return ModelView(
        name=model.name,
        entities=model.entities,
        rev=model.revision,
        url=str(request.url_for("get_model", name=model.name)),
        changelog_url=str(request.url_for("get_model_changelog", name=model.name)),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ModelView,
    response_model_exclude_none=True,
)
async def create_model(
    request: Request,
    response: Response,
    payload: CreateModelRequest,
    repo: Repository,
    user: User,
) -> ModelView:
    """Create a model; 409 if the name is taken."""
    model = Model(name=payload.name, entities=payload.entities)
    result = await repo.create(model, payload.commit_message, actor_name(user))
    raise_for_error(result, action=f"Create model {payload.name!r}")

    view = model_view(request, result.unwrap())
    response.headers["Location"] = view.url
    logger.info("Model created: name=%s by=%s", payload.name, actor_name(user))
    return view


@router.get("", response_model=list[DocumentSummary])
async def list_models(request: Request, repo: Repository) -> list[DocumentSummary]:
    """List every model as ``{name, url}``, in store order."""
    result = await repo.list_all()
    raise_for_error(result, action="List models")
    return [
        DocumentSummary(name=model.name, url=str(request.url_for("get_model", name=model.name)))
        for model in result.unwrap()
    ]


@router.get("/{name}", response_model=ModelView, response_model_exclude_none=True)
async def get_model(request: Request, name: str, repo: Repository) -> ModelView:
    result = await repo.find_by_name(name)
    raise_for_error(result, action=f"Get model {name!r}")
    return model_view(request, result.unwrap())


@router.put("/{name}", response_model=ModelView, response_model_exclude_none=True)
async def update_model(
    request: Request,
    name: str,
    payload: UpdateModelRequest,
    repo: Repository,
    user: User,
) -> ModelView:
    """Replace a model's name and entities; 409 with the current ``_rev`` if stale."""
    changes = payload.model_dump(
        mode="json", by_alias=True, include={"name", "entities"}, exclude_none=True
    )
    result = await repo.update(
        name, payload.rev, changes, payload.commit_message, actor_name(user)
    )
    raise_for_error(result, action=f"Update model {name!r}")
    logger.info("Model updated: name=%s by=%s", name, actor_name(user))
    return model_view(request, result.unwrap())


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_model(name: str, repo: Repository, user: User) -> Response:
    result = await repo.delete(name)
    raise_for_error(result, action=f"Delete model {name!r}")
    logger.info("Model deleted: name=%s by=%s", name, actor_name(user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{name}/changelog", response_model=ChangelogView)
async def get_model_changelog(name: str, repo: Repository) -> ChangelogView:
    result = await repo.changelog(name)
    raise_for_error(result, action=f"Get model changelog {name!r}")
    return ChangelogView(changelog=result.unwrap())
