"""Request-scoped dependencies: tenant resolution and repository construction."""

from __future__ import annotations

import re
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from twiglet_store.database.repositories.models import ModelRepository
from twiglet_store.database.repositories.twiglets import TwigletRepository

_TENANT_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{0,62}$")


def get_tenant(
    request: Request,
    x_tenant: Annotated[str | None, Header()] = None,
) -> str:
    """Return the tenant named by ``X-Tenant``, or the configured default."""
    tenant = (x_tenant or request.app.state.settings.app.default_tenant).lower()
    if not _TENANT_PATTERN.match(tenant):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant {tenant!r}",
        )
    return tenant


async def get_model_repository(
    request: Request,
    tenant: Annotated[str, Depends(get_tenant)],
) -> ModelRepository:
    database = await request.app.state.tenants.database(tenant)
    return ModelRepository(database)


async def get_twiglet_repository(
    request: Request,
    tenant: Annotated[str, Depends(get_tenant)],
) -> TwigletRepository:
    database = await request.app.state.tenants.database(tenant)
    return TwigletRepository(database)
