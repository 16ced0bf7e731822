"""FastAPI application factory and process entry point."""

from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from azure.monitor.opentelemetry import configure_azure_monitor
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from twiglet_store.config import load_settings
from twiglet_store.database.client import TenantDatabases
from twiglet_store.health import check_emulators
from twiglet_store.logging import configure_logging
from twiglet_store.routes import models, twiglets
from twiglet_store.routes.errors import register_error_handlers

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    logger.info("Twiglet store starting (env=%s)", settings.app.env)

    if settings.app.is_development and not await check_emulators(settings):
        raise RuntimeError("Cosmos DB emulator is not reachable")

    tenants = TenantDatabases(settings.cosmos)
    await tenants.initialize()
    app.state.tenants = tenants
    try:
        yield
    finally:
        logger.info("Twiglet store shutting down")
        await tenants.close()


def create_app() -> FastAPI:
    """Build the application with its routers, sessions and error handlers."""
    settings = load_settings()
    configure_logging(settings.app.log_level)

    if settings.monitor.connection_string:
        configure_azure_monitor(connection_string=settings.monitor.connection_string)
        logger.info("Azure Monitor OpenTelemetry configured")

    secret_key = settings.app.secret_key
    if not secret_key:
        logger.warning("SECRET_KEY is not set; sessions will not survive a restart")
        secret_key = secrets.token_urlsafe(32)

    app = FastAPI(title="twiglet-store", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        SessionMiddleware,
        secret_key=secret_key,
        https_only=not settings.app.is_development,
    )
    register_error_handlers(app)
    app.include_router(models.router)
    app.include_router(twiglets.router)
    return app


def main() -> None:
    """Entry point for ``twiglet-store``."""
    uvicorn.run("twiglet_store.app:create_app", factory=True, host="0.0.0.0", port=8000)  # noqa: S104


if __name__ == "__main__":
    main()
