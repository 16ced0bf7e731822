"""Shared fixtures: fake Cosmos database, repositories and an HTTP client."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from fakes import FakeDatabase, FakeTenants
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from twiglet_store.auth.middleware import require_authenticated_user
from twiglet_store.database.repositories.models import ModelRepository
from twiglet_store.database.repositories.twiglets import TwigletRepository
from twiglet_store.routes import models, twiglets
from twiglet_store.routes.errors import register_error_handlers

TEST_USER = {"id": "twigtest@corp.riglet.io", "name": "twigtest@corp.riglet.io"}


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def model_repo(database: FakeDatabase) -> ModelRepository:
    return ModelRepository(database)


@pytest.fixture
def twiglet_repo(database: FakeDatabase) -> TwigletRepository:
    return TwigletRepository(database)


@pytest.fixture
def tenants() -> FakeTenants:
    return FakeTenants()


@pytest.fixture
def api(tenants: FakeTenants) -> FastAPI:
    """App with both routers over fake tenant databases; no lifespan."""
    app = FastAPI()
    app.state.settings = SimpleNamespace(app=SimpleNamespace(default_tenant="default"))
    app.state.tenants = tenants
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    register_error_handlers(app)
    app.include_router(models.router)
    app.include_router(twiglets.router)
    return app


@pytest.fixture
def anon_client(api: FastAPI) -> TestClient:
    return TestClient(api)


@pytest.fixture
def client(api: FastAPI) -> TestClient:
    """Client whose requests are authenticated as ``TEST_USER``."""

    def _user(_request: Request) -> dict:
        return TEST_USER

    api.dependency_overrides[require_authenticated_user] = _user
    return TestClient(api)
