"""Tests for the authentication middleware."""

from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from twiglet_store.auth.middleware import actor_name, get_user, require_authenticated_user


def test_get_user_returns_none_without_session():
    request = MagicMock()
    del request.session  # Simulate no session attribute
    assert get_user(request) is None


def test_get_user_returns_none_for_empty_session():
    request = MagicMock()
    request.session = {}
    assert get_user(request) is None


def test_get_user_returns_user_from_session():
    request = MagicMock()
    request.session = {"user": {"name": "Test User"}}
    user = get_user(request)
    assert user == {"name": "Test User"}


def test_require_authenticated_user_raises_401_without_user():
    request = MagicMock()
    request.session = {}
    with pytest.raises(HTTPException) as exc_info:
        require_authenticated_user(request)
    assert exc_info.value.status_code == 401


def test_require_authenticated_user_returns_user():
    request = MagicMock()
    request.session = {"user": {"name": "Test User"}}
    assert require_authenticated_user(request) == {"name": "Test User"}


@pytest.mark.parametrize(
    ("user", "expected"),
    [
        ({"id": "a@b.c", "name": "Alice"}, "Alice"),
        ({"id": "a@b.c"}, "a@b.c"),
        ({}, "unknown"),
    ],
)
def test_actor_name(user, expected):
    assert actor_name(user) == expected
