"""Authentication boundary: session-backed actor identity."""

from twiglet_store.auth.middleware import actor_name, get_user, require_authenticated_user

__all__ = ["actor_name", "get_user", "require_authenticated_user"]
