"""Optimistic-concurrency and changelog primitives shared by the repositories."""

from twiglet_store.core.changelog import append_entry, new_changelog
from twiglet_store.core.revisions import guarded_remove, guarded_update

__all__ = [
    "append_entry",
    "guarded_remove",
    "guarded_update",
    "new_changelog",
]
