"""Session-scoped key/value storage.

Mirrors the browser's ``sessionStorage``.  Path-routed static sites use a
single slot, ``redirectPath``: each per-route redirect page writes the
path it was requested at, then sends the browser to the app root where
the dispatcher consumes the slot exactly once.
"""

from typing import Protocol

REDIRECT_KEY = "redirectPath"


class Storage(Protocol):
    """String key/value storage with ``sessionStorage`` semantics."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-memory ``Storage``; one instance per session."""

    __slots__ = ("_items",)

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


def consume_redirect(storage: Storage) -> str | None:
    """Read and clear the redirect slot. Returns None when unset."""
    path = storage.get_item(REDIRECT_KEY) or None
    if path is not None:
        storage.remove_item(REDIRECT_KEY)
    return path
