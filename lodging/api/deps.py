"""Shared API dependencies — single import point for all routers.

The entity store is built once from settings and handed to every request::

    from lodging.api.deps import get_store
"""

from lodging.config import settings
from lodging.database import session_factory
from lodging.store import DatabaseStore, EntityStore, InMemoryStore

_store: EntityStore | None = None


def build_store() -> EntityStore:
    """Create the store selected by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return InMemoryStore()
    return DatabaseStore(session_factory)


def get_store() -> EntityStore:
    """Return the process-wide store for FastAPI dependency injection.

    Usage::

        @router.get("/rooms")
        async def list_rooms(store: EntityStore = Depends(get_store)):
            ...
    """
    global _store
    if _store is None:
        _store = build_store()
    return _store


__all__ = [
    "build_store",
    "get_store",
]
