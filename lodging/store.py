"""Entity store — key-value persistence for the guests, rooms and bookings collections.

A store only knows how to read and write a whole collection of JSON records.
Services re-read the collections they need on every call, change an in-memory
copy, and write the full collection back (last writer wins).

Two implementations are provided:

- ``InMemoryStore`` keeps JSON-compatible copies in a dict (tests, demos).
- ``DatabaseStore`` keeps one ``Collection`` row per name through SQLAlchemy.
"""

import copy
import logging
from collections.abc import Iterable
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session, sessionmaker

from lodging.database import init_db
from lodging.models.collection import Collection

logger = logging.getLogger(__name__)

GUESTS = "guests"
ROOMS = "rooms"
BOOKINGS = "bookings"

COLLECTIONS: tuple[str, ...] = (GUESTS, ROOMS, BOOKINGS)

ModelT = TypeVar("ModelT", bound=BaseModel)


class EntityStore(Protocol):
    """Capability the services depend on."""

    def read(self, collection: str) -> list[dict[str, Any]]: ...

    def write(self, collection: str, records: list[dict[str, Any]]) -> None: ...

    def initialize(self) -> None: ...


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'. Must be one of: {', '.join(COLLECTIONS)}")


class InMemoryStore:
    """Store backed by a plain dict. Reads and writes hand out deep copies."""

    def __init__(self) -> None:
        self._data: dict[str, list[dict[str, Any]]] = {}
        self.initialize()

    def initialize(self) -> None:
        for name in COLLECTIONS:
            self._data.setdefault(name, [])

    def read(self, collection: str) -> list[dict[str, Any]]:
        _check_collection(collection)
        return copy.deepcopy(self._data.get(collection, []))

    def write(self, collection: str, records: list[dict[str, Any]]) -> None:
        _check_collection(collection)
        self._data[collection] = copy.deepcopy(list(records))

    def clear(self) -> None:
        """Empty every collection."""
        for name in COLLECTIONS:
            self._data[name] = []


class DatabaseStore:
    """Store backed by the ``collections`` table, one JSON row per collection."""

    def __init__(self, factory: sessionmaker[Session]) -> None:
        self._session_factory = factory

    def initialize(self) -> None:
        """Create the table and an empty row for every missing collection."""
        init_db(self._session_factory.kw.get("bind"))
        with self._session_factory.begin() as session:
            for name in COLLECTIONS:
                if session.get(Collection, name) is None:
                    logger.info("Initializing empty collection %s", name)
                    session.add(Collection(name=name, records=[]))

    def read(self, collection: str) -> list[dict[str, Any]]:
        _check_collection(collection)
        with self._session_factory() as session:
            row = session.get(Collection, collection)
            if row is None:
                return []
            return copy.deepcopy(list(row.records))

    def write(self, collection: str, records: list[dict[str, Any]]) -> None:
        _check_collection(collection)
        with self._session_factory.begin() as session:
            row = session.get(Collection, collection)
            if row is None:
                session.add(Collection(name=collection, records=list(records)))
            else:
                # Assign a new list so the JSON column is flagged as changed.
                row.records = list(records)


def read_models(store: EntityStore, collection: str, model: type[ModelT]) -> list[ModelT]:
    """Read a collection and validate every record into ``model``."""
    return [model.model_validate(record) for record in store.read(collection)]


def write_models(store: EntityStore, collection: str, items: Iterable[BaseModel]) -> None:
    """Serialize models to JSON-compatible dicts and replace the collection."""
    store.write(collection, [item.model_dump(mode="json") for item in items])
