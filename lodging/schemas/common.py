"""Shared schema types: instants, identifiers, pagination."""

import uuid
from datetime import date, datetime, time
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator


def new_id() -> str:
    """Return a fresh opaque record identifier (UUIDv4 text)."""
    return str(uuid.uuid4())


def _date_to_datetime(value: Any) -> Any:
    """Read a bare date (object or ``YYYY-MM-DD`` text) as midnight of that day."""
    if isinstance(value, str) and len(value) == 10:
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# Naive local date-time. All booking dates and timestamps use this type so
# they compare with each other and with ``lodging.clock.now()``.
Instant = Annotated[datetime, BeforeValidator(_date_to_datetime), AfterValidator(_to_local_naive)]


class Pagination(BaseModel):
    """Pagination metadata for 1-indexed pages."""

    total: int
    page: int
    page_size: int
    total_pages: int


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
