"""Pydantic v2 schemas for rooms."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from lodging.schemas.common import Instant


class RoomStatus(str, Enum):
    """Derived operational status of a room."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"
    BLOCKED = "BLOCKED"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomCreate(BaseModel):
    """Schema for creating a new room."""

    number: str = Field(..., min_length=1, max_length=20)
    room_type: str | None = Field(None, max_length=100)
    floor: int | None = None
    capacity: int = Field(2, ge=1)
    nightly_rate: Decimal | None = Field(None, ge=0)


class RoomUpdate(BaseModel):
    """Schema for partially updating a room. All fields optional.

    The manual flags may be changed here as well as through
    :class:`RoomFlagsUpdate`; ``status`` is derived and cannot be set.
    """

    number: str | None = Field(None, min_length=1, max_length=20)
    room_type: str | None = Field(None, max_length=100)
    floor: int | None = None
    capacity: int | None = Field(None, ge=1)
    nightly_rate: Decimal | None = Field(None, ge=0)
    blocked: bool | None = None
    under_maintenance: bool | None = None
    being_cleaned: bool | None = None


class AvailabilityQuery(BaseModel):
    """Date range (and optional party size) to search free rooms for."""

    check_in: Instant
    check_out: Instant
    min_capacity: int | None = Field(None, ge=1)


class RoomFlagsUpdate(BaseModel):
    """Toggle the manual control flags. Omitted flags are left untouched."""

    cleaning: bool | None = None
    maintenance: bool | None = None
    blocked: bool | None = None


# ---------------------------------------------------------------------------
# Stored record
# ---------------------------------------------------------------------------


class Room(BaseModel):
    """A room record as persisted in the ``rooms`` collection."""

    id: str
    number: str
    room_type: str | None = None
    floor: int | None = None
    capacity: int = 2
    nightly_rate: Decimal | None = None
    blocked: bool = False
    under_maintenance: bool = False
    being_cleaned: bool = False
    status: RoomStatus = RoomStatus.AVAILABLE
    created_at: Instant
    updated_at: Instant
