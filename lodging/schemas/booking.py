"""Pydantic v2 schemas for bookings."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from lodging.schemas.common import Instant


class BookingStatus(str, Enum):
    """Lifecycle status of a booking. Any status may be set to any other."""

    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"
    COMPLETED = "COMPLETED"


# Excluded from conflict detection and occupancy.
TERMINAL_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.CANCELLED, BookingStatus.NO_SHOW, BookingStatus.COMPLETED}
)

# Keep a room from being deleted.
ACTIVE_STATUSES: frozenset[BookingStatus] = frozenset({BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS})

# Count towards revenue.
REVENUE_STATUSES: frozenset[BookingStatus] = frozenset({BookingStatus.COMPLETED, BookingStatus.IN_PROGRESS})

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking.

    The room is given either by ``room_id`` or by ``room_number``; when both are
    present the id wins. Date ordering, past dates and capacity are checked by
    the booking service once the room is resolved.
    """

    guest_id: str = Field(..., min_length=1)
    room_id: str | None = None
    room_number: str | None = None
    check_in: Instant
    check_out: Instant
    rate: Decimal = Field(..., ge=0)
    guest_count: int = Field(1, ge=1)
    status: BookingStatus = BookingStatus.CONFIRMED
    notes: str | None = None

    @model_validator(mode="after")
    def check_room_reference(self) -> "BookingCreate":
        """Require a room id or a room number."""
        if not self.room_id and not self.room_number:
            raise ValueError("room_id or room_number is required")
        return self


class BookingUpdate(BaseModel):
    """Schema for partially updating a booking. All fields optional."""

    guest_id: str | None = Field(None, min_length=1)
    room_id: str | None = None
    room_number: str | None = None
    check_in: Instant | None = None
    check_out: Instant | None = None
    rate: Decimal | None = Field(None, ge=0)
    guest_count: int | None = Field(None, ge=1)
    status: BookingStatus | None = None
    notes: str | None = None


class BookingQuery(BaseModel):
    """Filters for listing bookings. Date bounds apply to check-in, inclusive."""

    status: BookingStatus | None = None
    date_from: Instant | None = None
    date_to: Instant | None = None


# ---------------------------------------------------------------------------
# Stored record
# ---------------------------------------------------------------------------


class Booking(BaseModel):
    """A booking record as persisted in the ``bookings`` collection."""

    id: str
    guest_id: str
    room_id: str
    room_number: str
    check_in: Instant
    check_out: Instant
    status: BookingStatus = BookingStatus.CONFIRMED
    rate: Decimal
    total: Decimal
    guest_count: int = 1
    notes: str | None = None
    created_at: Instant
    updated_at: Instant

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
