"""Read-time joins returned by the services.

Bookings only store ``guest_id``/``room_id`` (plus ``room_number``); the
related guest and room are attached when a result is built so they are never
stale.
"""

from pydantic import BaseModel

from lodging.schemas.booking import Booking
from lodging.schemas.common import Pagination
from lodging.schemas.guest import Guest
from lodging.schemas.room import Room


class BookingWithGuest(Booking):
    """Booking plus the guest who made it (``None`` if the guest is gone)."""

    guest: Guest | None = None


class BookingDetail(BookingWithGuest):
    """Booking plus guest and room snapshots."""

    room: Room | None = None


class GuestDetail(Guest):
    """Guest plus their bookings, most recent check-in first."""

    bookings: list[Booking] = []


class GuestListResponse(BaseModel):
    """One page of guests."""

    items: list[GuestDetail]
    pagination: Pagination
