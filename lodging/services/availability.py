"""Availability engine — derived room status and date-range conflict detection.

Pure functions over already-loaded rooms and bookings; nothing here touches
the store.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from lodging import clock
from lodging.schemas.booking import Booking
from lodging.schemas.room import Room, RoomStatus


def compute_room_status(
    room: Room,
    bookings: Iterable[Booking],
    as_of: date | datetime | None = None,
) -> RoomStatus:
    """Derive a room's operational status.

    Manual flags win over bookings, in the order blocked, maintenance,
    cleaning. Otherwise the room is occupied when a non-terminal booking's
    window, from check-in day 00:00 through the end of check-out day, contains
    ``as_of`` (today by default). A date-time ``as_of`` is read as its calendar day.
    """
    if room.blocked:
        return RoomStatus.BLOCKED
    if room.under_maintenance:
        return RoomStatus.MAINTENANCE
    if room.being_cleaned:
        return RoomStatus.CLEANING

    if as_of is None:
        day = clock.today()
    elif isinstance(as_of, datetime):
        day = as_of.date()
    else:
        day = as_of

    for booking in bookings:
        if booking.room_id != room.id or booking.is_terminal:
            continue
        if booking.check_in.date() <= day <= booking.check_out.date():
            return RoomStatus.OCCUPIED

    return RoomStatus.AVAILABLE


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open interval overlap: [a) and [b) intersect iff a.start < b.end and b.start < a.end."""
    return start_a < end_b and start_b < end_a


def find_conflict(
    room_id: str,
    check_in: datetime,
    check_out: datetime,
    bookings: Iterable[Booking],
    exclude_booking_id: str | None = None,
) -> Booking | None:
    """Return the first non-terminal booking of ``room_id`` overlapping the range."""
    for booking in bookings:
        if booking.room_id != room_id or booking.is_terminal:
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if overlaps(check_in, check_out, booking.check_in, booking.check_out):
            return booking
    return None


def has_conflict(
    room_id: str,
    check_in: datetime,
    check_out: datetime,
    bookings: Iterable[Booking],
    exclude_booking_id: str | None = None,
) -> bool:
    """True if booking ``room_id`` for [check_in, check_out) would double-book it.

    Back-to-back stays (one checks out the day the next checks in) do not
    conflict.
    """
    return find_conflict(room_id, check_in, check_out, bookings, exclude_booking_id) is not None


def count_nights(check_in: datetime, check_out: datetime) -> int:
    """Number of nights billed: whole days between the instants, rounded up."""
    return math.ceil(abs(check_out - check_in) / timedelta(days=1))
