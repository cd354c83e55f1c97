"""Booking service — creation, change and removal of bookings.

Every write re-validates the room's calendar through the availability engine
and then refreshes the derived status of the rooms involved. Status changes
are not restricted: any status may be set to any other.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any

from lodging import clock
from lodging.exceptions import ConflictError, NotFoundError, ValidationError
from lodging.schemas.booking import (
    TERMINAL_STATUSES,
    Booking,
    BookingCreate,
    BookingQuery,
    BookingStatus,
    BookingUpdate,
)
from lodging.schemas.common import new_id
from lodging.schemas.guest import Guest
from lodging.schemas.room import Room
from lodging.schemas.views import BookingDetail
from lodging.services.availability import count_nights, find_conflict
from lodging.services.common import find_record, parse_input
from lodging.services.room_service import refresh_room_status, refresh_room_statuses
from lodging.store import BOOKINGS, GUESTS, ROOMS, EntityStore, read_models, write_models

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_room(rooms: list[Room], room_id: str | None, room_number: str | None) -> Room:
    """Find a room by id, or by number when no id is given."""
    room = None
    if room_id:
        room = next((r for r in rooms if r.id == room_id), None)
    elif room_number:
        room = next((r for r in rooms if r.number == room_number), None)
    if room is None:
        raise NotFoundError("Room not found")
    return room


def _check_stay(room: Room, check_in: datetime, check_out: datetime, guest_count: int) -> None:
    """Validate date order and party size against the room."""
    if check_out <= check_in:
        raise ValidationError("check_out must be after check_in")
    if guest_count > room.capacity:
        raise ValidationError(f"Room {room.number} holds at most {room.capacity} guest(s)")


def _check_calendar(
    room: Room,
    check_in: datetime,
    check_out: datetime,
    bookings: list[Booking],
    guests: list[Guest],
    exclude_booking_id: str | None = None,
) -> None:
    """Raise ConflictError describing the existing stay if the range is taken."""
    conflict = find_conflict(room.id, check_in, check_out, bookings, exclude_booking_id)
    if conflict is None:
        return
    holder = next((g.name for g in guests if g.id == conflict.guest_id), "unknown guest")
    raise ConflictError(
        f"Room {room.number} is already booked from "
        f"{conflict.check_in.strftime(DATE_FORMAT)} to {conflict.check_out.strftime(DATE_FORMAT)} ({holder})"
    )


def _is_bare_date(value: object) -> bool:
    """True for a date without a time part, as an object or ``YYYY-MM-DD`` text."""
    if isinstance(value, str):
        return len(value) == 10
    return isinstance(value, date) and not isinstance(value, datetime)


def _with_relations(booking: Booking, guests: list[Guest], rooms: list[Room]) -> BookingDetail:
    return BookingDetail(
        **booking.model_dump(),
        guest=next((g for g in guests if g.id == booking.guest_id), None),
        room=next((r for r in rooms if r.id == booking.room_id), None),
    )


def _detail(store: EntityStore, booking: Booking) -> BookingDetail:
    """Attach the current guest and room snapshots to a booking."""
    return _with_relations(
        booking,
        read_models(store, GUESTS, Guest),
        read_models(store, ROOMS, Room),
    )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def list_bookings(
    store: EntityStore,
    status: BookingStatus | str | None = None,
    date_from: date | datetime | str | None = None,
    date_to: date | datetime | str | None = None,
) -> list[BookingDetail]:
    """Bookings filtered by status and check-in range, latest check-in first.

    Both bounds are inclusive. A bare date as ``date_to`` covers that whole day.
    """
    query = parse_input(BookingQuery, {"status": status, "date_from": date_from, "date_to": date_to})

    bookings = read_models(store, BOOKINGS, Booking)
    if query.status is not None:
        bookings = [b for b in bookings if b.status == query.status]
    if query.date_from is not None:
        bookings = [b for b in bookings if b.check_in >= query.date_from]
    if query.date_to is not None:
        if _is_bare_date(date_to):
            day_after = query.date_to + timedelta(days=1)
            bookings = [b for b in bookings if b.check_in < day_after]
        else:
            bookings = [b for b in bookings if b.check_in <= query.date_to]

    guests = read_models(store, GUESTS, Guest)
    rooms = read_models(store, ROOMS, Room)
    results = [_with_relations(b, guests, rooms) for b in bookings]
    return sorted(results, key=lambda b: b.check_in, reverse=True)


def get_booking(store: EntityStore, booking_id: str) -> BookingDetail:
    """Return a booking with its guest and room."""
    bookings = read_models(store, BOOKINGS, Booking)
    _, booking = find_record(bookings, booking_id, "Booking")
    return _detail(store, booking)


def create_booking(store: EntityStore, data: BookingCreate | Mapping[str, Any]) -> BookingDetail:
    """Book a room for a guest.

    Validates, in order: required fields, the guest, the room, date order,
    that check-in is not before today, the room's capacity, and that the room
    is free for [check_in, check_out). The total is the nightly rate times the
    number of nights, rounded up to whole days.
    """
    body = parse_input(BookingCreate, data)

    guests = read_models(store, GUESTS, Guest)
    rooms = read_models(store, ROOMS, Room)
    bookings = read_models(store, BOOKINGS, Booking)

    find_record(guests, body.guest_id, "Guest")
    room = _resolve_room(rooms, body.room_id, body.room_number)

    if body.check_out <= body.check_in:
        raise ValidationError("check_out must be after check_in")
    if body.check_in.date() < clock.today():
        raise ValidationError("Cannot create a booking with a check-in in the past")
    _check_stay(room, body.check_in, body.check_out, body.guest_count)
    _check_calendar(room, body.check_in, body.check_out, bookings, guests)

    nights = count_nights(body.check_in, body.check_out)
    now = clock.now()
    booking = Booking(
        id=new_id(),
        guest_id=body.guest_id,
        room_id=room.id,
        room_number=room.number,
        check_in=body.check_in,
        check_out=body.check_out,
        status=body.status,
        rate=body.rate,
        total=body.rate * nights,
        guest_count=body.guest_count,
        notes=body.notes,
        created_at=now,
        updated_at=now,
    )
    bookings.append(booking)
    write_models(store, BOOKINGS, bookings)

    logger.info(
        "Created booking %s: room %s, %s -> %s (%d night(s))",
        booking.id,
        room.number,
        booking.check_in.date(),
        booking.check_out.date(),
        nights,
    )
    refresh_room_status(store, room.id)
    return _detail(store, booking)


def update_booking(store: EntityStore, booking_id: str, patch: BookingUpdate | Mapping[str, Any]) -> BookingDetail:
    """Partially update a booking.

    A change of room, dates or party size (or bringing a cancelled, no-show or
    completed booking back to life) re-runs the room, capacity and calendar
    checks, ignoring the booking itself. A change of rate or dates recomputes
    the total.
    """
    body = parse_input(BookingUpdate, patch)
    update_data = body.model_dump(exclude_unset=True)

    bookings = read_models(store, BOOKINGS, Booking)
    index, booking = find_record(bookings, booking_id, "Booking")
    guests = read_models(store, GUESTS, Guest)
    rooms = read_models(store, ROOMS, Room)

    if "guest_id" in update_data and update_data["guest_id"] != booking.guest_id:
        find_record(guests, update_data["guest_id"], "Guest")

    room_changed = "room_id" in update_data or "room_number" in update_data
    dates_changed = "check_in" in update_data or "check_out" in update_data
    status = update_data.get("status") or booking.status
    reactivated = booking.is_terminal and status not in TERMINAL_STATUSES

    check_in = update_data.get("check_in") or booking.check_in
    check_out = update_data.get("check_out") or booking.check_out

    if room_changed or dates_changed or "guest_count" in update_data or reactivated:
        if update_data.get("room_id"):
            room = _resolve_room(rooms, update_data["room_id"], None)
        elif update_data.get("room_number"):
            room = _resolve_room(rooms, None, update_data["room_number"])
        else:
            room = _resolve_room(rooms, booking.room_id, None)

        guest_count = update_data.get("guest_count") or booking.guest_count
        _check_stay(room, check_in, check_out, guest_count)
        if status not in TERMINAL_STATUSES:
            _check_calendar(room, check_in, check_out, bookings, guests, exclude_booking_id=booking_id)

        update_data["room_id"] = room.id
        update_data["room_number"] = room.number

    if "rate" in update_data or dates_changed:
        rate = update_data.get("rate")
        if rate is None:
            rate = booking.rate
        update_data["total"] = rate * count_nights(check_in, check_out)

    updated = parse_input(Booking, {**booking.model_dump(), **update_data, "updated_at": clock.now()})
    bookings[index] = updated
    write_models(store, BOOKINGS, bookings)

    if updated.room_id != booking.room_id:
        logger.info("Booking %s moved from room %s to %s", booking_id, booking.room_number, updated.room_number)
    refresh_room_statuses(store, {booking.room_id, updated.room_id})
    return _detail(store, updated)


def delete_booking(store: EntityStore, booking_id: str) -> None:
    """Delete a booking and refresh its room's status."""
    bookings = read_models(store, BOOKINGS, Booking)
    index, booking = find_record(bookings, booking_id, "Booking")

    del bookings[index]
    write_models(store, BOOKINGS, bookings)

    logger.info("Deleted booking %s (room %s)", booking.id, booking.room_number)
    refresh_room_status(store, booking.room_id)
