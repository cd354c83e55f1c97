"""Room service — CRUD, manual flags and derived status for rooms."""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from lodging import clock
from lodging.exceptions import ConflictError, ValidationError
from lodging.schemas.booking import ACTIVE_STATUSES, Booking
from lodging.schemas.common import new_id
from lodging.schemas.room import (
    AvailabilityQuery,
    Room,
    RoomCreate,
    RoomFlagsUpdate,
    RoomStatus,
    RoomUpdate,
)
from lodging.services.availability import compute_room_status, has_conflict
from lodging.services.common import find_record, parse_input
from lodging.store import BOOKINGS, ROOMS, EntityStore, read_models, write_models

logger = logging.getLogger(__name__)


def refresh_room_statuses(store: EntityStore, room_ids: Iterable[str]) -> None:
    """Recompute and persist the status of the given rooms. Unknown ids are ignored."""
    wanted = set(room_ids)
    if not wanted:
        return

    rooms = read_models(store, ROOMS, Room)
    bookings = read_models(store, BOOKINGS, Booking)
    today = clock.today()
    now = clock.now()

    touched = False
    for index, room in enumerate(rooms):
        if room.id not in wanted:
            continue
        status = compute_room_status(room, bookings, today)
        if status != room.status:
            logger.info("Room %s status %s -> %s", room.number, room.status.value, status.value)
        rooms[index] = room.model_copy(update={"status": status, "updated_at": now})
        touched = True

    if touched:
        write_models(store, ROOMS, rooms)


def refresh_room_status(store: EntityStore, room_id: str) -> None:
    """Recompute and persist one room's status."""
    refresh_room_statuses(store, [room_id])


def list_rooms(
    store: EntityStore,
    search: str | None = None,
    min_capacity: int | None = None,
) -> list[Room]:
    """Return rooms matching the filters, ordered by number.

    Status is recomputed and saved for every room in the collection, not only
    for the ones returned.
    """
    rooms = read_models(store, ROOMS, Room)
    bookings = read_models(store, BOOKINGS, Booking)
    today = clock.today()

    rooms = [room.model_copy(update={"status": compute_room_status(room, bookings, today)}) for room in rooms]
    write_models(store, ROOMS, rooms)

    filtered = rooms
    if search:
        needle = search.lower()
        filtered = [
            r for r in filtered if needle in r.number.lower() or (r.room_type is not None and needle in r.room_type.lower())
        ]
    if min_capacity:
        filtered = [r for r in filtered if r.capacity >= min_capacity]

    return sorted(filtered, key=lambda r: r.number)


def list_available_rooms(
    store: EntityStore,
    check_in: datetime | str | None,
    check_out: datetime | str | None,
    min_capacity: int | None = None,
) -> list[Room]:
    """Rooms that can take a booking for [check_in, check_out).

    Blocked rooms and rooms under maintenance are excluded; rooms being
    cleaned are still offered.
    """
    if not check_in or not check_out:
        raise ValidationError("check_in and check_out are required")

    query = parse_input(
        AvailabilityQuery,
        {"check_in": check_in, "check_out": check_out, "min_capacity": min_capacity},
    )
    if query.check_out <= query.check_in:
        raise ValidationError("check_out must be after check_in")

    rooms = read_models(store, ROOMS, Room)
    bookings = read_models(store, BOOKINGS, Booking)

    available = [
        room
        for room in rooms
        if not room.blocked
        and not room.under_maintenance
        and (query.min_capacity is None or room.capacity >= query.min_capacity)
        and not has_conflict(room.id, query.check_in, query.check_out, bookings)
    ]
    return sorted(available, key=lambda r: r.number)


def get_room(store: EntityStore, room_id: str) -> Room:
    """Return a room by id."""
    rooms = read_models(store, ROOMS, Room)
    _, room = find_record(rooms, room_id, "Room")
    return room


def create_room(store: EntityStore, data: RoomCreate | Mapping[str, Any]) -> Room:
    """Create a room with all flags cleared and status AVAILABLE."""
    body = parse_input(RoomCreate, data)
    rooms = read_models(store, ROOMS, Room)

    if any(r.number == body.number for r in rooms):
        raise ConflictError(f"A room with number {body.number} already exists")

    now = clock.now()
    room = Room(
        id=new_id(),
        **body.model_dump(),
        blocked=False,
        under_maintenance=False,
        being_cleaned=False,
        status=RoomStatus.AVAILABLE,
        created_at=now,
        updated_at=now,
    )
    rooms.append(room)
    write_models(store, ROOMS, rooms)

    logger.info("Created room %s (%s)", room.number, room.id)
    return room


def update_room(store: EntityStore, room_id: str, patch: RoomUpdate | Mapping[str, Any]) -> Room:
    """Partially update a room and recompute its status from current bookings."""
    body = parse_input(RoomUpdate, patch)
    rooms = read_models(store, ROOMS, Room)
    index, room = find_record(rooms, room_id, "Room")

    update_data = body.model_dump(exclude_unset=True)

    new_number = update_data.get("number")
    if new_number is not None and new_number != room.number:
        if any(r.number == new_number and r.id != room_id for r in rooms):
            raise ConflictError(f"A room with number {new_number} already exists")

    updated = parse_input(Room, {**room.model_dump(), **update_data, "updated_at": clock.now()})

    bookings = read_models(store, BOOKINGS, Booking)
    updated.status = compute_room_status(updated, bookings)

    rooms[index] = updated
    write_models(store, ROOMS, rooms)
    return updated


def update_room_flags(
    store: EntityStore,
    room_id: str,
    flags: RoomFlagsUpdate | Mapping[str, Any],
) -> Room:
    """Set the provided manual flags and recompute the room's status."""
    body = parse_input(RoomFlagsUpdate, flags)
    rooms = read_models(store, ROOMS, Room)
    index, room = find_record(rooms, room_id, "Room")

    changes: dict[str, Any] = {"updated_at": clock.now()}
    if body.cleaning is not None:
        changes["being_cleaned"] = body.cleaning
    if body.maintenance is not None:
        changes["under_maintenance"] = body.maintenance
    if body.blocked is not None:
        changes["blocked"] = body.blocked

    updated = room.model_copy(update=changes)
    bookings = read_models(store, BOOKINGS, Booking)
    updated.status = compute_room_status(updated, bookings)

    rooms[index] = updated
    write_models(store, ROOMS, rooms)

    logger.info(
        "Room %s flags: blocked=%s maintenance=%s cleaning=%s -> %s",
        updated.number,
        updated.blocked,
        updated.under_maintenance,
        updated.being_cleaned,
        updated.status.value,
    )
    return updated


def delete_room(store: EntityStore, room_id: str) -> None:
    """Delete a room unless it still has confirmed or in-progress bookings."""
    rooms = read_models(store, ROOMS, Room)
    index, room = find_record(rooms, room_id, "Room")

    bookings = read_models(store, BOOKINGS, Booking)
    active = sum(1 for b in bookings if b.room_id == room_id and b.status in ACTIVE_STATUSES)
    if active:
        raise ConflictError(f"Cannot delete room {room.number}: it has {active} active booking(s)")

    del rooms[index]
    write_models(store, ROOMS, rooms)
    logger.info("Deleted room %s (%s)", room.number, room.id)
