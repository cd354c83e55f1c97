"""Guest service — CRUD for guests, with cascading booking deletes."""

import logging
import math
from collections.abc import Mapping
from typing import Any

from lodging import clock
from lodging.config import settings
from lodging.exceptions import ConflictError, ValidationError
from lodging.schemas.booking import Booking
from lodging.schemas.common import Pagination, new_id
from lodging.schemas.guest import Guest, GuestCreate, GuestUpdate
from lodging.schemas.views import GuestDetail, GuestListResponse
from lodging.services.common import find_record, parse_input
from lodging.services.room_service import refresh_room_statuses
from lodging.store import BOOKINGS, GUESTS, EntityStore, read_models, write_models

logger = logging.getLogger(__name__)


def _bookings_of(guest_id: str, bookings: list[Booking]) -> list[Booking]:
    """The guest's bookings, most recent check-in first."""
    return sorted(
        (b for b in bookings if b.guest_id == guest_id),
        key=lambda b: b.check_in,
        reverse=True,
    )


def _matches(guest: Guest, search: str) -> bool:
    needle = search.lower()
    return needle in guest.name.lower() or needle in guest.email.lower() or search in guest.tax_id


def _find_duplicate(guests: list[Guest], tax_id: str | None, email: str | None, exclude_id: str | None = None) -> Guest | None:
    for guest in guests:
        if guest.id == exclude_id:
            continue
        if (tax_id is not None and guest.tax_id == tax_id) or (email is not None and guest.email == email):
            return guest
    return None


def list_guests(
    store: EntityStore,
    page: int = 1,
    page_size: int | None = None,
    search: str | None = None,
) -> GuestListResponse:
    """Return one page of guests, each with their most recent bookings."""
    page_size = page_size if page_size is not None else settings.default_page_size
    if page < 1 or page_size < 1:
        raise ValidationError("page and page_size must be at least 1")

    guests = read_models(store, GUESTS, Guest)
    bookings = read_models(store, BOOKINGS, Booking)

    if search:
        guests = [g for g in guests if _matches(g, search)]

    total = len(guests)
    start = (page - 1) * page_size
    items = [
        GuestDetail(
            **guest.model_dump(),
            bookings=_bookings_of(guest.id, bookings)[: settings.recent_bookings_per_guest],
        )
        for guest in guests[start : start + page_size]
    ]

    return GuestListResponse(
        items=items,
        pagination=Pagination(
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        ),
    )


def get_guest(store: EntityStore, guest_id: str) -> GuestDetail:
    """Return a guest with all their bookings."""
    guests = read_models(store, GUESTS, Guest)
    _, guest = find_record(guests, guest_id, "Guest")
    bookings = read_models(store, BOOKINGS, Booking)
    return GuestDetail(**guest.model_dump(), bookings=_bookings_of(guest.id, bookings))


def create_guest(store: EntityStore, data: GuestCreate | Mapping[str, Any]) -> Guest:
    """Register a new guest. Tax id and e-mail must not be in use."""
    body = parse_input(GuestCreate, data)
    guests = read_models(store, GUESTS, Guest)

    if _find_duplicate(guests, body.tax_id, body.email) is not None:
        raise ConflictError("Tax id or email already registered")

    now = clock.now()
    guest = Guest(id=new_id(), **body.model_dump(), created_at=now, updated_at=now)
    guests.append(guest)
    write_models(store, GUESTS, guests)

    logger.info("Created guest %s", guest.id)
    return guest


def update_guest(store: EntityStore, guest_id: str, patch: GuestUpdate | Mapping[str, Any]) -> Guest:
    """Partially update a guest. Only explicitly provided fields are changed."""
    body = parse_input(GuestUpdate, patch)
    guests = read_models(store, GUESTS, Guest)
    index, guest = find_record(guests, guest_id, "Guest")

    update_data = body.model_dump(exclude_unset=True)

    if "tax_id" in update_data or "email" in update_data:
        duplicate = _find_duplicate(
            guests,
            update_data.get("tax_id"),
            update_data.get("email"),
            exclude_id=guest_id,
        )
        if duplicate is not None:
            raise ConflictError("Tax id or email already registered for another guest")

    updated = parse_input(Guest, {**guest.model_dump(), **update_data, "updated_at": clock.now()})
    guests[index] = updated
    write_models(store, GUESTS, guests)
    return updated


def delete_guest(store: EntityStore, guest_id: str) -> None:
    """Delete a guest and every booking they hold.

    Rooms that lose a booking this way get their status recomputed.
    """
    guests = read_models(store, GUESTS, Guest)
    index, guest = find_record(guests, guest_id, "Guest")
    bookings = read_models(store, BOOKINGS, Booking)

    removed = [b for b in bookings if b.guest_id == guest_id]
    del guests[index]

    write_models(store, GUESTS, guests)
    write_models(store, BOOKINGS, [b for b in bookings if b.guest_id != guest_id])

    logger.info("Deleted guest %s and %d booking(s)", guest.id, len(removed))
    refresh_room_statuses(store, {b.room_id for b in removed})
