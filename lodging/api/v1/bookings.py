"""Bookings CRUD API router.

Every write goes through the booking service, which checks the room calendar
and refreshes the derived status of the rooms involved.

Routes are ``async def`` and call the synchronous services, and so the
blocking store, directly. Requests therefore run one at a time on the event
loop and the store sees a single writer.
"""

from fastapi import APIRouter, Depends, Query, status

from lodging.api.deps import get_store
from lodging.schemas.booking import BookingCreate, BookingStatus, BookingUpdate
from lodging.schemas.common import MessageResponse
from lodging.schemas.views import BookingDetail
from lodging.services import booking_service
from lodging.store import EntityStore

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    store: EntityStore = Depends(get_store),
) -> BookingDetail:
    """Create a booking.

    Validates that:
    - The guest and the room exist.
    - check_out is after check_in and check_in is not in the past.
    - The party fits the room.
    - There are no date conflicts with existing active bookings.
    """
    return booking_service.create_booking(store, body)


@router.get(
    "",
    response_model=list[BookingDetail],
    summary="List bookings",
)
async def list_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status", description="Filter by booking status"),
    date_from: str | None = Query(None, description="Bookings with check_in >= this date"),
    date_to: str | None = Query(None, description="Bookings with check_in <= this date"),
    store: EntityStore = Depends(get_store),
) -> list[BookingDetail]:
    """Return bookings with guest and room, latest check-in first."""
    return booking_service.list_bookings(store, status=status_filter, date_from=date_from, date_to=date_to)


@router.get(
    "/{booking_id}",
    response_model=BookingDetail,
    summary="Get booking detail with nested room and guest",
)
async def get_booking(
    booking_id: str,
    store: EntityStore = Depends(get_store),
) -> BookingDetail:
    return booking_service.get_booking(store, booking_id)


@router.put(
    "/{booking_id}",
    response_model=BookingDetail,
    summary="Update a booking",
)
async def update_booking(
    booking_id: str,
    body: BookingUpdate,
    store: EntityStore = Depends(get_store),
) -> BookingDetail:
    """Partially update a booking.

    Re-runs conflict detection when the room, dates or party size change and
    recomputes the total when the rate or dates change.
    """
    return booking_service.update_booking(store, booking_id, body)


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: str,
    store: EntityStore = Depends(get_store),
) -> MessageResponse:
    booking_service.delete_booking(store, booking_id)
    return MessageResponse(message="Booking deleted")
