"""Rooms API router — CRUD, availability search and manual flags.

Routes are ``async def`` and call the synchronous services, and so the
blocking store, directly. Requests therefore run one at a time on the event
loop and the store sees a single writer.
"""

from fastapi import APIRouter, Depends, Query, status

from lodging.api.deps import get_store
from lodging.schemas.common import MessageResponse
from lodging.schemas.room import Room, RoomCreate, RoomFlagsUpdate, RoomUpdate
from lodging.services import room_service
from lodging.store import EntityStore

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


@router.get(
    "",
    response_model=list[Room],
    summary="List rooms",
)
async def list_rooms(
    search: str | None = Query(None, description="Match on room number or type"),
    min_capacity: int | None = Query(None, ge=1, description="Minimum capacity"),
    store: EntityStore = Depends(get_store),
) -> list[Room]:
    """Return rooms ordered by number, with freshly computed status."""
    return room_service.list_rooms(store, search=search, min_capacity=min_capacity)


@router.get(
    "/available",
    response_model=list[Room],
    summary="List rooms free for a date range",
)
async def list_available_rooms(
    check_in: str | None = Query(None, description="Arrival, ISO date or date-time"),
    check_out: str | None = Query(None, description="Departure, ISO date or date-time"),
    min_capacity: int | None = Query(None, ge=1, description="Minimum capacity"),
    store: EntityStore = Depends(get_store),
) -> list[Room]:
    """Rooms that are bookable for [check_in, check_out). Both dates are required."""
    return room_service.list_available_rooms(store, check_in, check_out, min_capacity)


@router.post(
    "",
    response_model=Room,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new room",
)
async def create_room(
    body: RoomCreate,
    store: EntityStore = Depends(get_store),
) -> Room:
    """Create a room. Returns 409 if the number is taken."""
    return room_service.create_room(store, body)


@router.get(
    "/{room_id}",
    response_model=Room,
    summary="Get a room by ID",
)
async def get_room(
    room_id: str,
    store: EntityStore = Depends(get_store),
) -> Room:
    return room_service.get_room(store, room_id)


@router.put(
    "/{room_id}",
    response_model=Room,
    summary="Update a room",
)
async def update_room(
    room_id: str,
    body: RoomUpdate,
    store: EntityStore = Depends(get_store),
) -> Room:
    """Partially update a room and recompute its status."""
    return room_service.update_room(store, room_id, body)


@router.patch(
    "/{room_id}/flags",
    response_model=Room,
    summary="Toggle cleaning, maintenance or blocked flags",
)
async def update_room_flags(
    room_id: str,
    body: RoomFlagsUpdate,
    store: EntityStore = Depends(get_store),
) -> Room:
    return room_service.update_room_flags(store, room_id, body)


@router.delete(
    "/{room_id}",
    response_model=MessageResponse,
    summary="Delete a room",
)
async def delete_room(
    room_id: str,
    store: EntityStore = Depends(get_store),
) -> MessageResponse:
    """Delete a room. Returns 409 while it has confirmed or in-progress bookings."""
    room_service.delete_room(store, room_id)
    return MessageResponse(message="Room deleted")
