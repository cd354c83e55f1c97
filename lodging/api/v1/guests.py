"""Guests CRUD API router.

Routes are ``async def`` and call the synchronous services, and so the
blocking store, directly. Requests therefore run one at a time on the event
loop and the store sees a single writer.
"""

from fastapi import APIRouter, Depends, Query, status

from lodging.api.deps import get_store
from lodging.schemas.common import MessageResponse
from lodging.schemas.guest import Guest, GuestCreate, GuestUpdate
from lodging.schemas.views import GuestDetail, GuestListResponse
from lodging.services import guest_service
from lodging.store import EntityStore

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])


@router.post(
    "",
    response_model=Guest,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new guest",
)
async def create_guest(
    body: GuestCreate,
    store: EntityStore = Depends(get_store),
) -> Guest:
    """Create a guest. Returns 409 if the tax id or e-mail is already registered."""
    return guest_service.create_guest(store, body)


@router.get(
    "",
    response_model=GuestListResponse,
    summary="List guests with optional search",
)
async def list_guests(
    search: str | None = Query(None, description="Search by name, e-mail or tax id"),
    page: int = Query(1, ge=1, description="1-indexed page number"),
    page_size: int | None = Query(None, ge=1, le=100, description="Guests per page"),
    store: EntityStore = Depends(get_store),
) -> GuestListResponse:
    """Return a page of guests, each with their most recent bookings."""
    return guest_service.list_guests(store, page=page, page_size=page_size, search=search)


@router.get(
    "/{guest_id}",
    response_model=GuestDetail,
    summary="Get a guest with all bookings",
)
async def get_guest(
    guest_id: str,
    store: EntityStore = Depends(get_store),
) -> GuestDetail:
    """Return a single guest by id, with every booking they hold."""
    return guest_service.get_guest(store, guest_id)


@router.put(
    "/{guest_id}",
    response_model=Guest,
    summary="Update a guest",
)
async def update_guest(
    guest_id: str,
    body: GuestUpdate,
    store: EntityStore = Depends(get_store),
) -> Guest:
    """Partially update a guest. Only explicitly provided fields are changed."""
    return guest_service.update_guest(store, guest_id, body)


@router.delete(
    "/{guest_id}",
    response_model=MessageResponse,
    summary="Delete a guest",
)
async def delete_guest(
    guest_id: str,
    store: EntityStore = Depends(get_store),
) -> MessageResponse:
    """Delete a guest. Cascades to their bookings."""
    guest_service.delete_guest(store, guest_id)
    return MessageResponse(message="Guest deleted")
