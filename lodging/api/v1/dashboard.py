"""Dashboard API router — booking and revenue statistics.

Routes are ``async def`` and call the synchronous services, and so the
blocking store, directly. Requests therefore run one at a time on the event
loop and the store sees a single writer.
"""

from fastapi import APIRouter, Depends

from lodging.api.deps import get_store
from lodging.schemas.dashboard import DashboardStats
from lodging.services import dashboard_service
from lodging.store import EntityStore

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(store: EntityStore = Depends(get_store)) -> DashboardStats:
    """Headline counters, revenue, status breakdown, upcoming and recent bookings."""
    return dashboard_service.get_dashboard_stats(store)
