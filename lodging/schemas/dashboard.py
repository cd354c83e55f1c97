"""Pydantic v2 schemas for the dashboard statistics."""

from decimal import Decimal

from pydantic import BaseModel

from lodging.schemas.views import BookingWithGuest


class DashboardTotals(BaseModel):
    """Headline counters."""

    guests: int = 0
    bookings: int = 0
    in_progress: int = 0
    check_ins_today: int = 0
    check_outs_today: int = 0


class DashboardRevenue(BaseModel):
    """Sum of nightly rates of completed and in-progress bookings."""

    total: Decimal = Decimal("0")
    current_month: Decimal = Decimal("0")


class DashboardStats(BaseModel):
    """Read-only snapshot over the current guests and bookings."""

    totals: DashboardTotals
    revenue: DashboardRevenue
    bookings_by_status: dict[str, int]
    upcoming_bookings: list[BookingWithGuest]
    recent_bookings: list[BookingWithGuest]
