"""Dashboard service — read-only statistics over guests and bookings."""

from collections import Counter
from datetime import datetime, time, timedelta
from decimal import Decimal

from lodging import clock
from lodging.config import settings
from lodging.schemas.booking import REVENUE_STATUSES, Booking, BookingStatus
from lodging.schemas.dashboard import DashboardRevenue, DashboardStats, DashboardTotals
from lodging.schemas.guest import Guest
from lodging.schemas.views import BookingWithGuest
from lodging.store import BOOKINGS, GUESTS, EntityStore, read_models


def _month_bounds(day: datetime) -> tuple[datetime, datetime]:
    """[first day 00:00, first day of next month 00:00) for ``day``'s month."""
    start = day.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def _sum_rates(bookings: list[Booking]) -> Decimal:
    return sum((b.rate for b in bookings), Decimal("0"))


def get_dashboard_stats(store: EntityStore) -> DashboardStats:
    """Compute the dashboard snapshot.

    Revenue adds up the nightly ``rate`` (not the booking ``total``) of
    completed and in-progress bookings; the monthly figure keeps those whose
    check-in falls in the current calendar month.
    """
    guests = read_models(store, GUESTS, Guest)
    bookings = read_models(store, BOOKINGS, Booking)

    today = datetime.combine(clock.today(), time.min)
    tomorrow = today + timedelta(days=1)
    month_start, month_end = _month_bounds(today)

    def with_guest(booking: Booking) -> BookingWithGuest:
        guest = next((g for g in guests if g.id == booking.guest_id), None)
        return BookingWithGuest(**booking.model_dump(), guest=guest)

    earning = [b for b in bookings if b.status in REVENUE_STATUSES]
    this_month = [b for b in earning if month_start <= b.check_in < month_end]

    upcoming = sorted(
        (b for b in bookings if b.status == BookingStatus.CONFIRMED and b.check_in >= today),
        key=lambda b: b.check_in,
    )
    recent = sorted(bookings, key=lambda b: b.created_at, reverse=True)

    limit = settings.dashboard_list_size
    return DashboardStats(
        totals=DashboardTotals(
            guests=len(guests),
            bookings=len(bookings),
            in_progress=sum(1 for b in bookings if b.status == BookingStatus.IN_PROGRESS),
            check_ins_today=sum(1 for b in bookings if today <= b.check_in < tomorrow),
            check_outs_today=sum(1 for b in bookings if today <= b.check_out < tomorrow),
        ),
        revenue=DashboardRevenue(
            total=_sum_rates(earning),
            current_month=_sum_rates(this_month),
        ),
        bookings_by_status=dict(Counter(b.status.value for b in bookings)),
        upcoming_bookings=[with_guest(b) for b in upcoming[:limit]],
        recent_bookings=[with_guest(b) for b in recent[:limit]],
    )
