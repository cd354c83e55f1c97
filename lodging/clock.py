"""Wall-clock access for the services.

Everything that needs "now" or "today" goes through these functions so tests
can pin the date with ``unittest.mock.patch("lodging.clock.now", ...)``.
"""

from datetime import date, datetime


def now() -> datetime:
    """Current local time, naive."""
    return datetime.now()


def today() -> date:
    return now().date()
