"""Seed the configured store with sample rooms, guests and bookings.

Everything goes through the services, so the same validation and room status
rules apply as for real data. Check-ins are placed today or later (past dates
are refused); stays that started today are then marked IN_PROGRESS.

Run from the project root:
    python -m scripts.seed_data --reset

Room numbers and guest tax ids are unique, so seeding a store that already
holds this data fails unless ``--reset`` is given.
"""

import argparse
import logging
from datetime import date, timedelta
from decimal import Decimal

from lodging import clock
from lodging.api.deps import build_store
from lodging.schemas.booking import BookingStatus
from lodging.services import booking_service, guest_service, room_service
from lodging.store import COLLECTIONS, EntityStore

logger = logging.getLogger("scripts.seed_data")

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ROOMS = [
    {"number": "101", "room_type": "Standard", "floor": 1, "capacity": 2, "nightly_rate": Decimal("180.00")},
    {"number": "102", "room_type": "Standard", "floor": 1, "capacity": 2, "nightly_rate": Decimal("180.00")},
    {"number": "103", "room_type": "Family", "floor": 1, "capacity": 4, "nightly_rate": Decimal("290.00")},
    {"number": "201", "room_type": "Deluxe", "floor": 2, "capacity": 3, "nightly_rate": Decimal("240.00")},
    {"number": "202", "room_type": "Deluxe", "floor": 2, "capacity": 3, "nightly_rate": Decimal("240.00")},
    {"number": "301", "room_type": "Suite", "floor": 3, "capacity": 2, "nightly_rate": Decimal("420.00")},
]

GUESTS = [
    {
        "name": "Ana Souza",
        "tax_id": "123.456.789-09",
        "phone": "+5548991234567",
        "email": "ana.souza@gmail.com",
        "city": "Florianópolis",
        "state": "SC",
    },
    {
        "name": "Bruno Lima",
        "tax_id": "987.654.321-00",
        "phone": "+5511987654321",
        "email": "bruno.lima@outlook.com",
        "city": "São Paulo",
        "state": "SP",
    },
    {
        "name": "Carla Mendes",
        "tax_id": "111.444.777-35",
        "phone": "+5521976543210",
        "email": "carla.mendes@yahoo.com",
        "city": "Rio de Janeiro",
        "state": "RJ",
    },
    {
        "name": "Diego Ferreira",
        "tax_id": "222.333.444-05",
        "phone": "+5551999887766",
        "email": "diego.ferreira@gmail.com",
        "address": "Rua dos Andradas, 1000",
        "city": "Porto Alegre",
        "state": "RS",
        "postal_code": "90020-008",
    },
    {
        "name": "Elisa Rocha",
        "tax_id": "555.666.777-88",
        "phone": "+5541988776655",
        "email": "elisa.rocha@hotmail.com",
        "city": "Curitiba",
        "state": "PR",
    },
]

# (guest index, room number, days from today, nights, party size, status after creation)
BOOKINGS = [
    (0, "101", 0, 3, 2, BookingStatus.IN_PROGRESS),
    (1, "103", 0, 5, 4, BookingStatus.IN_PROGRESS),
    (2, "201", 2, 4, 2, None),
    (3, "301", 7, 2, 2, None),
    (4, "102", 10, 7, 1, None),
    (0, "101", 3, 2, 2, None),
    (1, "202", 14, 3, 3, BookingStatus.CANCELLED),
    (2, "202", 14, 4, 2, None),
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


def _reset(store: EntityStore) -> None:
    for name in COLLECTIONS:
        store.write(name, [])


def seed(store: EntityStore, today: date | None = None) -> dict[str, int]:
    """Create the sample data and return how many records of each kind were added."""
    today = today or clock.today()

    rooms = {data["number"]: room_service.create_room(store, data) for data in ROOMS}
    guests = [guest_service.create_guest(store, data) for data in GUESTS]

    booking_count = 0
    for guest_index, room_number, offset, nights, party, status in BOOKINGS:
        room = rooms[room_number]
        check_in = today + timedelta(days=offset)
        booking = booking_service.create_booking(
            store,
            {
                "guest_id": guests[guest_index].id,
                "room_id": room.id,
                "check_in": check_in,
                "check_out": check_in + timedelta(days=nights),
                "rate": room.nightly_rate,
                "guest_count": party,
            },
        )
        if status is not None:
            booking_service.update_booking(store, booking.id, {"status": status})
        booking_count += 1

    # Room 102 is being made up before its next guest.
    room_service.update_room_flags(store, rooms["102"].id, {"cleaning": True})

    return {"rooms": len(rooms), "guests": len(guests), "bookings": booking_count}


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--reset", action="store_true", help="empty every collection before seeding")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    store = build_store()
    store.initialize()
    if args.reset:
        logger.info("Clearing guests, rooms and bookings")
        _reset(store)

    counts = seed(store)
    logger.info(
        "Seeded %d room(s), %d guest(s), %d booking(s)",
        counts["rooms"],
        counts["guests"],
        counts["bookings"],
    )


if __name__ == "__main__":
    main()
