"""Tests for guest_service: registration, search and pagination, cascading deletes."""

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal

import pytest

from lodging.exceptions import ConflictError, NotFoundError, ValidationError
from lodging.schemas.guest import Guest
from lodging.schemas.room import Room, RoomStatus
from lodging.services import booking_service, guest_service, room_service
from lodging.store import BOOKINGS, GUESTS, InMemoryStore


def _book(store: InMemoryStore, guest: Guest, room: Room, check_in: date, check_out: date):
    return booking_service.create_booking(
        store,
        {
            "guest_id": guest.id,
            "room_id": room.id,
            "check_in": check_in,
            "check_out": check_out,
            "rate": Decimal("100"),
        },
    )


class TestCreateGuest:
    def test_create(self, store: InMemoryStore, frozen_now: datetime) -> None:
        guest = guest_service.create_guest(
            store,
            {
                "name": "Carla Mendes",
                "tax_id": "111.444.777-35",
                "phone": "+5521976543210",
                "email": "carla@test.com",
                "city": "Rio de Janeiro",
            },
        )

        assert guest.id
        assert guest.city == "Rio de Janeiro"
        assert guest.address is None
        assert guest.created_at == frozen_now
        assert store.read(GUESTS)[0]["tax_id"] == "111.444.777-35"

    @pytest.mark.parametrize("missing", ["name", "tax_id", "phone", "email"])
    def test_required_fields(self, store: InMemoryStore, missing: str) -> None:
        data = {"name": "X", "tax_id": "1", "phone": "2", "email": "x@test.com"}
        del data[missing]

        with pytest.raises(ValidationError, match=missing):
            guest_service.create_guest(store, data)

    def test_invalid_email(self, store: InMemoryStore) -> None:
        with pytest.raises(ValidationError):
            guest_service.create_guest(store, {"name": "X", "tax_id": "1", "phone": "2", "email": "not-an-email"})

    def test_duplicate_tax_id(self, guest: Guest, make_guest: Callable[..., Guest]) -> None:
        with pytest.raises(ConflictError, match="Tax id or email already registered"):
            make_guest("Someone Else", guest.tax_id)

    def test_duplicate_email(self, store: InMemoryStore, guest: Guest) -> None:
        with pytest.raises(ConflictError):
            guest_service.create_guest(
                store,
                {"name": "Other", "tax_id": "999", "phone": "1", "email": guest.email},
            )


class TestListGuests:
    def test_pagination(self, store: InMemoryStore, make_guest: Callable[..., Guest]) -> None:
        for i in range(12):
            make_guest(f"Guest {i:02d}", f"tax-{i:02d}")

        first = guest_service.list_guests(store, page=1, page_size=5)
        last = guest_service.list_guests(store, page=3, page_size=5)

        assert len(first.items) == 5
        assert first.pagination.total == 12
        assert first.pagination.total_pages == 3
        assert [g.name for g in last.items] == ["Guest 10", "Guest 11"]

    def test_default_page_size(self, store: InMemoryStore, make_guest: Callable[..., Guest]) -> None:
        for i in range(11):
            make_guest(f"Guest {i:02d}", f"tax-{i:02d}")

        result = guest_service.list_guests(store)
        assert len(result.items) == 10
        assert result.pagination.page_size == 10

    def test_page_past_the_end_is_empty(self, store: InMemoryStore, guest: Guest) -> None:
        result = guest_service.list_guests(store, page=4, page_size=10)

        assert result.items == []
        assert result.pagination.total == 1

    def test_empty_store(self, store: InMemoryStore) -> None:
        result = guest_service.list_guests(store)

        assert result.items == []
        assert result.pagination.total == 0
        assert result.pagination.total_pages == 0

    @pytest.mark.parametrize(("page", "page_size"), [(0, 10), (1, 0), (-1, 5)])
    def test_invalid_paging(self, store: InMemoryStore, page: int, page_size: int) -> None:
        with pytest.raises(ValidationError):
            guest_service.list_guests(store, page=page, page_size=page_size)

    @pytest.mark.parametrize(
        ("search", "expected"),
        [
            ("alice", ["Alice Walker"]),
            ("BRUNO.LIMA@", ["Bruno Lima"]),
            ("222.222", ["Bruno Lima"]),
            ("zzz", []),
        ],
    )
    def test_search(
        self, store: InMemoryStore, guest: Guest, other_guest: Guest, search: str, expected: list[str]
    ) -> None:
        result = guest_service.list_guests(store, search=search)

        assert [g.name for g in result.items] == expected
        assert result.pagination.total == len(expected)

    def test_includes_recent_bookings_newest_first(
        self, store: InMemoryStore, guest: Guest, make_guest: Callable[..., Guest]
    ) -> None:
        # Six one-night stays in six different rooms; only the latest five are listed.
        for day in range(2, 8):
            room = room_service.create_room(store, {"number": f"1{day:02d}"})
            _book(store, guest, room, date(2024, 1, day), date(2024, 1, day + 1))

        (item,) = guest_service.list_guests(store).items

        assert len(item.bookings) == 5
        assert [b.check_in.day for b in item.bookings] == [7, 6, 5, 4, 3]


class TestGetGuest:
    def test_with_all_bookings(self, store: InMemoryStore, guest: Guest, room: Room) -> None:
        _book(store, guest, room, date(2024, 1, 2), date(2024, 1, 3))
        _book(store, guest, room, date(2024, 1, 10), date(2024, 1, 12))

        detail = guest_service.get_guest(store, guest.id)

        assert detail.name == "Alice Walker"
        assert [b.check_in.day for b in detail.bookings] == [10, 2]

    def test_missing(self, store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError, match="Guest not found"):
            guest_service.get_guest(store, "nope")


class TestUpdateGuest:
    def test_partial(self, store: InMemoryStore, guest: Guest) -> None:
        updated = guest_service.update_guest(store, guest.id, {"phone": "+5548000000000", "city": "Laguna"})

        assert updated.phone == "+5548000000000"
        assert updated.city == "Laguna"
        assert updated.name == guest.name
        assert guest_service.get_guest(store, guest.id).city == "Laguna"

    def test_keeping_own_tax_id_is_fine(self, store: InMemoryStore, guest: Guest) -> None:
        updated = guest_service.update_guest(store, guest.id, {"tax_id": guest.tax_id, "name": "Alice W."})
        assert updated.name == "Alice W."

    def test_tax_id_of_another_guest_conflicts(self, store: InMemoryStore, guest: Guest, other_guest: Guest) -> None:
        with pytest.raises(ConflictError, match="for another guest"):
            guest_service.update_guest(store, guest.id, {"tax_id": other_guest.tax_id})

    def test_email_of_another_guest_conflicts(self, store: InMemoryStore, guest: Guest, other_guest: Guest) -> None:
        with pytest.raises(ConflictError):
            guest_service.update_guest(store, guest.id, {"email": other_guest.email})

    def test_missing(self, store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError):
            guest_service.update_guest(store, "nope", {"city": "X"})


class TestDeleteGuest:
    def test_cascades_to_bookings(self, store: InMemoryStore, guest: Guest, other_guest: Guest, room: Room) -> None:
        _book(store, guest, room, date(2024, 1, 5), date(2024, 1, 6))
        kept = _book(store, other_guest, room, date(2024, 1, 10), date(2024, 1, 11))

        guest_service.delete_guest(store, guest.id)

        assert [g["id"] for g in store.read(GUESTS)] == [other_guest.id]
        assert [b["id"] for b in store.read(BOOKINGS)] == [kept.id]

    def test_frees_the_room(self, store: InMemoryStore, guest: Guest, room: Room) -> None:
        _book(store, guest, room, date(2024, 1, 1), date(2024, 1, 3))
        assert room_service.get_room(store, room.id).status == RoomStatus.OCCUPIED

        guest_service.delete_guest(store, guest.id)

        assert room_service.get_room(store, room.id).status == RoomStatus.AVAILABLE

    def test_missing(self, store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError):
            guest_service.delete_guest(store, "nope")
