"""Tests for room endpoints: CRUD, availability search and flags."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from lodging.schemas.guest import Guest
from lodging.schemas.room import Room

pytestmark = pytest.mark.asyncio


class TestRoomCrud:
    async def test_create_room(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/rooms",
            json={"number": "201", "room_type": "Deluxe", "floor": 2, "capacity": 3, "nightly_rate": "240.00"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["number"] == "201"
        assert data["status"] == "AVAILABLE"
        assert data["blocked"] is False
        assert Decimal(data["nightly_rate"]) == Decimal("240.00")

    async def test_create_duplicate_number(self, client: AsyncClient, room: Room) -> None:
        response = await client.post("/api/v1/rooms", json={"number": "101"})
        assert response.status_code == 409
        assert response.json()["detail"] == "A room with number 101 already exists"

    async def test_create_invalid_capacity(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/rooms", json={"number": "9", "capacity": 0})
        assert response.status_code == 422

    async def test_list_rooms_sorted(self, client: AsyncClient) -> None:
        for number in ("301", "101"):
            await client.post("/api/v1/rooms", json={"number": number})

        response = await client.get("/api/v1/rooms")
        assert response.status_code == 200
        assert [r["number"] for r in response.json()] == ["101", "301"]

    async def test_get_room(self, client: AsyncClient, room: Room) -> None:
        response = await client.get(f"/api/v1/rooms/{room.id}")
        assert response.status_code == 200
        assert response.json()["number"] == "101"

    async def test_get_missing(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/rooms/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Room not found"

    async def test_update_room(self, client: AsyncClient, room: Room) -> None:
        response = await client.put(f"/api/v1/rooms/{room.id}", json={"capacity": 4, "room_type": "Family"})
        assert response.status_code == 200
        data = response.json()
        assert data["capacity"] == 4
        assert data["room_type"] == "Family"

    async def test_delete_room(self, client: AsyncClient, room: Room) -> None:
        response = await client.delete(f"/api/v1/rooms/{room.id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Room deleted"}
        assert (await client.get(f"/api/v1/rooms/{room.id}")).status_code == 404

    async def test_delete_room_with_active_booking(self, client: AsyncClient, room: Room, guest: Guest) -> None:
        await client.post(
            "/api/v1/bookings",
            json={
                "guest_id": guest.id,
                "room_id": room.id,
                "check_in": "2024-01-05",
                "check_out": "2024-01-06",
                "rate": "100",
            },
        )

        response = await client.delete(f"/api/v1/rooms/{room.id}")
        assert response.status_code == 409


class TestRoomFlags:
    async def test_toggle_flags(self, client: AsyncClient, room: Room) -> None:
        response = await client.patch(f"/api/v1/rooms/{room.id}/flags", json={"maintenance": True})
        assert response.status_code == 200
        data = response.json()
        assert data["under_maintenance"] is True
        assert data["status"] == "MAINTENANCE"

        response = await client.patch(f"/api/v1/rooms/{room.id}/flags", json={"maintenance": False})
        assert response.json()["status"] == "AVAILABLE"

    async def test_flags_missing_room(self, client: AsyncClient) -> None:
        response = await client.patch("/api/v1/rooms/nope/flags", json={"blocked": True})
        assert response.status_code == 404


class TestAvailableRooms:
    async def test_available_excludes_booked_room(self, client: AsyncClient, room: Room, guest: Guest) -> None:
        await client.post("/api/v1/rooms", json={"number": "102"})
        await client.post(
            "/api/v1/bookings",
            json={
                "guest_id": guest.id,
                "room_id": room.id,
                "check_in": "2024-01-05",
                "check_out": "2024-01-08",
                "rate": "100",
            },
        )

        response = await client.get(
            "/api/v1/rooms/available",
            params={"check_in": "2024-01-06", "check_out": "2024-01-07"},
        )
        assert response.status_code == 200
        assert [r["number"] for r in response.json()] == ["102"]

    async def test_available_requires_both_dates(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/rooms/available", params={"check_in": "2024-01-06"})
        assert response.status_code == 400
        assert response.json()["detail"] == "check_in and check_out are required"

    async def test_available_rejects_reversed_range(self, client: AsyncClient) -> None:
        response = await client.get(
            "/api/v1/rooms/available",
            params={"check_in": "2024-01-07", "check_out": "2024-01-06"},
        )
        assert response.status_code == 400
