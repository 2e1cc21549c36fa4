"""Tests for the time slot endpoints"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

from conftest import SLOT_DATE


def slot_body(**overrides) -> dict:
    body = {
        "date": SLOT_DATE.isoformat(),
        "start_time": "12:00",
        "end_time": "14:00",
        "duration": 120,
        "max_party_size": 6,
        "location": "indoor",
        "area": "main",
        "features": ["lunch"],
        "special_pricing": 25.0,
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_staff_creates_slot(client: AsyncClient, staff_headers, staff_user, notifier):
    response = await client.post("/timeslots", json=slot_body(start_time="7:30", end_time="9:00"), headers=staff_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["start_time"] == "07:30"
    assert data["is_available"] is True
    assert data["created_by"] == str(staff_user.id)
    assert notifier.names() == ["timeslot-created"]
    assert notifier.events[0][1]["time_slot"]["id"] == data["id"]


@pytest.mark.asyncio
async def test_customer_cannot_create_slot(client: AsyncClient, customer_headers):
    response = await client.post("/timeslots", json=slot_body(), headers=customer_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_overlapping_slot_same_location_rejected(client: AsyncClient, staff_headers, test_slot):
    response = await client.post(
        "/timeslots",
        json=slot_body(start_time="19:00", end_time="21:00"),
        headers=staff_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "scheduling_conflict"


@pytest.mark.asyncio
async def test_overlapping_slot_other_location_allowed(client: AsyncClient, staff_headers, test_slot):
    response = await client.post(
        "/timeslots",
        json=slot_body(start_time="19:00", end_time="21:00", location="outdoor", area="patio"),
        headers=staff_headers,
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_adjacent_slot_allowed(client: AsyncClient, staff_headers, test_slot):
    response = await client.post(
        "/timeslots",
        json=slot_body(start_time="20:00", end_time="22:00"),
        headers=staff_headers,
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_inverted_slot_window_rejected(client: AsyncClient, staff_headers):
    response = await client.post(
        "/timeslots",
        json=slot_body(start_time="14:00", end_time="12:00"),
        headers=staff_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_list_slots_public_with_filters(client: AsyncClient, staff_headers, test_slot):
    await client.post("/timeslots", json=slot_body(), headers=staff_headers)
    closed = await client.post(
        "/timeslots",
        json=slot_body(start_time="15:00", end_time="16:00"),
        headers=staff_headers,
    )
    await client.put(
        f"/timeslots/{closed.json()['id']}",
        json={"is_available": False},
        headers=staff_headers,
    )

    all_open = await client.get("/timeslots")
    assert all_open.status_code == 200
    assert all_open.json()["total"] == 2

    evening = await client.get("/timeslots", params={"start_time": "17:00"})
    assert [slot["start_time"] for slot in evening.json()["items"]] == ["18:00"]

    cheap = await client.get("/timeslots", params={"price_max": 30})
    assert [slot["start_time"] for slot in cheap.json()["items"]] == ["12:00"]

    big_party = await client.get("/timeslots", params={"party_size": 7})
    assert big_party.json()["total"] == 0

    on_date = await client.get("/timeslots", params={"date": SLOT_DATE.isoformat(), "location": "indoor"})
    assert on_date.json()["total"] == 2


@pytest.mark.asyncio
async def test_list_slots_bad_time_filter(client: AsyncClient):
    response = await client.get("/timeslots", params={"start_time": "noon"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "start_time"


@pytest.mark.asyncio
async def test_get_slot(client: AsyncClient, test_slot):
    response = await client.get(f"/timeslots/{test_slot.id}")
    assert response.status_code == 200
    assert response.json()["special_pricing"] == 45.0

    missing = await client.get(f"/timeslots/{uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_update_slot(client: AsyncClient, staff_headers, test_slot, notifier):
    response = await client.put(
        f"/timeslots/{test_slot.id}",
        json={"end_time": "21:00", "special_notes": "Live music"},
        headers=staff_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["end_time"] == "21:00"
    assert data["special_notes"] == "Live music"
    assert notifier.names() == ["timeslot-updated"]


@pytest.mark.asyncio
async def test_update_slot_into_overlap_rejected(client: AsyncClient, staff_headers, test_slot):
    created = await client.post("/timeslots", json=slot_body(), headers=staff_headers)
    slot_id = created.json()["id"]

    response = await client.put(
        f"/timeslots/{slot_id}",
        json={"end_time": "19:00"},
        headers=staff_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "scheduling_conflict"


@pytest.mark.asyncio
async def test_update_slot_rejects_null_required_field(client: AsyncClient, staff_headers, test_slot):
    response = await client.put(f"/timeslots/{test_slot.id}", json={"area": None}, headers=staff_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_slot_keeps_reservations(
    client: AsyncClient, staff_headers, customer_headers, booking_payload, test_slot, notifier
):
    """Bookings outlive their slot and keep their own date and times"""
    slot_id = str(test_slot.id)
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]

    response = await client.delete(f"/timeslots/{slot_id}", headers=staff_headers)
    assert response.status_code == 204
    assert notifier.events[-1] == ("timeslot-deleted", {"time_slot_id": slot_id})

    reservation = await client.get(f"/reservations/{reservation_id}", headers=customer_headers)
    data = reservation.json()
    assert data["time_slot_id"] is None
    assert data["time_slot"] is None
    assert data["start_time"] == "18:00"
    assert data["end_time"] == "19:30"

    gone = await client.get(f"/timeslots/{slot_id}")
    assert gone.status_code == 404
