"""Tests for the reservation endpoints"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

from app.api.dependencies import get_notifier
from app.main import app
from app.services.notifier import LocalNotifier


@pytest.mark.asyncio
async def test_create_reservation(client: AsyncClient, customer_headers, booking_payload, notifier):
    """Customer books a table and gets the frozen price back"""
    response = await client.post(
        "/reservations",
        json=booking_payload(party_size=3, special_requests="  Window seat please  "),
        headers=customer_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["party_size"] == 3
    assert data["start_time"] == "18:00"
    assert data["end_time"] == "19:30"
    assert data["special_requests"] == "Window seat please"
    assert data["price_snapshot"] == {"price_per_person_at_booking": 45.0, "total_price": 135.0}
    assert data["table"]["table_number"] == "T1"
    assert data["time_slot"]["special_pricing"] == 45.0
    assert notifier.names() == ["reservation-created"]


@pytest.mark.asyncio
async def test_create_reservation_normalizes_short_times(client: AsyncClient, customer_headers, booking_payload):
    response = await client.post(
        "/reservations",
        json=booking_payload(start_time="9:00", end_time="10:30"),
        headers=customer_headers,
    )

    assert response.status_code == 201
    assert response.json()["start_time"] == "09:00"


@pytest.mark.asyncio
async def test_create_reservation_conflict(client: AsyncClient, customer_headers, other_headers, booking_payload):
    first = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    assert first.status_code == 201

    response = await client.post(
        "/reservations",
        json=booking_payload(start_time="19:00", end_time="20:00"),
        headers=other_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "scheduling_conflict"


@pytest.mark.asyncio
async def test_create_reservation_table_too_small(client: AsyncClient, customer_headers, booking_payload):
    response = await client.post("/reservations", json=booking_payload(party_size=5), headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "table_unsuitable"


@pytest.mark.asyncio
async def test_create_reservation_bad_time_format(client: AsyncClient, customer_headers, booking_payload):
    response = await client.post(
        "/reservations",
        json=booking_payload(start_time="6pm"),
        headers=customer_headers,
    )

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "validation_error"
    assert data["errors"][0]["field"] == "start_time"


@pytest.mark.asyncio
async def test_create_reservation_requires_customer(client: AsyncClient, staff_headers, booking_payload):
    response = await client.post("/reservations", json=booking_payload(), headers=staff_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_reservation_requires_auth(client: AsyncClient, booking_payload):
    response = await client.post("/reservations", json=booking_payload())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_reservations_scoped_to_customer(
    client: AsyncClient, customer_headers, other_headers, staff_headers, booking_payload
):
    await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    await client.post(
        "/reservations",
        json=booking_payload(start_time="20:00", end_time="21:00"),
        headers=other_headers,
    )

    own = await client.get("/reservations", headers=customer_headers)
    assert own.status_code == 200
    assert own.json()["total"] == 1

    everything = await client.get("/reservations", headers=staff_headers)
    data = everything.json()
    assert data["total"] == 2
    assert data["page"] == 1
    assert data["page_size"] == 20


@pytest.mark.asyncio
async def test_list_reservations_filters_by_status(client: AsyncClient, customer_headers, staff_headers, booking_payload):
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]
    await client.put(f"/reservations/{reservation_id}", json={"status": "confirmed"}, headers=staff_headers)

    confirmed = await client.get("/reservations", params={"status": "confirmed"}, headers=staff_headers)
    pending = await client.get("/reservations", params={"status": "pending"}, headers=staff_headers)

    assert confirmed.json()["total"] == 1
    assert pending.json()["total"] == 0


@pytest.mark.asyncio
async def test_get_reservation_owner_only(client: AsyncClient, customer_headers, other_headers, booking_payload):
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]

    mine = await client.get(f"/reservations/{reservation_id}", headers=customer_headers)
    theirs = await client.get(f"/reservations/{reservation_id}", headers=other_headers)
    missing = await client.get(f"/reservations/{uuid4()}", headers=customer_headers)

    assert mine.status_code == 200
    assert theirs.status_code == 403
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_staff_status_update(client: AsyncClient, customer_headers, staff_headers, booking_payload, notifier):
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]

    response = await client.put(
        f"/reservations/{reservation_id}",
        json={"status": "seated", "staff_notes": "Table by the window"},
        headers=staff_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "seated"
    assert data["staff_notes"] == "Table by the window"
    assert notifier.names()[-1] == "reservation-updated"


@pytest.mark.asyncio
async def test_customer_cannot_change_status_to_seated(client: AsyncClient, customer_headers, booking_payload):
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]

    response = await client.put(
        f"/reservations/{reservation_id}",
        json={"status": "seated"},
        headers=customer_headers,
    )

    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


@pytest.mark.asyncio
async def test_customer_delete_cancels(client: AsyncClient, customer_headers, booking_payload, notifier):
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]

    response = await client.delete(f"/reservations/{reservation_id}", headers=customer_headers)
    assert response.status_code == 204

    fetched = await client.get(f"/reservations/{reservation_id}", headers=customer_headers)
    assert fetched.json()["status"] == "cancelled"
    assert notifier.names()[-1] == "reservation-cancelled"


@pytest.mark.asyncio
async def test_staff_delete_removes(
    client: AsyncClient, customer_headers, staff_headers, booking_payload, notifier, customer_user
):
    customer_id = str(customer_user.id)
    created = await client.post("/reservations", json=booking_payload(), headers=customer_headers)
    reservation_id = created.json()["id"]

    response = await client.delete(f"/reservations/{reservation_id}", headers=staff_headers)
    assert response.status_code == 204

    fetched = await client.get(f"/reservations/{reservation_id}", headers=staff_headers)
    assert fetched.status_code == 404
    assert notifier.events[-1] == (
        "reservation-deleted",
        {"reservation_id": reservation_id, "customer_id": customer_id},
    )


@pytest.mark.asyncio
async def test_booking_succeeds_when_a_subscriber_is_backed_up(
    client: AsyncClient, customer_headers, booking_payload
):
    """A full subscriber queue never turns a saved booking into an error"""
    live = LocalNotifier(queue_size=1)
    stalled = live.subscribe()
    await live.publish("timeslot-updated", {})
    app.dependency_overrides[get_notifier] = lambda: live

    response = await client.post("/reservations", json=booking_payload(), headers=customer_headers)

    assert response.status_code == 201
    assert stalled.qsize() == 1

    listing = await client.get("/reservations", headers=customer_headers)
    assert listing.json()["total"] == 1
