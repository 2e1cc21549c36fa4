"""Tests for the live event stream"""

from uuid import uuid4

from fastapi.testclient import TestClient

from app.api.auth import create_access_token
from app.api.events import visible_to
from app.main import app
from app.models.user import User, UserRole


def make_user(role: UserRole) -> User:
    return User(id=uuid4(), email=f"{uuid4().hex[:8]}@example.com", full_name="Stream User", role=role)


def reservation_event(customer_id, note="quiet corner please") -> dict:
    return {
        "id": str(uuid4()),
        "customer_id": str(customer_id),
        "special_requests": note,
        "staff_notes": None,
    }


class TestVisibility:

    def test_staff_see_everything(self):
        message = {"event": "reservation-created", "payload": {"reservation": reservation_event(uuid4())}}
        assert visible_to(message, str(uuid4()), "staff")

    def test_customer_sees_own_reservation(self):
        customer_id = str(uuid4())
        message = {"event": "reservation-updated", "payload": {"reservation": reservation_event(customer_id)}}
        assert visible_to(message, customer_id, "customer")

    def test_customer_does_not_see_other_reservations(self):
        message = {"event": "reservation-cancelled", "payload": {"reservation": reservation_event(uuid4())}}
        assert not visible_to(message, str(uuid4()), "customer")

    def test_deleted_event_goes_to_owner_only(self):
        customer_id = str(uuid4())
        message = {
            "event": "reservation-deleted",
            "payload": {"reservation_id": str(uuid4()), "customer_id": customer_id},
        }
        assert visible_to(message, customer_id, "customer")
        assert not visible_to(message, str(uuid4()), "customer")

    def test_slot_changes_are_public(self):
        message = {"event": "timeslot-updated", "payload": {"time_slot": {"id": str(uuid4())}}}
        assert visible_to(message, str(uuid4()), "customer")


def test_customer_stream_skips_other_customers_bookings():
    alice = make_user(UserRole.CUSTOMER)
    bob = make_user(UserRole.CUSTOMER)

    with TestClient(app) as test_client:
        notifier = app.state.notifier
        url = f"/events?token={create_access_token(bob)}"
        with test_client.websocket_connect(url) as websocket:
            test_client.portal.call(
                notifier.publish,
                "reservation-created",
                {"reservation": reservation_event(alice.id, "alice private note")},
            )
            test_client.portal.call(
                notifier.publish,
                "reservation-created",
                {"reservation": reservation_event(bob.id, "bob's window seat")},
            )

            frame = websocket.receive_json()

    assert frame["event"] == "reservation-created"
    assert frame["payload"]["reservation"]["customer_id"] == str(bob.id)
    assert frame["payload"]["reservation"]["special_requests"] == "bob's window seat"


def test_staff_stream_receives_every_booking():
    alice = make_user(UserRole.CUSTOMER)
    staff = make_user(UserRole.STAFF)

    with TestClient(app) as test_client:
        notifier = app.state.notifier
        with test_client.websocket_connect(f"/events?token={create_access_token(staff)}") as websocket:
            test_client.portal.call(
                notifier.publish,
                "reservation-created",
                {"reservation": reservation_event(alice.id)},
            )

            frame = websocket.receive_json()

    assert frame["payload"]["reservation"]["customer_id"] == str(alice.id)
