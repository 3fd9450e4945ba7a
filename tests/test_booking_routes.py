"""API tests for /bookings."""
import re
from unittest.mock import AsyncMock, patch

from medislot.domain.bookings import router as bookings_router

DAY = "2025-03-10"
SLOT = "morning-09:00"


class TestCreateBooking:
    def test_booking_is_listed_for_patient(self, client, booking_payload):
        response = client.post("/bookings", json=booking_payload())
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert re.fullmatch(r"BK\d{6}", body["booking"]["bookingId"])
        assert body["booking"]["checked"] is False
        assert body["booking"]["status"] == "open"

        listed = client.get("/bookings/user/+919876543210").json()["bookings"]
        assert [b["id"] for b in listed] == [body["booking"]["id"]]

    def test_patient_lookup_normalizes_phone(self, client, booking_payload):
        client.post("/bookings", json=booking_payload(patientPhone="98765-43210"))
        listed = client.get("/bookings/user/9876543210").json()["bookings"]
        assert len(listed) == 1
        assert listed[0]["patientPhone"] == "+919876543210"

    def test_does_not_touch_inventory(self, client, seed_availability, booking_payload, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 1}]}])
        client.post("/bookings", json=booking_payload())
        availability = client.get(f"/doctor-availability/{doctor_id}").json()["availability"]
        assert availability[0]["slots"][0]["count"] == 1

    def test_invalid_payload(self, client, booking_payload):
        response = client.post("/bookings", json=booking_payload(slot="morning-12:00"))
        assert response.status_code == 422
        assert response.json()["success"] is False

        response = client.post("/bookings", json=booking_payload(patientPhone="12"))
        assert response.status_code == 422

    def test_notification_failure_does_not_fail_booking(self, client, booking_payload):
        failing = AsyncMock(return_value={"sent": False, "error": "push down"})
        with patch.object(bookings_router, "send_booking_confirmation", failing):
            response = client.post("/bookings", json=booking_payload())

        assert response.status_code == 201
        assert response.json()["notificationSent"] is False
        failing.assert_awaited_once()


class TestReserveBooking:
    def test_reserve_reduces_slot(self, client, seed_availability, booking_payload, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 1}]}])

        response = client.post("/bookings/reserve", json=booking_payload())
        assert response.status_code == 201

        availability = client.get(f"/doctor-availability/{doctor_id}").json()["availability"]
        assert availability[0]["slots"][0]["count"] == 0

        second = client.post("/bookings/reserve", json=booking_payload(patientName="Late"))
        assert second.status_code == 400
        assert second.json() == {"success": False, "message": "No slots left"}
        assert len(client.get("/bookings").json()["bookings"]) == 1

    def test_reserve_without_availability(self, client, booking_payload):
        response = client.post("/bookings/reserve", json=booking_payload())
        assert response.status_code == 404
        assert client.get("/bookings").json()["bookings"] == []


class TestListing:
    def test_list_all_with_paging(self, client, booking_payload):
        for i in range(3):
            client.post("/bookings", json=booking_payload(bookingId=f"BK00000{i}"))

        all_bookings = client.get("/bookings").json()["bookings"]
        assert [b["bookingId"] for b in all_bookings] == ["BK000002", "BK000001", "BK000000"]

        page = client.get("/bookings", params={"skip": 1, "limit": 1}).json()["bookings"]
        assert [b["bookingId"] for b in page] == ["BK000001"]

    def test_list_by_doctor(self, client, booking_payload):
        client.post("/bookings", json=booking_payload())
        client.post("/bookings", json=booking_payload(doctorId="doc-2"))
        bookings = client.get("/bookings/doctor/doc-2").json()["bookings"]
        assert [b["doctorId"] for b in bookings] == ["doc-2"]

    def test_notifications_feed(self, client, booking_payload):
        client.post("/bookings", json=booking_payload(date="2025-03-01"))
        client.post("/bookings", json=booking_payload(date="2025-03-12"))

        body = client.get(
            "/bookings/user/+919876543210/notifications", params={"today": "2025-03-10"}
        ).json()
        assert [b["date"] for b in body["notifications"]] == ["2025-03-12"]

    def test_bad_phone_is_422(self, client):
        response = client.get("/bookings/user/abc")
        assert response.status_code == 422
        assert response.json()["success"] is False


class TestCheckIn:
    def test_check_in_shows_in_listing(self, client, booking_payload):
        """Checking a booking updates it in place without duplicating it."""
        booking = client.post("/bookings", json=booking_payload()).json()["booking"]

        response = client.patch(f"/bookings/{booking['id']}/checked", json={"checked": True})
        assert response.status_code == 200
        assert response.json()["booking"]["checked"] is True

        listed = client.get("/bookings").json()["bookings"]
        assert len(listed) == 1
        assert listed[0]["id"] == booking["id"]
        assert listed[0]["checked"] is True
        assert listed[0]["status"] == "checked"

    def test_check_in_twice(self, client, booking_payload):
        booking = client.post("/bookings", json=booking_payload()).json()["booking"]
        url = f"/bookings/{booking['id']}/checked"
        assert client.patch(url, json={"checked": True}).json()["booking"]["checked"] is True
        assert client.patch(url, json={"checked": True}).json()["booking"]["checked"] is True

    def test_reopen_is_409(self, client, booking_payload):
        booking = client.post("/bookings", json=booking_payload()).json()["booking"]
        url = f"/bookings/{booking['id']}/checked"
        client.patch(url, json={"checked": True})

        response = client.patch(url, json={"checked": False})
        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "Checked bookings cannot be reopened",
        }

    def test_unknown_booking_is_404(self, client):
        response = client.patch("/bookings/999/checked", json={"checked": True})
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestRequiredPhone:
    def test_empty_phone_is_rejected(self, client, booking_payload):
        """A booking without a phone could never be found by the patient again."""
        for path in ("/bookings", "/bookings/reserve"):
            response = client.post(path, json=booking_payload(patientPhone=""))
            assert response.status_code == 422
            assert "Phone number is required" in response.json()["message"]

        assert client.get("/bookings").json()["bookings"] == []

    def test_blank_phone_is_rejected(self, client, booking_payload):
        response = client.post("/bookings", json=booking_payload(patientPhone="   "))
        assert response.status_code == 422
