"""API tests for /doctor-availability and /slots."""

DAY = "2025-03-10"
SLOT = "morning-09:00"


def slot_count(client, doctor_id, day=DAY, slot=SLOT):
    availability = client.get(f"/doctor-availability/{doctor_id}").json()["availability"]
    entry = next(d for d in availability if d["date"] == day)
    return next(s["count"] for s in entry["slots"] if s["slotKey"] == slot)


class TestSaveAndRead:
    def test_unknown_doctor_is_404(self, client):
        response = client.get("/doctor-availability/nobody")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "No availability found"}

    def test_save_then_read(self, client, seed_availability, doctor_id):
        response = seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 2}]}])
        assert response.json()["success"] is True

        response = client.get(f"/doctor-availability/{doctor_id}")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "availability": [{"date": DAY, "slots": [{"slotKey": SLOT, "count": 2}]}],
        }

    def test_empty_save_is_found_not_404(self, client, seed_availability, doctor_id):
        """Saving an empty list keeps the document."""
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 1}]}])
        seed_availability([])

        response = client.get(f"/doctor-availability/{doctor_id}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "availability": []}

    def test_second_save_replaces_first(self, client, seed_availability, doctor_id):
        seed_availability(
            [
                {"date": "2025-03-10", "slots": [{"slotKey": SLOT, "count": 1}]},
                {"date": "2025-03-11", "slots": [{"slotKey": SLOT, "count": 1}]},
            ]
        )
        seed_availability([{"date": "2025-03-12", "slots": [{"slotKey": SLOT, "count": 3}]}])

        availability = client.get(f"/doctor-availability/{doctor_id}").json()["availability"]
        assert [d["date"] for d in availability] == ["2025-03-12"]

    def test_unknown_slot_key_rejected(self, client, doctor_id):
        response = client.post(
            "/doctor-availability",
            json={
                "doctorId": doctor_id,
                "availability": [{"date": DAY, "slots": [{"slotKey": "night-23:00", "count": 1}]}],
            },
        )
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert "Unknown slot key" in body["message"]
        assert body["detail"]

    def test_negative_count_rejected(self, client, doctor_id):
        response = client.post(
            "/doctor-availability",
            json={
                "doctorId": doctor_id,
                "availability": [{"date": DAY, "slots": [{"slotKey": SLOT, "count": -1}]}],
            },
        )
        assert response.status_code == 422

    def test_duplicate_dates_rejected(self, client, doctor_id):
        day = {"date": DAY, "slots": [{"slotKey": SLOT, "count": 1}]}
        response = client.post(
            "/doctor-availability", json={"doctorId": doctor_id, "availability": [day, day]}
        )
        assert response.status_code == 422


class TestReduceSlot:
    def test_reduce_until_exhausted(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 2}]}])
        url = f"/doctor-availability/{doctor_id}/reduce-slot"

        first = client.post(url, json={"date": DAY, "slotKey": SLOT})
        assert first.status_code == 200
        assert first.json()["availability"][0]["slots"][0]["count"] == 1

        second = client.post(url, json={"date": DAY, "slotKey": SLOT})
        assert second.status_code == 200
        assert second.json()["availability"][0]["slots"][0]["count"] == 0

        third = client.post(url, json={"date": DAY, "slotKey": SLOT})
        assert third.status_code == 400
        assert third.json() == {"success": False, "message": "No slots left"}

        assert slot_count(client, doctor_id) == 0

    def test_reduce_missing_is_404(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 2}]}])

        response = client.post(
            f"/doctor-availability/{doctor_id}/reduce-slot",
            json={"date": "2025-04-01", "slotKey": SLOT},
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Date entry not found"

        response = client.post(
            "/doctor-availability/other-doctor/reduce-slot", json={"date": DAY, "slotKey": SLOT}
        )
        assert response.status_code == 404

    def test_restore_slot(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 0}]}])
        response = client.post(
            f"/doctor-availability/{doctor_id}/restore-slot", json={"date": DAY, "slotKey": SLOT}
        )
        assert response.status_code == 200
        assert slot_count(client, doctor_id) == 1


class TestSetSlotCount:
    def test_patch_sets_count(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 1}]}])
        response = client.patch(
            f"/doctor-availability/{doctor_id}/slot",
            json={"date": DAY, "slotKey": SLOT, "count": 5},
        )
        assert response.status_code == 200
        assert slot_count(client, doctor_id) == 5

    def test_patch_missing_slot_is_404(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 1}]}])
        response = client.patch(
            f"/doctor-availability/{doctor_id}/slot",
            json={"date": DAY, "slotKey": "evening-18:00", "count": 5},
        )
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Slot not found"}


class TestViews:
    def test_summary(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 2}]}])
        body = client.get(f"/doctor-availability/{doctor_id}/summary").json()
        assert body["success"] is True
        assert body["totalSlots"] == 2
        assert body["days"][0]["periods"]["morning"] == 2

    def test_calendar(self, client, seed_availability, doctor_id):
        seed_availability(
            [
                {"date": "2025-03-05", "slots": [{"slotKey": SLOT, "count": 2}]},
                {"date": "2025-03-20", "slots": [{"slotKey": SLOT, "count": 1}]},
            ]
        )
        response = client.get(
            f"/doctor-availability/{doctor_id}/calendar",
            params={"year": 2025, "month": 3, "today": "2025-03-10", "selected": ["2025-03-20"]},
        )
        assert response.status_code == 200
        body = response.json()
        cells = {cell["date"]: cell for week in body["weeks"] for cell in week}
        assert len(body["weeks"]) == 6
        assert cells["2025-03-05"]["available"] is False
        assert cells["2025-03-20"]["available"] is True
        assert cells["2025-03-20"]["isSelected"] is True

    def test_calendar_rejects_bad_month(self, client, doctor_id):
        response = client.get(
            f"/doctor-availability/{doctor_id}/calendar", params={"year": 2025, "month": 13}
        )
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_calendar_rejects_bad_today(self, client, doctor_id):
        response = client.get(
            f"/doctor-availability/{doctor_id}/calendar",
            params={"year": 2025, "month": 3, "today": "10/03/2025"},
        )
        assert response.status_code == 422

    def test_upcoming(self, client, seed_availability, doctor_id):
        seed_availability([{"date": "2025-03-11", "slots": [{"slotKey": SLOT, "count": 1}]}])
        body = client.get(
            f"/doctor-availability/{doctor_id}/upcoming", params={"today": "2025-03-10", "days": 3}
        ).json()
        assert [d["available"] for d in body["dates"]] == [False, True, False]

    def test_day_board(self, client, seed_availability, doctor_id):
        seed_availability([{"date": DAY, "slots": [{"slotKey": SLOT, "count": 4}]}])
        body = client.get(f"/doctor-availability/{doctor_id}/slots/{DAY}").json()
        assert len(body["slots"]) == 18
        assert body["slots"][0] == {
            "slotKey": SLOT,
            "period": "morning",
            "time": "09:00",
            "price": 500,
            "count": 4,
            "available": True,
        }


class TestSlotCatalog:
    def test_catalog(self, client):
        body = client.get("/slots/catalog").json()
        assert [p["period"] for p in body["periods"]] == ["morning", "afternoon", "evening"]

    def test_quote(self, client):
        body = client.get("/slots/evening-18:30/quote").json()
        assert body["total"] == 750

    def test_quote_unknown_slot(self, client):
        response = client.get("/slots/night-01:00/quote")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Slot not found"}


class TestCalendarDateRange:
    """Grids and strips that would run past datetime.date limits are rejected cleanly."""

    def test_first_month_of_year_one(self, client, doctor_id):
        response = client.get(
            f"/doctor-availability/{doctor_id}/calendar",
            params={"year": 1, "month": 1, "today": "2025-03-10"},
        )
        assert response.status_code == 422
        assert response.json() == {"success": False, "message": "Calendar for 1-01 is out of range"}

    def test_last_month_of_year_9999(self, client, doctor_id):
        response = client.get(
            f"/doctor-availability/{doctor_id}/calendar",
            params={"year": 9999, "month": 12, "today": "2025-03-10"},
        )
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_neighbouring_months_still_render(self, client, doctor_id):
        for year, month in ((1, 2), (9999, 11)):
            response = client.get(
                f"/doctor-availability/{doctor_id}/calendar",
                params={"year": year, "month": month, "today": "2025-03-10"},
            )
            assert response.status_code == 200
            assert len(response.json()["weeks"]) == 6

    def test_upcoming_near_end_of_calendar(self, client, doctor_id):
        response = client.get(
            f"/doctor-availability/{doctor_id}/upcoming",
            params={"today": "9999-12-30", "days": 5},
        )
        assert response.status_code == 422
        assert response.json()["success"] is False
