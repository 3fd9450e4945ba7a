"""Booking service - Booking records, reservations and check-in"""

import logging
import time
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Booking
from ...shared.errors import NotFoundError
from ...shared.validators import normalize_phone
from ..availability.catalog import parse_slot_key
from ..availability.service import AvailabilityService
from .lifecycle import next_state, state_of
from .repository import BookingRepository
from .schemas import BookingCreate

logger = logging.getLogger(__name__)


def generate_booking_id(now_ms: Optional[int] = None) -> str:
    """Display id: "BK" + last 6 digits of a millisecond timestamp (not unique)"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return "BK" + str(now_ms)[-6:].zfill(6)


def serialize_booking(booking: Booking) -> dict:
    return {
        "id": booking.id,
        "bookingId": booking.booking_id,
        "patientName": booking.patient_name,
        "patientPhone": booking.patient_phone,
        "doctorId": booking.doctor_id,
        "doctorName": booking.doctor_name,
        "date": booking.date,
        "slot": booking.slot_key,
        "time": booking.time,
        "checked": booking.checked,
        "status": state_of(booking.checked).value,
        "createdAt": booking.created_at,
    }


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    def _booking_fields(self, data: BookingCreate) -> dict:
        _, slot_time = parse_slot_key(data.slot)
        return {
            "booking_id": data.bookingId or generate_booking_id(),
            "patient_name": data.patientName,
            "patient_phone": data.patientPhone,
            "doctor_id": data.doctorId,
            "doctor_name": data.doctorName,
            "date": data.date,
            "slot_key": data.slot,
            "time": data.time or slot_time,
            "checked": data.checked,
        }

    def create_booking(self, data: BookingCreate) -> Booking:
        """
        Persist a booking without touching slot inventory.

        Callers using this path are expected to reduce the slot separately.
        """
        booking = self.repo.create_booking(self.db, **self._booking_fields(data))
        logger.info(
            f"📝 Booking {booking.booking_id} created: doctor={booking.doctor_id} "
            f"date={booking.date} slot={booking.slot_key}"
        )
        return booking

    def reserve_booking(self, data: BookingCreate) -> Booking:
        """
        Take one unit of the slot and persist the booking in one transaction.

        Either both writes land or neither does; an exhausted or missing slot
        leaves no booking behind.
        """
        availability = AvailabilityService(self.db)
        try:
            availability.take_slot(data.doctorId, data.date, data.slot)
            booking = self.repo.add_booking(self.db, **self._booking_fields(data))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(
            f"✅ Booking {booking.booking_id} reserved: doctor={booking.doctor_id} "
            f"date={booking.date} slot={booking.slot_key}"
        )
        return booking

    def list_bookings(self, skip: int = 0, limit: Optional[int] = None) -> list[Booking]:
        return self.repo.list_bookings(self.db, skip, limit)

    def list_patient_bookings(
        self, phone: str, skip: int = 0, limit: Optional[int] = None
    ) -> list[Booking]:
        return self.repo.list_by_phone(self.db, normalize_phone(phone), skip, limit)

    def list_doctor_bookings(
        self, doctor_id: str, skip: int = 0, limit: Optional[int] = None
    ) -> list[Booking]:
        return self.repo.list_by_doctor(self.db, doctor_id, skip=skip, limit=limit)

    def patient_notifications(self, phone: str, today: date) -> list[Booking]:
        """Open bookings dated today or later"""
        return self.repo.list_open_from(self.db, normalize_phone(phone), today.isoformat())

    def set_checked(self, booking_pk: int, checked: bool) -> Booking:
        """Apply a check-in request; repeating it is a no-op"""
        booking = self.repo.get_by_id(self.db, booking_pk)
        if not booking:
            raise NotFoundError("Booking not found")

        current = state_of(booking.checked)
        target = next_state(current, checked)
        if target == current:
            return booking

        booking = self.repo.mark_checked(self.db, booking)
        logger.info(f"🩺 Booking {booking.booking_id} checked in")
        return booking

    def doctor_appointments(self, doctor_id: str) -> list[dict]:
        """Open bookings for a doctor grouped by date, earliest date first"""
        by_date: dict[str, list[dict]] = {}
        for booking in self.repo.list_by_doctor(self.db, doctor_id, checked=False):
            by_date.setdefault(booking.date, []).append(serialize_booking(booking))
        return [
            {"date": d, "bookings": sorted(by_date[d], key=lambda b: b["time"] or "")}
            for d in sorted(by_date)
        ]

    def doctor_patients(self, doctor_id: str) -> list[dict]:
        """One entry per patient phone with all of their checked visits"""
        patients: dict[str, dict] = {}
        for booking in self.repo.list_by_doctor(self.db, doctor_id, checked=True):
            entry = patients.setdefault(
                booking.patient_phone,
                {
                    "patientName": booking.patient_name,
                    "patientPhone": booking.patient_phone,
                    "visits": [],
                },
            )
            entry["visits"].append(serialize_booking(booking))
        return list(patients.values())
