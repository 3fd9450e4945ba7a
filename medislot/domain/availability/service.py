"""Availability service - Slot allocation rules for doctor inventories"""

import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import DoctorAvailability
from ...shared.errors import DateRangeError, NotFoundError, SlotsExhaustedError
from .calendar import project_month, to_availability_map, upcoming_dates
from .catalog import Period, day_slot_board, parse_slot_key
from .repository import AvailabilityRepository

logger = logging.getLogger(__name__)


def serialize_days(availability: DoctorAvailability) -> list[dict]:
    """Render stored rows in the wire shape [{date, slots:[{slotKey, count}]}]"""
    return [
        {
            "date": day.date,
            "slots": [{"slotKey": s.slot_key, "count": s.count} for s in day.slots],
        }
        for day in availability.days
    ]


class AvailabilityService:
    """Service layer for slot inventory reads, full replaces and atomic count changes"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AvailabilityRepository()

    def get_availability(self, doctor_id: str) -> list[dict]:
        """Return the stored days, or raise NotFoundError when no document exists"""
        availability = self.repo.get_by_doctor(self.db, doctor_id)
        if not availability:
            raise NotFoundError("No availability found")
        return serialize_days(availability)

    def get_availability_map(self, doctor_id: str) -> dict[str, dict[str, int]]:
        """{date: {slotKey: count}}; empty when the doctor has never saved availability"""
        availability = self.repo.get_by_doctor(self.db, doctor_id)
        if not availability:
            return {}
        return to_availability_map(serialize_days(availability))

    def replace_availability(self, doctor_id: str, days: list[dict]) -> list[dict]:
        """Upsert the document and overwrite its whole day list"""
        availability = self.repo.replace_days(self.db, doctor_id, days)
        logger.info(f"📅 Availability replaced for doctor {doctor_id}: {len(days)} day(s)")
        return serialize_days(availability)

    def _raise_missing_or_exhausted(self, doctor_id: str, date_key: str, slot_key: str):
        if self.repo.get_slot_count(self.db, doctor_id, date_key, slot_key) is not None:
            raise SlotsExhaustedError()

        availability = self.repo.get_by_doctor(self.db, doctor_id)
        if not availability:
            raise NotFoundError("Doctor availability not found")
        day = next((d for d in availability.days if d.date == date_key), None)
        if not day:
            raise NotFoundError("Date entry not found")
        raise NotFoundError("Slot not found")

    def take_slot(self, doctor_id: str, date_key: str, slot_key: str) -> None:
        """
        Decrement a slot by one inside the caller's transaction.

        Raises NotFoundError or SlotsExhaustedError; nothing is committed here.
        """
        changed = self.repo.decrement_slot(self.db, doctor_id, date_key, slot_key)
        if changed != 1:
            self._raise_missing_or_exhausted(doctor_id, date_key, slot_key)

    def reduce_slot(self, doctor_id: str, date_key: str, slot_key: str) -> list[dict]:
        """Atomically take one unit from a slot and return the updated days"""
        try:
            self.take_slot(doctor_id, date_key, slot_key)
        except SlotsExhaustedError:
            self.db.rollback()
            logger.info(f"🚫 No slots left: doctor={doctor_id} date={date_key} slot={slot_key}")
            raise
        except Exception:
            self.db.rollback()
            raise
        self.db.commit()
        logger.info(f"✅ Slot reduced: doctor={doctor_id} date={date_key} slot={slot_key}")
        return self.get_availability(doctor_id)

    def restore_slot(self, doctor_id: str, date_key: str, slot_key: str) -> list[dict]:
        """Give one unit back to a slot (compensates a cancelled reservation)"""
        changed = self.repo.increment_slot(self.db, doctor_id, date_key, slot_key)
        if changed != 1:
            self.db.rollback()
            self._raise_missing_or_exhausted(doctor_id, date_key, slot_key)
        self.db.commit()
        logger.info(f"↩️ Slot restored: doctor={doctor_id} date={date_key} slot={slot_key}")
        return self.get_availability(doctor_id)

    def set_slot_count(self, doctor_id: str, date_key: str, slot_key: str, count: int) -> list[dict]:
        """Set (not decrement) a slot's count directly"""
        changed = self.repo.set_slot_count(self.db, doctor_id, date_key, slot_key, count)
        if changed != 1:
            self.db.rollback()
            # A present slot always matches the update, so this only reports what is missing
            self._raise_missing_or_exhausted(doctor_id, date_key, slot_key)
        self.db.commit()
        return self.get_availability(doctor_id)

    def get_summary(self, doctor_id: str) -> dict:
        """Totals per day and per period, counting only days with remaining capacity"""
        days = self.get_availability(doctor_id)
        summary_days = []
        for day in days:
            periods = {p.value: 0 for p in Period}
            for slot in day["slots"]:
                period, _ = parse_slot_key(slot["slotKey"])
                periods[period.value] += slot["count"]
            total = sum(periods.values())
            if total > 0:
                summary_days.append({"date": day["date"], "totalSlots": total, "periods": periods})
        return {
            "totalDays": len(summary_days),
            "totalSlots": sum(d["totalSlots"] for d in summary_days),
            "days": summary_days,
        }

    def get_calendar(
        self,
        doctor_id: str,
        year: int,
        month: int,
        today: date,
        selected_dates: Iterable[str] = (),
    ) -> list[list[dict]]:
        availability = self.get_availability_map(doctor_id)
        try:
            grid = project_month(year, month, availability, today, selected_dates)
        except OverflowError as e:
            # The padded grid of 0001-01 and 9999-12 falls outside datetime.date
            raise DateRangeError(f"Calendar for {year}-{month:02d} is out of range") from e
        return [[cell.to_dict() for cell in week] for week in grid]

    def get_upcoming(self, doctor_id: str, today: date, horizon: int = 30) -> list[dict]:
        availability = self.get_availability_map(doctor_id)
        try:
            return upcoming_dates(availability, today, horizon)
        except OverflowError as e:
            raise DateRangeError(f"Date strip starting {today.isoformat()} is out of range") from e

    def get_day_board(self, doctor_id: str, date_key: str) -> list[dict]:
        """Full catalog for one date with the remaining count of each slot"""
        day = self.repo.get_day(self.db, doctor_id, date_key)
        stored: Optional[list[dict]] = None
        if day:
            stored = [{"slotKey": s.slot_key, "count": s.count} for s in day.slots]
        return day_slot_board(stored)
