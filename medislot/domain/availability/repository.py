"""Availability repository - Database operations for doctor slot inventories"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import AvailabilityDay, AvailabilitySlot, DoctorAvailability


class AvailabilityRepository:
    """Repository for availability database operations"""

    @staticmethod
    def get_by_doctor(db: Session, doctor_id: str) -> Optional[DoctorAvailability]:
        """Get the availability document for a doctor"""
        return db.query(DoctorAvailability).filter(DoctorAvailability.doctor_id == doctor_id).first()

    @staticmethod
    def get_or_create(db: Session, doctor_id: str) -> DoctorAvailability:
        """Get the availability document, creating an empty one on first save"""
        availability = AvailabilityRepository.get_by_doctor(db, doctor_id)
        if availability:
            return availability

        availability = DoctorAvailability(doctor_id=doctor_id)
        db.add(availability)
        try:
            db.flush()
        except IntegrityError:
            # Another request created it first
            db.rollback()
            availability = AvailabilityRepository.get_by_doctor(db, doctor_id)
        return availability

    @staticmethod
    def replace_days(db: Session, doctor_id: str, days: list[dict]) -> DoctorAvailability:
        """
        Overwrite every stored day with the given snapshot.

        Days missing from `days` are deleted, never merged.
        """
        availability = AvailabilityRepository.get_or_create(db, doctor_id)

        availability.days.clear()
        # Old rows must be gone before re-inserting the same dates
        db.flush()

        for day in days:
            day_row = AvailabilityDay(date=day["date"])
            for position, slot in enumerate(day.get("slots", [])):
                day_row.slots.append(
                    AvailabilitySlot(slot_key=slot["slotKey"], count=slot["count"], position=position)
                )
            availability.days.append(day_row)

        db.commit()
        db.refresh(availability)
        return availability

    @staticmethod
    def _slot_filter(doctor_id: str, date: str, slot_key: str) -> list:
        day_ids = (
            select(AvailabilityDay.id)
            .join(DoctorAvailability, AvailabilityDay.availability_id == DoctorAvailability.id)
            .where(DoctorAvailability.doctor_id == doctor_id, AvailabilityDay.date == date)
        )
        return [AvailabilitySlot.day_id.in_(day_ids), AvailabilitySlot.slot_key == slot_key]

    @staticmethod
    def decrement_slot(db: Session, doctor_id: str, date: str, slot_key: str) -> int:
        """
        Take one unit from a slot in a single conditional UPDATE.

        Returns the number of rows changed (0 or 1). Does not commit, so the
        caller can pair it with other writes in the same transaction.
        """
        return (
            db.query(AvailabilitySlot)
            .filter(*AvailabilityRepository._slot_filter(doctor_id, date, slot_key))
            .filter(AvailabilitySlot.count > 0)
            .update({AvailabilitySlot.count: AvailabilitySlot.count - 1}, synchronize_session=False)
        )

    @staticmethod
    def increment_slot(db: Session, doctor_id: str, date: str, slot_key: str) -> int:
        """Give one unit back to an existing slot. Does not commit."""
        return (
            db.query(AvailabilitySlot)
            .filter(*AvailabilityRepository._slot_filter(doctor_id, date, slot_key))
            .update({AvailabilitySlot.count: AvailabilitySlot.count + 1}, synchronize_session=False)
        )

    @staticmethod
    def set_slot_count(db: Session, doctor_id: str, date: str, slot_key: str, count: int) -> int:
        """Overwrite a slot's count. Does not commit."""
        return (
            db.query(AvailabilitySlot)
            .filter(*AvailabilityRepository._slot_filter(doctor_id, date, slot_key))
            .update({AvailabilitySlot.count: count}, synchronize_session=False)
        )

    @staticmethod
    def get_slot_count(db: Session, doctor_id: str, date: str, slot_key: str) -> Optional[int]:
        """Current count of a slot, or None if the slot does not exist"""
        row = (
            db.query(AvailabilitySlot.count)
            .filter(*AvailabilityRepository._slot_filter(doctor_id, date, slot_key))
            .first()
        )
        return row[0] if row else None

    @staticmethod
    def get_day(db: Session, doctor_id: str, date: str) -> Optional[AvailabilityDay]:
        return (
            db.query(AvailabilityDay)
            .join(DoctorAvailability, AvailabilityDay.availability_id == DoctorAvailability.id)
            .filter(DoctorAvailability.doctor_id == doctor_id, AvailabilityDay.date == date)
            .first()
        )
