"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Booking


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _newest_first(query):
        return query.order_by(Booking.created_at.desc(), Booking.id.desc())

    @staticmethod
    def add_booking(db: Session, **booking_data) -> Booking:
        """Stage a booking in the current transaction without committing"""
        booking = Booking(**booking_data)
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = BookingRepository.add_booking(db, **booking_data)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def get_by_id(db: Session, booking_pk: int) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_pk).first()

    @staticmethod
    def list_bookings(db: Session, skip: int = 0, limit: Optional[int] = None) -> list[Booking]:
        query = BookingRepository._newest_first(db.query(Booking)).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def list_by_phone(
        db: Session, phone: str, skip: int = 0, limit: Optional[int] = None
    ) -> list[Booking]:
        query = BookingRepository._newest_first(
            db.query(Booking).filter(Booking.patient_phone == phone)
        ).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def list_by_doctor(
        db: Session,
        doctor_id: str,
        checked: Optional[bool] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[Booking]:
        query = db.query(Booking).filter(Booking.doctor_id == doctor_id)
        if checked is not None:
            query = query.filter(Booking.checked == checked)
        query = BookingRepository._newest_first(query).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def list_open_from(db: Session, phone: str, from_date: str) -> list[Booking]:
        """Unchecked bookings for a patient on or after a date, soonest first"""
        return (
            db.query(Booking)
            .filter(
                Booking.patient_phone == phone,
                Booking.checked.is_(False),
                Booking.date >= from_date,
            )
            .order_by(Booking.date.asc(), Booking.time.asc())
            .all()
        )

    @staticmethod
    def mark_checked(db: Session, booking: Booking) -> Booking:
        booking.checked = True
        db.commit()
        db.refresh(booking)
        return booking
