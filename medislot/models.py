import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique public ID for doctors"""
    return str(uuid.uuid4())


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(20), nullable=False)
    profession = Column(String(255), nullable=False)
    experience = Column(String(100), nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # DoctorStatus value
    verified = Column(Boolean, default=False, nullable=False)
    request_date = Column(DateTime(timezone=True), server_default=func.now())
    image_uri = Column(String(500), nullable=True)


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), unique=True, index=True, nullable=False)  # normalized, +CC...
    expo_push_token = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class DoctorAvailability(Base):
    """One row per doctor; the days below are replaced wholesale on every save"""

    __tablename__ = "doctor_availability"

    id = Column(Integer, primary_key=True, index=True)
    # Not a foreign key: availability may be written before the doctor record syncs
    doctor_id = Column(String(64), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    days = relationship(
        "AvailabilityDay",
        back_populates="availability",
        cascade="all, delete-orphan",
        order_by="AvailabilityDay.date",
    )


class AvailabilityDay(Base):
    __tablename__ = "availability_days"
    __table_args__ = (UniqueConstraint("availability_id", "date", name="uq_availability_day"),)

    id = Column(Integer, primary_key=True, index=True)
    availability_id = Column(
        Integer, ForeignKey("doctor_availability.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(String(10), nullable=False)  # YYYY-MM-DD

    availability = relationship("DoctorAvailability", back_populates="days")
    slots = relationship(
        "AvailabilitySlot",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="AvailabilitySlot.position",
    )


class AvailabilitySlot(Base):
    __tablename__ = "availability_slots"
    __table_args__ = (
        UniqueConstraint("day_id", "slot_key", name="uq_day_slot_key"),
        CheckConstraint("count >= 0", name="ck_slot_count_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    day_id = Column(Integer, ForeignKey("availability_days.id", ondelete="CASCADE"), nullable=False)
    slot_key = Column(String(32), nullable=False)  # e.g. "morning-09:00"
    count = Column(Integer, nullable=False, default=1)
    position = Column(Integer, nullable=False, default=0)  # order as sent by the editor

    day = relationship("AvailabilityDay", back_populates="slots")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(String(20), index=True, nullable=False)  # display id, "BK123456"
    patient_name = Column(String(255), nullable=False)
    patient_phone = Column(String(20), index=True, nullable=False)
    doctor_id = Column(String(64), index=True, nullable=False)
    doctor_name = Column(String(255), nullable=True)
    date = Column(String(10), nullable=False)
    slot_key = Column(String(32), nullable=False)
    time = Column(String(10), nullable=True)
    checked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
