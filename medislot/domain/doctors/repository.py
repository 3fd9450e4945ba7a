"""Doctor repository - Database operations for doctors"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Doctor


class DoctorRepository:
    """Repository for doctor database operations"""

    @staticmethod
    def get_by_id(db: Session, doctor_id: str) -> Optional[Doctor]:
        return db.query(Doctor).filter(Doctor.id == doctor_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[Doctor]:
        return db.query(Doctor).filter(Doctor.email == email).first()

    @staticmethod
    def list_doctors(db: Session, status: Optional[str] = None) -> list[Doctor]:
        query = db.query(Doctor)
        if status:
            query = query.filter(Doctor.status == status)
        return query.order_by(Doctor.request_date.desc()).all()

    @staticmethod
    def create_doctor(db: Session, **doctor_data) -> Doctor:
        doctor = Doctor(**doctor_data)
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    @staticmethod
    def update_status(db: Session, doctor: Doctor, status: str, verified: bool) -> Doctor:
        doctor.status = status
        doctor.verified = verified
        db.commit()
        db.refresh(doctor)
        return doctor
