"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_by_phone(db: Session, phone: str) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.phone == phone).first()

    @staticmethod
    def create_patient(db: Session, **patient_data) -> Patient:
        patient = Patient(**patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        """Update a patient with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(patient, key):
                setattr(patient, key, value)

        db.commit()
        db.refresh(patient)
        return patient
