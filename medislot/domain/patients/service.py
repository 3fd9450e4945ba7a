"""Patient service - Registration and push token bookkeeping"""

import logging

from sqlalchemy.orm import Session

from ...models import Patient
from ...shared.errors import NotFoundError
from ...shared.validators import normalize_phone
from .repository import PatientRepository
from .schemas import PatientUpsert

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()

    def upsert_patient(self, data: PatientUpsert) -> tuple[Patient, bool]:
        """Create or update by phone; returns (patient, created)"""
        fields = {
            "name": data.name,
            "email": data.email,
            "expo_push_token": data.expoPushToken,
        }
        patient = self.repo.get_by_phone(self.db, data.phone)
        if patient:
            return self.repo.update_patient(self.db, patient, **fields), False

        logger.info(f"👤 Registering patient {data.phone}")
        return self.repo.create_patient(self.db, phone=data.phone, **fields), True

    def get_patient(self, phone: str) -> Patient:
        patient = self.repo.get_by_phone(self.db, normalize_phone(phone))
        if not patient:
            raise NotFoundError("Patient not found")
        return patient
