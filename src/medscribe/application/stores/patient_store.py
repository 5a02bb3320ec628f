"""Patient list with visit history, persisted as a single document."""

import logging
from typing import Dict, List, Optional, Tuple

from ...core.constants import PATIENTS_DOCUMENT_KEY
from ...domain.entities.patient import Patient
from ...domain.entities.visit import Visit
from ...domain.errors import InvalidPatientDataError, PatientNotFoundError
from ...domain.value_objects.patient_id import PatientId
from .base import DocumentBackedStore

logger = logging.getLogger(__name__)


class PatientStore(DocumentBackedStore):
    """Ordered patient list; insertion order is display order."""

    document_key = PATIENTS_DOCUMENT_KEY

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._patients: Tuple[Patient, ...] = ()

    async def load(self) -> None:
        document = await self._load_document()
        if document is None:
            return
        try:
            self._patients = tuple(Patient.from_document(item) for item in document)
        except (AttributeError, KeyError, TypeError, ValueError, InvalidPatientDataError) as exc:
            self._reject_document(f"malformed patient document: {exc}")
            self._patients = ()
            return
        logger.info(f"Loaded {len(self._patients)} patients")

    def list_patients(self) -> List[Patient]:
        return list(self._patients)

    def find(self, patient_id: PatientId) -> Optional[Patient]:
        for patient in self._patients:
            if patient.patient_id == patient_id:
                return patient
        return None

    def get(self, patient_id: PatientId) -> Patient:
        patient = self.find(patient_id)
        if patient is None:
            raise PatientNotFoundError(str(patient_id))
        return patient

    async def add(self, patient: Patient) -> Patient:
        """Append a new patient and persist the whole list."""
        async with self._write_lock:
            updated = self._patients + (patient,)
            await self._persist(self._to_document(updated))
            self._patients = updated
        logger.info(f"Patient added: {patient.patient_id}")
        return patient

    async def add_visit(self, patient_id: PatientId, visit: Visit) -> Patient:
        """Append a visit to one patient; other patients are untouched."""
        async with self._write_lock:
            target = self.get(patient_id)
            updated_patient = target.add_visit(visit)
            updated = tuple(
                updated_patient if p.patient_id == patient_id else p for p in self._patients
            )
            await self._persist(self._to_document(updated))
            self._patients = updated
        logger.info(
            f"Visit {visit.visit_id} saved for patient {patient_id} "
            f"({len(updated_patient.visits)} visits)"
        )
        return updated_patient

    @staticmethod
    def _to_document(patients: Tuple[Patient, ...]) -> List[Dict]:
        return [patient.to_document() for patient in patients]
