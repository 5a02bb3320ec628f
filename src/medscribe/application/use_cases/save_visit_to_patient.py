"""Save the current notes as a visit on the selected patient."""

import logging

from ...core.constants import STATUS_SAVE_VISIT_PRECONDITION, STATUS_VISIT_SAVED
from ...domain.entities.session import ScribeSession
from ...domain.entities.visit import Visit
from ..dto.scribe_dto import SaveVisitResponse
from ..services.storage_health import StorageHealth
from ..stores.patient_store import PatientStore

logger = logging.getLogger(__name__)


class SaveVisitToPatientUseCase:
    """Use case for appending one visit to the selected patient's history."""

    def __init__(self, session: ScribeSession, patient_store: PatientStore, health: StorageHealth):
        self._session = session
        self._patient_store = patient_store
        self._health = health

    async def execute(self) -> SaveVisitResponse:
        session = self._session
        patient_id = session.selected_patient_id
        if patient_id is None or not session.medical_notes.strip():
            session.status = STATUS_SAVE_VISIT_PRECONDITION
            return SaveVisitResponse(saved=False, status=session.status)

        visit = Visit.record(transcript=session.transcript, notes=session.medical_notes)
        patient = await self._patient_store.add_visit(patient_id, visit)
        session.status = self._health.status_with_notice(STATUS_VISIT_SAVED)
        return SaveVisitResponse(saved=True, status=session.status, patient=patient)
