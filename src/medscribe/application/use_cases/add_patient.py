"""Add patient use case."""

from ...core.constants import STATUS_PATIENT_ADDED
from ...domain.entities.patient import Patient
from ...domain.entities.session import ScribeSession
from ..dto.scribe_dto import AddPatientRequest, AddPatientResponse
from ..services.storage_health import StorageHealth
from ..stores.patient_store import PatientStore


class AddPatientUseCase:
    """Use case for registering a patient in the local patient list."""

    def __init__(self, session: ScribeSession, patient_store: PatientStore, health: StorageHealth):
        self._session = session
        self._patient_store = patient_store
        self._health = health

    async def execute(self, request: AddPatientRequest) -> AddPatientResponse:
        """Execute the add patient use case.

        Raises:
            InvalidPatientDataError: if the name is blank.
        """
        patient = Patient.register(
            name=request.name,
            dob=request.dob,
            mrn=request.mrn,
            conditions=request.conditions,
        )
        await self._patient_store.add(patient)
        self._session.status = self._health.status_with_notice(
            STATUS_PATIENT_ADDED.format(name=patient.name)
        )
        return AddPatientResponse(patient=patient, status=self._session.status)
