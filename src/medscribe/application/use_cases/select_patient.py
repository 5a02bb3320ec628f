"""Select or deselect the patient whose history enriches the notes."""

from ...core.constants import STATUS_PATIENT_DESELECTED, STATUS_PATIENT_SELECTED
from ...domain.entities.patient import Patient
from ...domain.entities.session import ScribeSession
from ...domain.value_objects.patient_id import PatientId
from ..stores.patient_store import PatientStore


class SelectPatientUseCase:
    def __init__(self, session: ScribeSession, patient_store: PatientStore):
        self._session = session
        self._patient_store = patient_store

    def execute(self, patient_id: PatientId) -> Patient:
        """Raises PatientNotFoundError for unknown ids; selection is left unchanged then."""
        patient = self._patient_store.get(patient_id)
        self._session.selected_patient_id = patient.patient_id
        self._session.status = STATUS_PATIENT_SELECTED.format(name=patient.name)
        return patient

    def clear(self) -> None:
        self._session.selected_patient_id = None
        self._session.status = STATUS_PATIENT_DESELECTED
