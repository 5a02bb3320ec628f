"""
Scribe workspace: the single-clinician object graph behind the API.

One workspace per process. It owns the transient session, the three
document-backed stores, the recording session and the use cases that act on
them.
"""

import logging

from ..core.config import Settings
from ..core.constants import STATUS_READY, STATUS_READY_UNCONFIGURED
from ..domain.entities.api_settings import ApiSettings
from ..domain.entities.session import ScribeSession
from .ports.services.completion_service import CompletionService
from .ports.services.microphone import MicrophoneAccess
from .ports.services.speech_engine import SpeechEngine
from .ports.storage.document_store import DocumentStore
from .services.recording_session import RecordingSession
from .services.storage_health import StorageHealth
from .stores.patient_store import PatientStore
from .stores.preferences_store import PreferencesStore
from .stores.settings_store import ApiSettingsStore
from .use_cases.add_patient import AddPatientUseCase
from .use_cases.generate_medical_notes import GenerateMedicalNotesUseCase
from .use_cases.save_visit_to_patient import SaveVisitToPatientUseCase
from .use_cases.select_patient import SelectPatientUseCase
from .use_cases.update_settings import UpdateApiSettingsUseCase, UpdatePreferencesUseCase

logger = logging.getLogger(__name__)


class ScribeWorkspace:
    def __init__(
        self,
        settings: Settings,
        document_store: DocumentStore,
        speech_engine: SpeechEngine,
        microphone: MicrophoneAccess,
        completion_service: CompletionService,
    ) -> None:
        self.settings = settings
        self.session = ScribeSession()
        self.storage_health = StorageHealth()

        self.patients = PatientStore(document_store, self.storage_health)
        self.preferences = PreferencesStore(document_store, self.storage_health)
        self.api_settings = ApiSettingsStore(
            document_store,
            self.storage_health,
            defaults=ApiSettings(
                speech_region=settings.speech.default_region,
                openai_deployment=settings.completion.default_deployment,
                openai_api_version=settings.completion.default_api_version,
            ),
        )

        self.recording = RecordingSession(
            self.session,
            speech_engine,
            microphone,
            api_settings=lambda: self.api_settings.current,
            recognition_language=settings.speech.recognition_language,
        )

        self.generate_notes = GenerateMedicalNotesUseCase(
            self.session,
            self.patients,
            self.preferences,
            self.api_settings,
            completion_service,
            settings.completion,
            settings.notes,
        )
        self.save_visit = SaveVisitToPatientUseCase(self.session, self.patients, self.storage_health)
        self.add_patient = AddPatientUseCase(self.session, self.patients, self.storage_health)
        self.select_patient = SelectPatientUseCase(self.session, self.patients)
        self.update_api_settings = UpdateApiSettingsUseCase(
            self.session, self.api_settings, self.storage_health
        )
        self.update_preferences = UpdatePreferencesUseCase(
            self.session, self.preferences, self.storage_health
        )
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        """Load the three documents and set the startup status line."""
        await self.patients.load()
        await self.preferences.load()
        await self.api_settings.load()
        self._loaded = True

        ready = STATUS_READY if self.api_settings.current.keys_configured else STATUS_READY_UNCONFIGURED
        self.session.status = self.storage_health.status_with_notice(ready)
        logger.info(
            f"✅ Workspace loaded ({len(self.patients.list_patients())} patients, "
            f"storage degraded: {self.storage_health.degraded})"
        )

    def clear_session(self) -> None:
        self.session.clear()

    async def shutdown(self) -> None:
        """Release the microphone if a recording is still running."""
        if self.recording.has_recognizer:
            await self.recording.stop()
