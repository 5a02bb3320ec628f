"""Generate medical notes use case: transcript plus context to structured notes."""

import logging

from ...core.config import CompletionSettings, NotesSettings
from ...core.constants import (
    NOTES_ERROR_PLACEHOLDER,
    STATUS_COMPLETION_AUTH_FAILED,
    STATUS_COMPLETION_DEPLOYMENT_NOT_FOUND,
    STATUS_COMPLETION_FAILED,
    STATUS_COMPLETION_NOT_CONFIGURED,
    STATUS_COMPLETION_RATE_LIMITED,
    STATUS_GENERATING,
    STATUS_NO_TRANSCRIPT,
    STATUS_NOTES_GENERATED,
)
from ...core.exceptions import CompletionServiceError
from ...domain.entities.session import ScribeSession
from ..dto.scribe_dto import NoteGenerationResponse
from ..ports.services.completion_service import CompletionService
from ..stores.patient_store import PatientStore
from ..stores.preferences_store import PreferencesStore
from ..stores.settings_store import ApiSettingsStore
from ..utils.note_prompt import build_note_messages

logger = logging.getLogger(__name__)


def classify_completion_error(error: CompletionServiceError) -> str:
    if error.category == CompletionServiceError.AUTHENTICATION:
        return STATUS_COMPLETION_AUTH_FAILED
    if error.category == CompletionServiceError.NOT_FOUND:
        return STATUS_COMPLETION_DEPLOYMENT_NOT_FOUND
    if error.category == CompletionServiceError.RATE_LIMITED:
        return STATUS_COMPLETION_RATE_LIMITED
    return STATUS_COMPLETION_FAILED.format(error=error.raw_message)


class GenerateMedicalNotesUseCase:
    """Use case for turning the current transcript into medical notes.

    Single flight: while a request is outstanding further calls do nothing.
    The patient store is only read here; saving a visit is a separate action.
    """

    def __init__(
        self,
        session: ScribeSession,
        patient_store: PatientStore,
        preferences_store: PreferencesStore,
        settings_store: ApiSettingsStore,
        completion_service: CompletionService,
        completion_settings: CompletionSettings,
        notes_settings: NotesSettings,
    ):
        self._session = session
        self._patient_store = patient_store
        self._preferences_store = preferences_store
        self._settings_store = settings_store
        self._completion_service = completion_service
        self._completion_settings = completion_settings
        self._notes_settings = notes_settings

    async def execute(self) -> NoteGenerationResponse:
        """Execute the note generation use case."""
        session = self._session
        if session.is_processing:
            logger.info("Note generation already in progress, ignoring request")
            return NoteGenerationResponse(generated=False, status=session.status)

        transcript = session.transcript
        if not transcript.strip():
            session.status = STATUS_NO_TRANSCRIPT
            return NoteGenerationResponse(generated=False, status=session.status)

        api_settings = self._settings_store.current
        if api_settings.missing_completion_fields():
            session.status = STATUS_COMPLETION_NOT_CONFIGURED
            return NoteGenerationResponse(generated=False, status=session.status)

        session.is_processing = True
        session.status = STATUS_GENERATING
        try:
            patient = None
            if session.selected_patient_id is not None:
                patient = self._patient_store.find(session.selected_patient_id)

            messages = build_note_messages(
                transcript,
                self._preferences_store.current,
                patient,
                history_visits=self._notes_settings.history_visits,
                history_note_chars=self._notes_settings.history_note_chars,
            )
            logger.info(
                f"🤖 Generating notes (transcript chars: {len(transcript)}, "
                f"patient context: {patient is not None})"
            )

            try:
                notes = await self._completion_service.complete(
                    api_settings,
                    messages,
                    max_tokens=self._completion_settings.max_tokens,
                    temperature=self._completion_settings.temperature,
                )
            except CompletionServiceError as exc:
                status = classify_completion_error(exc)
                logger.error(
                    f"❌ Note generation failed (status code: {exc.status_code}, category: {exc.category})"
                )
                session.medical_notes = NOTES_ERROR_PLACEHOLDER.format(status=status)
                session.status = status
                return NoteGenerationResponse(
                    generated=False, status=status, medical_notes=session.medical_notes
                )

            session.medical_notes = notes
            session.status = STATUS_NOTES_GENERATED
            logger.info(f"✅ Notes generated ({len(notes)} chars)")
            return NoteGenerationResponse(generated=True, status=session.status, medical_notes=notes)
        finally:
            session.is_processing = False
