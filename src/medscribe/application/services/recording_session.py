"""
Recording session: the state machine around a continuous speech recognizer.

States: idle -> requesting_permission -> active -> stopping -> idle, with
error reachable from requesting_permission and active. ``start`` is accepted
from idle and error only; ``stop`` is always accepted and never leaves the
session stuck.
"""

import logging
import re
from functools import partial
from typing import Callable, Optional

from ...core.constants import (
    STATUS_INVALID_SPEECH_KEY,
    STATUS_MICROPHONE_DENIED,
    STATUS_RECORDING,
    STATUS_RECORDING_COMPLETE,
    STATUS_RECORDING_FAILED,
    STATUS_REQUESTING_MICROPHONE,
    STATUS_SESSION_ENDED,
    STATUS_SETUP_FAILED,
    STATUS_SPEECH_NOT_CONFIGURED,
    STATUS_SPEECH_QUOTA_OR_REGION,
    STATUS_STOPPED_WITH_ERROR,
)
from ...core.exceptions import SpeechServiceError
from ...domain.entities.api_settings import ApiSettings
from ...domain.entities.session import ScribeSession
from ...domain.enums.recording import RecognitionReason, RecordingState
from ...domain.errors import MicrophonePermissionDeniedError
from ..ports.services.microphone import MicrophoneAccess
from ..ports.services.speech_engine import (
    CancellationDetails,
    RecognitionEvent,
    RecognitionHandlers,
    SpeechEngine,
    SpeechRecognizer,
)

logger = logging.getLogger(__name__)

# Numeric codes only count as whole numbers, not as digits inside ports or offsets
_INVALID_KEY_PATTERN = re.compile(r"\b(?:1006|401)\b|authenticationfailure")
_QUOTA_OR_REGION_PATTERN = re.compile(r"\b(?:1007|403)\b|forbidden|quota|toomanyrequests")


def classify_speech_error(error: str) -> str:
    """Map a raw speech engine error to the status shown to the clinician."""
    lowered = (error or "").lower()
    if _INVALID_KEY_PATTERN.search(lowered):
        return STATUS_INVALID_SPEECH_KEY
    if _QUOTA_OR_REGION_PATTERN.search(lowered):
        return STATUS_SPEECH_QUOTA_OR_REGION
    return STATUS_RECORDING_FAILED.format(error=error)


class RecordingSession:
    """Owns at most one recognizer and feeds its results into the transcript."""

    def __init__(
        self,
        session: ScribeSession,
        engine: SpeechEngine,
        microphone: MicrophoneAccess,
        api_settings: Callable[[], ApiSettings],
        recognition_language: str = "en-US",
    ) -> None:
        self._session = session
        self._engine = engine
        self._microphone = microphone
        self._api_settings = api_settings
        self._recognition_language = recognition_language
        self._recognizer: Optional[SpeechRecognizer] = None
        # Bumped on every start attempt; sinks of older attempts go quiet
        self._generation = 0

    @property
    def state(self) -> RecordingState:
        return self._session.recording_state

    @property
    def has_recognizer(self) -> bool:
        return self._recognizer is not None

    def _transition(self, state: RecordingState, status: Optional[str] = None) -> None:
        previous = self._session.recording_state
        self._session.recording_state = state
        if status is not None:
            self._session.status = status
        if previous != state:
            logger.info(f"🎙️ Recording state {previous.value} -> {state.value}")

    async def start(self) -> RecordingState:
        if self.state not in (RecordingState.IDLE, RecordingState.ERROR):
            logger.debug(f"Ignoring start while {self.state.value}")
            return self.state

        settings = self._api_settings()
        if settings.missing_speech_fields():
            self._transition(RecordingState.ERROR, STATUS_SPEECH_NOT_CONFIGURED)
            return self.state

        self._generation += 1
        generation = self._generation
        self._transition(RecordingState.REQUESTING_PERMISSION, STATUS_REQUESTING_MICROPHONE)

        try:
            await self._microphone.request_access()
        except MicrophonePermissionDeniedError as exc:
            if self._is_pending(generation):
                logger.warning(f"Microphone access refused: {exc.message}")
                self._transition(RecordingState.ERROR, STATUS_MICROPHONE_DENIED)
            return self.state

        if not self._is_pending(generation):
            return self.state

        try:
            recognizer = self._engine.create_recognizer(
                settings.speech_key,
                settings.speech_region,
                self._recognition_language,
            )
        except Exception as exc:
            error = exc.raw_message if isinstance(exc, SpeechServiceError) else str(exc)
            logger.error(f"❌ Recognizer setup failed: {type(exc).__name__}")
            self._transition(RecordingState.ERROR, STATUS_SETUP_FAILED.format(error=error))
            return self.state

        self._recognizer = recognizer
        handlers = RecognitionHandlers(
            on_interim=partial(self._on_interim, generation),
            on_final=partial(self._on_final, generation),
            on_session_stopped=partial(self._on_session_stopped, generation),
            on_canceled=partial(self._on_canceled, generation),
        )

        try:
            await recognizer.start(handlers)
        except SpeechServiceError as exc:
            if self._recognizer is recognizer:
                self._recognizer = None
            if self._is_pending(generation):
                logger.error(f"❌ Recognition start failed: {exc.raw_message}")
                self._transition(RecordingState.ERROR, classify_speech_error(exc.raw_message))
            return self.state

        # stop() may have run while the stream was starting
        if self._is_pending(generation) and self._recognizer is recognizer:
            self._transition(RecordingState.ACTIVE, STATUS_RECORDING)
        return self.state

    async def stop(self) -> RecordingState:
        if self.state == RecordingState.STOPPING:
            return self.state

        recognizer = self._recognizer
        if recognizer is None:
            self._transition(RecordingState.IDLE, STATUS_RECORDING_COMPLETE)
            return self.state

        self._transition(RecordingState.STOPPING)
        try:
            await recognizer.stop()
        except SpeechServiceError as exc:
            logger.warning(f"⚠️ Recognition stop failed: {exc.raw_message}")
            status = STATUS_STOPPED_WITH_ERROR
        else:
            status = STATUS_RECORDING_COMPLETE
        finally:
            if self._recognizer is recognizer:
                self._recognizer = None

        self._transition(RecordingState.IDLE, status)
        return self.state

    def _is_pending(self, generation: int) -> bool:
        return (
            generation == self._generation
            and self.state == RecordingState.REQUESTING_PERMISSION
        )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self._recognizer is not None

    def _on_interim(self, generation: int, event: RecognitionEvent) -> None:
        if self._is_current(generation) and event.text:
            self._session.append_transcript(event.text)

    def _on_final(self, generation: int, event: RecognitionEvent) -> None:
        if not self._is_current(generation):
            return
        if event.reason == RecognitionReason.RECOGNIZED_SPEECH and event.text:
            self._session.append_transcript(event.text)

    def _on_session_stopped(self, generation: int) -> None:
        if self._is_current(generation) and self.state == RecordingState.ACTIVE:
            self._recognizer = None
            self._transition(RecordingState.IDLE, STATUS_SESSION_ENDED)

    def _on_canceled(self, generation: int, details: CancellationDetails) -> None:
        if not details.is_error:
            return
        # The engine may cancel before start() has been acknowledged
        if self._is_current(generation) and self.state in (
            RecordingState.ACTIVE,
            RecordingState.REQUESTING_PERMISSION,
        ):
            logger.error(f"❌ Recognition canceled: {details}")
            self._recognizer = None
            self._transition(RecordingState.ERROR, classify_speech_error(str(details)))
