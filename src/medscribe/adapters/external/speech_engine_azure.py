"""
Azure Speech SDK implementation of the speech engine port.

Continuous recognition from the default microphone. SDK callbacks fire on
SDK-owned threads; they are handed to the event loop with
``call_soon_threadsafe`` so the recording session only ever runs on the loop.
"""

import asyncio
import logging
from typing import Optional

import azure.cognitiveservices.speech as speechsdk

from ...application.ports.services.speech_engine import (
    CancellationDetails,
    RecognitionEvent,
    RecognitionHandlers,
    SpeechEngine,
    SpeechRecognizer,
)
from ...core.exceptions import SpeechServiceError
from ...domain.enums.recording import RecognitionReason

logger = logging.getLogger(__name__)

_REASONS = {
    speechsdk.ResultReason.RecognizingSpeech: RecognitionReason.RECOGNIZING_SPEECH,
    speechsdk.ResultReason.RecognizedSpeech: RecognitionReason.RECOGNIZED_SPEECH,
    speechsdk.ResultReason.NoMatch: RecognitionReason.NO_MATCH,
}


def _to_event(evt) -> RecognitionEvent:
    result = evt.result
    return RecognitionEvent(
        text=getattr(result, "text", "") or "",
        reason=_REASONS.get(result.reason, RecognitionReason.OTHER),
    )


def _cancellation_details(evt) -> CancellationDetails:
    details = evt.cancellation_details
    code = getattr(details.code, "name", str(details.code))
    return CancellationDetails(
        error_code=code,
        error_details=details.error_details or "",
        is_error=details.reason == speechsdk.CancellationReason.Error,
    )


class AzureSpeechRecognizer(SpeechRecognizer):
    """One ``speechsdk.SpeechRecognizer`` bound to the default microphone."""

    def __init__(self, recognizer: "speechsdk.SpeechRecognizer") -> None:
        self._recognizer = recognizer
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def _dispatch(self, callback, *args) -> None:
        # Runs on an SDK thread
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(callback, *args)

    def _connect(self, handlers: RecognitionHandlers) -> None:
        self._recognizer.recognizing.connect(
            lambda evt: self._dispatch(handlers.on_interim, _to_event(evt))
        )
        self._recognizer.recognized.connect(
            lambda evt: self._dispatch(handlers.on_final, _to_event(evt))
        )
        self._recognizer.session_stopped.connect(
            lambda evt: self._dispatch(handlers.on_session_stopped)
        )
        self._recognizer.canceled.connect(
            lambda evt: self._dispatch(handlers.on_canceled, _cancellation_details(evt))
        )

    def _disconnect(self) -> None:
        for signal in (
            self._recognizer.recognizing,
            self._recognizer.recognized,
            self._recognizer.session_stopped,
            self._recognizer.canceled,
        ):
            signal.disconnect_all()

    async def start(self, handlers: RecognitionHandlers) -> None:
        self._loop = asyncio.get_running_loop()
        self._connect(handlers)
        try:
            future = self._recognizer.start_continuous_recognition_async()
            await self._loop.run_in_executor(None, future.get)
        except RuntimeError as e:
            self._disconnect()
            raise SpeechServiceError(str(e))
        logger.info("Azure continuous recognition started")

    async def stop(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        try:
            future = self._recognizer.stop_continuous_recognition_async()
            await loop.run_in_executor(None, future.get)
        except RuntimeError as e:
            raise SpeechServiceError(str(e))
        finally:
            self._disconnect()
        logger.info("Azure continuous recognition stopped")


class AzureSpeechEngine(SpeechEngine):
    """Builds Azure recognizers from the clinician's speech key and region."""

    def __init__(self, recognition_language: str = "en-US") -> None:
        self._recognition_language = recognition_language

    def create_recognizer(
        self,
        credential_key: str,
        region: str,
        recognition_language: Optional[str] = None,
    ) -> SpeechRecognizer:
        try:
            speech_config = speechsdk.SpeechConfig(subscription=credential_key, region=region)
            speech_config.speech_recognition_language = (
                recognition_language or self._recognition_language
            )
            audio_config = speechsdk.audio.AudioConfig(use_default_microphone=True)
            recognizer = speechsdk.SpeechRecognizer(
                speech_config=speech_config, audio_config=audio_config
            )
        except (RuntimeError, ValueError) as e:
            raise SpeechServiceError(str(e))
        logger.info(f"Azure recognizer created (region: {region})")
        return AzureSpeechRecognizer(recognizer)
