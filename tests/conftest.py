"""
Shared fixtures and test doubles.

The doubles stand in for the speech engine, the microphone, the completion
service and the document store, so no test touches a network or a device.
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from medscribe.application.ports.services.completion_service import CompletionService
from medscribe.application.ports.services.microphone import MicrophoneAccess
from medscribe.application.ports.services.speech_engine import (
    CancellationDetails,
    RecognitionEvent,
    RecognitionHandlers,
    SpeechEngine,
    SpeechRecognizer,
)
from medscribe.application.ports.storage.document_store import DocumentStore
from medscribe.application.workspace import ScribeWorkspace
from medscribe.adapters.storage.memory_store import MemoryDocumentStore
from medscribe.core.config import Settings
from medscribe.core.constants import API_SETTINGS_DOCUMENT_KEY
from medscribe.core.exceptions import CompletionServiceError, SpeechServiceError
from medscribe.domain.enums.recording import RecognitionReason
from medscribe.domain.errors import MicrophonePermissionDeniedError, PersistenceError


CONFIGURED_API_SETTINGS = {
    "speechKey": "speech-key-1234",
    "speechRegion": "eastus",
    "openaiEndpoint": "https://example.openai.azure.com/",
    "openaiKey": "openai-key-5678",
    "openaiDeployment": "gpt-4.1",
    "openaiApiVersion": "2024-08-01-preview",
}


class FakeMicrophone(MicrophoneAccess):
    def __init__(self, deny: bool = False) -> None:
        self.deny = deny
        self.requests = 0

    async def request_access(self) -> None:
        self.requests += 1
        if self.deny:
            raise MicrophonePermissionDeniedError("NotAllowedError")


class ScriptedRecognizer(SpeechRecognizer):
    """Recognizer whose events are emitted by the test."""

    def __init__(
        self,
        start_error: Optional[str] = None,
        stop_error: Optional[str] = None,
        cancel_on_start: Optional[CancellationDetails] = None,
    ) -> None:
        self.start_error = start_error
        self.stop_error = stop_error
        self.cancel_on_start = cancel_on_start
        self.handlers: Optional[RecognitionHandlers] = None
        self.started = False
        self.stopped = False

    async def start(self, handlers: RecognitionHandlers) -> None:
        self.handlers = handlers
        if self.cancel_on_start is not None:
            handlers.on_canceled(self.cancel_on_start)
        if self.start_error:
            raise SpeechServiceError(self.start_error)
        self.started = True

    async def stop(self) -> None:
        self.stopped = True
        if self.stop_error:
            raise SpeechServiceError(self.stop_error)

    def interim(self, text: str) -> None:
        self.handlers.on_interim(RecognitionEvent(text, RecognitionReason.RECOGNIZING_SPEECH))

    def final(self, text: str, reason: RecognitionReason = RecognitionReason.RECOGNIZED_SPEECH) -> None:
        self.handlers.on_final(RecognitionEvent(text, reason))

    def session_stopped(self) -> None:
        self.handlers.on_session_stopped()

    def canceled(self, error_code: str, error_details: str) -> None:
        self.handlers.on_canceled(CancellationDetails(error_code, error_details))


class ScriptedSpeechEngine(SpeechEngine):
    """Hands out pre-built recognizers in order, or fresh ones when none are queued."""

    def __init__(self, create_error: Optional[Exception] = None) -> None:
        self.create_error = create_error
        self.queued: List[ScriptedRecognizer] = []
        self.created: List[ScriptedRecognizer] = []
        self.calls: List[tuple] = []

    def queue(self, recognizer: ScriptedRecognizer) -> ScriptedRecognizer:
        self.queued.append(recognizer)
        return recognizer

    def create_recognizer(self, credential_key, region, recognition_language=None):
        self.calls.append((credential_key, region, recognition_language))
        if self.create_error is not None:
            raise self.create_error
        recognizer = self.queued.pop(0) if self.queued else ScriptedRecognizer()
        self.created.append(recognizer)
        return recognizer

    @property
    def last(self) -> ScriptedRecognizer:
        return self.created[-1]


class FakeCompletionService(CompletionService):
    def __init__(self, response: str = "CHIEF COMPLAINT: weight management", error: Optional[CompletionServiceError] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.gate: Optional[asyncio.Event] = None

    async def complete(self, api_settings, messages, max_tokens, temperature) -> str:
        self.calls.append(
            {
                "api_settings": api_settings,
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


class FailingDocumentStore(DocumentStore):
    """Backend that is down for loads, saves, or both."""

    def __init__(self, fail_load: bool = True, fail_save: bool = True, documents: Optional[Dict[str, Any]] = None) -> None:
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.documents = dict(documents or {})
        self.load_calls = 0
        self.save_calls = 0

    async def load(self, key: str):
        self.load_calls += 1
        if self.fail_load:
            raise PersistenceError(key, "storage quota exceeded")
        return self.documents.get(key)

    async def save(self, key: str, document: Any) -> None:
        self.save_calls += 1
        if self.fail_save:
            raise PersistenceError(key, "storage quota exceeded")
        self.documents[key] = document


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def microphone() -> FakeMicrophone:
    return FakeMicrophone()


@pytest.fixture
def speech_engine() -> ScriptedSpeechEngine:
    return ScriptedSpeechEngine()


@pytest.fixture
def completion_service() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def document_store() -> MemoryDocumentStore:
    return MemoryDocumentStore({API_SETTINGS_DOCUMENT_KEY: CONFIGURED_API_SETTINGS})


@pytest.fixture
def workspace(settings, document_store, speech_engine, microphone, completion_service) -> ScribeWorkspace:
    """Workspace with fully configured API settings; call ``await workspace.load()`` first."""
    return ScribeWorkspace(
        settings=settings,
        document_store=document_store,
        speech_engine=speech_engine,
        microphone=microphone,
        completion_service=completion_service,
    )
