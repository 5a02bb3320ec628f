"""FastAPI dependency providers."""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Request

from ..adapters.external.completion_service_azure_openai import AzureOpenAICompletionService
from ..adapters.external.microphone_azure import DefaultMicrophoneAccess
from ..adapters.external.speech_engine_azure import AzureSpeechEngine
from ..adapters.storage import get_document_store
from ..application.ports.services.completion_service import CompletionService
from ..application.ports.services.microphone import MicrophoneAccess
from ..application.ports.services.speech_engine import SpeechEngine
from ..application.ports.storage.document_store import DocumentStore
from ..application.workspace import ScribeWorkspace
from ..core.config import Settings, get_settings
from .errors import ServiceUnavailableError


@lru_cache()
def get_speech_engine() -> SpeechEngine:
    """Get speech engine instance."""
    settings = get_settings()
    return AzureSpeechEngine(settings.speech.recognition_language)


@lru_cache()
def get_microphone() -> MicrophoneAccess:
    """Get microphone access instance."""
    return DefaultMicrophoneAccess(enabled=get_settings().speech.microphone_enabled)


@lru_cache()
def get_completion_service() -> CompletionService:
    """Get completion service instance."""
    return AzureOpenAICompletionService(request_timeout=get_settings().completion.request_timeout)


def build_workspace(settings: Settings, document_store: Optional[DocumentStore] = None) -> ScribeWorkspace:
    """Assemble the production workspace from configuration.

    ``document_store`` overrides the configured backend.
    """
    return ScribeWorkspace(
        settings=settings,
        document_store=document_store or get_document_store(settings),
        speech_engine=get_speech_engine(),
        microphone=get_microphone(),
        completion_service=get_completion_service(),
    )


def get_workspace(request: Request) -> ScribeWorkspace:
    """The workspace created at startup (or installed by tests)."""
    workspace = getattr(request.app.state, "workspace", None)
    if workspace is None or not workspace.loaded:
        raise ServiceUnavailableError("Scribe workspace is not initialised")
    return workspace


WorkspaceDep = Annotated[ScribeWorkspace, Depends(get_workspace)]
