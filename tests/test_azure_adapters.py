"""
Azure adapter tests: the OpenAI completion client over a mocked HTTP transport,
and the speech recognizer wrapper over a scripted SDK recognizer.
"""

import asyncio
import json
import threading
from types import SimpleNamespace

import azure.cognitiveservices.speech as speechsdk
import httpx
import pytest

from medscribe.adapters.external.completion_service_azure_openai import AzureOpenAICompletionService
from medscribe.adapters.external.speech_engine_azure import (
    AzureSpeechRecognizer,
    _cancellation_details,
    _to_event,
)
from medscribe.application.ports.services.speech_engine import RecognitionHandlers
from medscribe.application.services.recording_session import classify_speech_error
from medscribe.core.constants import STATUS_INVALID_SPEECH_KEY
from medscribe.core.exceptions import CompletionServiceError, SpeechServiceError
from medscribe.domain.entities.api_settings import ApiSettings
from medscribe.domain.enums.recording import RecognitionReason


API_SETTINGS = ApiSettings(
    speech_key="speech-key-1234",
    openai_endpoint="https://example.openai.azure.com/",
    openai_key="openai-key-5678",
    openai_deployment="gpt-4.1",
    openai_api_version="2024-08-01-preview",
)
MESSAGES = [{"role": "system", "content": "You are a scribe."}, {"role": "user", "content": "Transcript"}]


def _completion_body(choices):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4.1",
        "choices": choices,
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def _service(handler, requests=None):
    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return AzureOpenAICompletionService(request_timeout=5.0, transport=httpx.MockTransport(record))


async def _complete(service):
    return await service.complete(API_SETTINGS, MESSAGES, max_tokens=1500, temperature=0.3)


@pytest.mark.asyncio
async def test_completion_request_and_content():
    requests = []
    service = _service(
        lambda request: httpx.Response(
            200,
            json=_completion_body(
                [{"index": 0, "message": {"role": "assistant", "content": "CHIEF COMPLAINT: fatigue"}, "finish_reason": "stop"}]
            ),
        ),
        requests,
    )

    notes = await _complete(service)

    assert notes == "CHIEF COMPLAINT: fatigue"
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/openai/deployments/gpt-4.1/chat/completions"
    assert request.url.params["api-version"] == "2024-08-01-preview"
    assert request.headers["api-key"] == "openai-key-5678"
    body = json.loads(request.content)
    assert body["messages"] == MESSAGES
    assert body["max_tokens"] == 1500
    assert body["temperature"] == 0.3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,message,category",
    [
        (401, "Access denied due to invalid subscription key.", CompletionServiceError.AUTHENTICATION),
        (404, "The API deployment for this resource does not exist.", CompletionServiceError.NOT_FOUND),
        (429, "Requests have exceeded the call rate limit.", CompletionServiceError.RATE_LIMITED),
        (500, "The server had an error processing your request.", CompletionServiceError.OTHER),
    ],
)
async def test_completion_status_errors(status_code, message, category):
    requests = []
    service = _service(
        lambda request: httpx.Response(status_code, json={"error": {"code": str(status_code), "message": message}}),
        requests,
    )

    with pytest.raises(CompletionServiceError) as exc_info:
        await _complete(service)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.category == category
    assert exc_info.value.raw_message == message
    # Never retried
    assert len(requests) == 1


@pytest.mark.asyncio
async def test_completion_connection_error_has_no_status():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CompletionServiceError) as exc_info:
        await _complete(_service(refuse))

    assert exc_info.value.status_code is None
    assert exc_info.value.category == CompletionServiceError.OTHER


@pytest.mark.asyncio
async def test_completion_without_choices_fails():
    service = _service(lambda request: httpx.Response(200, json=_completion_body([])))

    with pytest.raises(CompletionServiceError) as exc_info:
        await _complete(service)

    assert exc_info.value.raw_message == "Response contained no choices"


class FakeSignal:
    def __init__(self):
        self.callbacks = []

    def connect(self, callback):
        self.callbacks.append(callback)

    def disconnect_all(self):
        self.callbacks = []

    def fire(self, evt):
        for callback in list(self.callbacks):
            callback(evt)


class FakeSdkRecognizer:
    """Stands in for ``speechsdk.SpeechRecognizer``."""

    def __init__(self, start_error=None):
        self.recognizing = FakeSignal()
        self.recognized = FakeSignal()
        self.session_stopped = FakeSignal()
        self.canceled = FakeSignal()
        self.start_error = start_error
        self.stopped = False

    def start_continuous_recognition_async(self):
        if self.start_error:
            raise RuntimeError(self.start_error)
        return SimpleNamespace(get=lambda: None)

    def stop_continuous_recognition_async(self):
        self.stopped = True
        return SimpleNamespace(get=lambda: None)


def _result_event(text, reason):
    return SimpleNamespace(result=SimpleNamespace(text=text, reason=reason))


def _canceled_event(reason, code, details):
    return SimpleNamespace(
        cancellation_details=SimpleNamespace(reason=reason, code=code, error_details=details)
    )


def test_sdk_results_map_to_recognition_events():
    assert _to_event(_result_event("hello", speechsdk.ResultReason.RecognizingSpeech)).reason == (
        RecognitionReason.RECOGNIZING_SPEECH
    )
    final = _to_event(_result_event("hello there", speechsdk.ResultReason.RecognizedSpeech))
    assert final.text == "hello there"
    assert final.reason == RecognitionReason.RECOGNIZED_SPEECH
    assert _to_event(_result_event("", speechsdk.ResultReason.NoMatch)).reason == RecognitionReason.NO_MATCH
    assert _to_event(_result_event(None, speechsdk.ResultReason.Canceled)).text == ""


def test_sdk_cancellation_details():
    details = _cancellation_details(
        _canceled_event(
            speechsdk.CancellationReason.Error,
            speechsdk.CancellationErrorCode.AuthenticationFailure,
            "WebSocket upgrade failed: Authentication error (401)",
        )
    )

    assert details.is_error is True
    assert details.error_code == "AuthenticationFailure"
    assert classify_speech_error(str(details)) == STATUS_INVALID_SPEECH_KEY

    end_of_stream = _cancellation_details(
        _canceled_event(speechsdk.CancellationReason.EndOfStream, speechsdk.CancellationErrorCode.NoError, "")
    )
    assert end_of_stream.is_error is False


@pytest.mark.asyncio
async def test_sdk_callbacks_reach_the_loop_in_emission_order():
    sdk = FakeSdkRecognizer()
    recognizer = AzureSpeechRecognizer(sdk)
    loop_thread = threading.get_ident()
    received = []

    def sink(kind):
        def record(*args):
            received.append((kind, args[0].text if args and hasattr(args[0], "text") else None, threading.get_ident()))
        return record

    await recognizer.start(
        RecognitionHandlers(
            on_interim=sink("interim"),
            on_final=sink("final"),
            on_session_stopped=sink("stopped"),
            on_canceled=sink("canceled"),
        )
    )

    def emit():
        sdk.recognizing.fire(_result_event("patient", speechsdk.ResultReason.RecognizingSpeech))
        sdk.recognizing.fire(_result_event("patient reports", speechsdk.ResultReason.RecognizingSpeech))
        sdk.recognized.fire(_result_event("Patient reports fatigue.", speechsdk.ResultReason.RecognizedSpeech))
        sdk.session_stopped.fire(SimpleNamespace())

    sdk_thread = threading.Thread(target=emit)
    sdk_thread.start()
    sdk_thread.join()
    for _ in range(10):
        if len(received) == 4:
            break
        await asyncio.sleep(0.01)

    assert [(kind, text) for kind, text, _ in received] == [
        ("interim", "patient"),
        ("interim", "patient reports"),
        ("final", "Patient reports fatigue."),
        ("stopped", None),
    ]
    assert all(thread == loop_thread for _, _, thread in received)

    await recognizer.stop()
    assert sdk.stopped is True
    assert sdk.recognized.callbacks == []


@pytest.mark.asyncio
async def test_sdk_start_failure_disconnects_signals():
    sdk = FakeSdkRecognizer(start_error="SPXERR_MIC_NOT_AVAILABLE")
    recognizer = AzureSpeechRecognizer(sdk)
    handlers = RecognitionHandlers(
        on_interim=lambda evt: None,
        on_final=lambda evt: None,
        on_session_stopped=lambda: None,
        on_canceled=lambda details: None,
    )

    with pytest.raises(SpeechServiceError) as exc_info:
        await recognizer.start(handlers)

    assert exc_info.value.raw_message == "SPXERR_MIC_NOT_AVAILABLE"
    assert sdk.recognizing.callbacks == []
    assert sdk.canceled.callbacks == []
