"""
Recording session state machine tests.
"""

import pytest

from medscribe.application.ports.services.speech_engine import CancellationDetails
from medscribe.application.services.recording_session import classify_speech_error
from medscribe.adapters.storage.memory_store import MemoryDocumentStore
from medscribe.application.workspace import ScribeWorkspace
from medscribe.core.constants import (
    STATUS_INVALID_SPEECH_KEY,
    STATUS_MICROPHONE_DENIED,
    STATUS_RECORDING,
    STATUS_RECORDING_COMPLETE,
    STATUS_SESSION_ENDED,
    STATUS_SPEECH_NOT_CONFIGURED,
    STATUS_SPEECH_QUOTA_OR_REGION,
    STATUS_STOPPED_WITH_ERROR,
)
from medscribe.core.exceptions import SpeechServiceError
from medscribe.domain.enums.recording import RecognitionReason, RecordingState

from conftest import ScriptedRecognizer


@pytest.mark.asyncio
async def test_start_records_and_appends_results(workspace, speech_engine, microphone):
    await workspace.load()

    state = await workspace.recording.start()

    assert state == RecordingState.ACTIVE
    assert workspace.session.is_recording is True
    assert workspace.session.status == STATUS_RECORDING
    assert microphone.requests == 1
    assert speech_engine.calls == [("speech-key-1234", "eastus", "en-US")]

    recognizer = speech_engine.last
    recognizer.interim("patient reports")
    recognizer.final("weight gain")
    assert workspace.session.transcript == "patient reports weight gain"


@pytest.mark.asyncio
async def test_non_speech_final_results_and_empty_text_are_discarded(workspace, speech_engine):
    await workspace.load()
    await workspace.recording.start()
    recognizer = speech_engine.last

    recognizer.final("", RecognitionReason.RECOGNIZED_SPEECH)
    recognizer.final("noise", RecognitionReason.NO_MATCH)
    recognizer.interim("")
    recognizer.final("hello")

    assert workspace.session.transcript == "hello"


@pytest.mark.asyncio
async def test_start_without_speech_settings_never_touches_microphone(settings, speech_engine, microphone, completion_service):
    workspace = ScribeWorkspace(settings, MemoryDocumentStore(), speech_engine, microphone, completion_service)
    await workspace.load()

    state = await workspace.recording.start()

    assert state == RecordingState.ERROR
    assert workspace.session.status == STATUS_SPEECH_NOT_CONFIGURED
    assert microphone.requests == 0
    assert speech_engine.calls == []


@pytest.mark.asyncio
async def test_microphone_denied(workspace, speech_engine, microphone):
    await workspace.load()
    microphone.deny = True

    state = await workspace.recording.start()

    assert state == RecordingState.ERROR
    assert workspace.session.status == STATUS_MICROPHONE_DENIED
    assert workspace.session.is_recording is False
    assert speech_engine.calls == []


@pytest.mark.asyncio
async def test_start_while_active_is_a_no_op(workspace, speech_engine):
    await workspace.load()
    await workspace.recording.start()

    state = await workspace.recording.start()

    assert state == RecordingState.ACTIVE
    assert len(speech_engine.created) == 1


@pytest.mark.asyncio
async def test_stop_returns_to_idle_and_ignores_late_events(workspace, speech_engine):
    await workspace.load()
    await workspace.recording.start()
    recognizer = speech_engine.last
    recognizer.final("first")

    state = await workspace.recording.stop()

    assert state == RecordingState.IDLE
    assert recognizer.stopped is True
    assert workspace.session.status == STATUS_RECORDING_COMPLETE
    recognizer.final("late")
    assert workspace.session.transcript == "first"


@pytest.mark.asyncio
async def test_stop_without_recognizer_is_idempotent(workspace, speech_engine):
    await workspace.load()

    first = await workspace.recording.stop()
    second = await workspace.recording.stop()

    assert first == second == RecordingState.IDLE
    assert workspace.session.status == STATUS_RECORDING_COMPLETE
    assert speech_engine.calls == []


@pytest.mark.asyncio
async def test_stop_failure_still_reaches_idle(workspace, speech_engine):
    await workspace.load()
    speech_engine.queue(ScriptedRecognizer(stop_error="connection reset"))
    await workspace.recording.start()

    state = await workspace.recording.stop()

    assert state == RecordingState.IDLE
    assert workspace.session.status == STATUS_STOPPED_WITH_ERROR
    assert workspace.recording.has_recognizer is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, expected",
    [
        ("Error code: 1006. WebSocket upgrade failed", STATUS_INVALID_SPEECH_KEY),
        ("Error code: 1007. Quota exceeded", STATUS_SPEECH_QUOTA_OR_REGION),
        ("network unreachable", "❌ Recording failed: network unreachable"),
    ],
)
async def test_start_failure_is_classified(workspace, speech_engine, error, expected):
    await workspace.load()
    speech_engine.queue(ScriptedRecognizer(start_error=error))

    state = await workspace.recording.start()

    assert state == RecordingState.ERROR
    assert workspace.session.status == expected
    assert workspace.recording.has_recognizer is False


@pytest.mark.asyncio
async def test_recognizer_setup_failure(settings, document_store, microphone, completion_service):
    from conftest import ScriptedSpeechEngine

    engine = ScriptedSpeechEngine(create_error=SpeechServiceError("invalid subscription format"))
    workspace = ScribeWorkspace(settings, document_store, engine, microphone, completion_service)
    await workspace.load()

    state = await workspace.recording.start()

    assert state == RecordingState.ERROR
    assert workspace.session.status == "❌ Setup failed: invalid subscription format"


@pytest.mark.asyncio
async def test_engine_ending_the_session_returns_to_idle(workspace, speech_engine):
    await workspace.load()
    await workspace.recording.start()

    speech_engine.last.session_stopped()

    assert workspace.session.recording_state == RecordingState.IDLE
    assert workspace.session.status == STATUS_SESSION_ENDED
    assert workspace.session.is_recording is False


@pytest.mark.asyncio
async def test_cancellation_while_active_allows_restart(workspace, speech_engine):
    await workspace.load()
    await workspace.recording.start()
    first = speech_engine.last

    first.canceled("AuthenticationFailure", "WebSocket upgrade failed: Authentication error (401)")

    assert workspace.session.recording_state == RecordingState.ERROR
    assert workspace.session.status == STATUS_INVALID_SPEECH_KEY

    state = await workspace.recording.start()
    assert state == RecordingState.ACTIVE

    # Events from the abandoned recognizer go nowhere
    first.final("stale")
    speech_engine.last.final("fresh")
    assert workspace.session.transcript == "fresh"


@pytest.mark.asyncio
async def test_cancellation_before_start_is_acknowledged(workspace, speech_engine):
    await workspace.load()
    speech_engine.queue(
        ScriptedRecognizer(cancel_on_start=CancellationDetails("Forbidden", "Quota exceeded (403)"))
    )

    state = await workspace.recording.start()

    assert state == RecordingState.ERROR
    assert workspace.session.status == STATUS_SPEECH_QUOTA_OR_REGION


def test_classify_speech_error():
    assert classify_speech_error("AuthenticationFailure: bad key") == STATUS_INVALID_SPEECH_KEY
    assert classify_speech_error("Forbidden: region mismatch") == STATUS_SPEECH_QUOTA_OR_REGION
    assert classify_speech_error("boom") == "❌ Recording failed: boom"


@pytest.mark.parametrize(
    "error,expected",
    [
        ("WebSocket upgrade failed: Authentication error (401)", STATUS_INVALID_SPEECH_KEY),
        ("Connection closed with code 1006", STATUS_INVALID_SPEECH_KEY),
        ("WebSocket upgrade failed: Forbidden (403)", STATUS_SPEECH_QUOTA_OR_REGION),
        ("TooManyRequests: quota exceeded", STATUS_SPEECH_QUOTA_OR_REGION),
        ("Connection to 10.0.0.5:14013 refused", "❌ Recording failed: Connection to 10.0.0.5:14013 refused"),
        ("Unexpected byte at offset 44011", "❌ Recording failed: Unexpected byte at offset 44011"),
    ],
)
def test_classify_speech_error_matches_whole_codes(error, expected):
    assert classify_speech_error(error) == expected
