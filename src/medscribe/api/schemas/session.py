"""Session, recording and note generation schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from ...domain.entities.session import ScribeSession
from ...domain.enums.recording import RecordingState


class SessionStateResponse(BaseModel):
    """Everything the scribe screen renders for the current session."""

    transcript: str = Field("", description="Transcript recorded so far")
    medical_notes: str = Field("", description="Generated (or placeholder) notes")
    is_recording: bool = Field(False, description="True exactly while recording is active")
    is_processing: bool = Field(False, description="True while notes are being generated")
    recording_state: RecordingState = Field(RecordingState.IDLE, description="Recording state machine state")
    selected_patient_id: Optional[str] = Field(None, description="Selected patient, if any")
    status: str = Field("", description="Status line")

    @classmethod
    def from_session(cls, session: ScribeSession) -> "SessionStateResponse":
        return cls(
            transcript=session.transcript,
            medical_notes=session.medical_notes,
            is_recording=session.is_recording,
            is_processing=session.is_processing,
            recording_state=session.recording_state,
            selected_patient_id=str(session.selected_patient_id) if session.selected_patient_id else None,
            status=session.status,
        )


class RecordingStateResponse(BaseModel):
    state: RecordingState
    is_recording: bool
    status: str

    @classmethod
    def from_session(cls, session: ScribeSession) -> "RecordingStateResponse":
        return cls(
            state=session.recording_state,
            is_recording=session.is_recording,
            status=session.status,
        )


class NoteGenerationResult(BaseModel):
    generated: bool = Field(..., description="True when new notes were produced")
    status: str = Field(..., description="Status line after the request")
    medical_notes: str = Field("", description="Current notes")
