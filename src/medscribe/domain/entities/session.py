"""Transient state of the current scribe session (never persisted)."""

from dataclasses import dataclass
from typing import Optional

from ...core.constants import STATUS_READY
from ..enums.recording import RecordingState
from ..value_objects.patient_id import PatientId


@dataclass
class ScribeSession:
    """What the clinician currently sees: transcript, notes, flags and status."""

    transcript: str = ""
    medical_notes: str = ""
    is_processing: bool = False
    selected_patient_id: Optional[PatientId] = None
    status: str = STATUS_READY
    recording_state: RecordingState = RecordingState.IDLE

    @property
    def is_recording(self) -> bool:
        return self.recording_state == RecordingState.ACTIVE

    def append_transcript(self, text: str) -> None:
        """Append a recognized fragment, space separated."""
        if not text:
            return
        self.transcript = f"{self.transcript} {text}" if self.transcript else text

    def clear(self) -> None:
        """Reset transcript and notes; the selected patient is kept."""
        self.transcript = ""
        self.medical_notes = ""
        self.status = STATUS_READY
