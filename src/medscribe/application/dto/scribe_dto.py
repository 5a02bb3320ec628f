"""Scribe DTOs passed between the API layer and the use cases."""

from dataclasses import dataclass
from typing import Optional

from ...domain.entities.patient import Patient


@dataclass
class AddPatientRequest:
    """Request DTO for adding a patient."""

    name: str
    dob: str = ""
    mrn: str = ""
    conditions: str = ""


@dataclass
class AddPatientResponse:
    patient: Patient
    status: str


@dataclass
class NoteGenerationResponse:
    """Outcome of a note generation request.

    ``generated`` is False for no-ops and failures alike; ``status`` says which.
    """

    generated: bool
    status: str
    medical_notes: str = ""


@dataclass
class SaveVisitResponse:
    saved: bool
    status: str
    patient: Optional[Patient] = None
