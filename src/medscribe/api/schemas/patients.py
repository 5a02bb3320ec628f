"""Patient and visit schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ...core.utils.string_utils import truncate_string
from ...domain.entities.patient import Patient
from ...domain.entities.visit import Visit


class PatientCreateRequest(BaseModel):
    """Request to add a patient. Only the name is required."""

    name: str = Field(..., description="Patient name")
    dob: str = Field("", description="Date of birth as entered")
    mrn: str = Field("", description="Medical record number")
    conditions: str = Field("", description="Known conditions")


class VisitSchema(BaseModel):
    id: str
    date: datetime
    timestamp: str
    transcript: str
    notes: str

    @classmethod
    def from_visit(cls, visit: Visit) -> "VisitSchema":
        return cls(
            id=visit.visit_id.value,
            date=visit.date,
            timestamp=visit.timestamp,
            transcript=visit.transcript,
            notes=visit.notes,
        )


class RecentVisitSchema(BaseModel):
    id: str
    timestamp: str
    notes_preview: str = Field(..., description="Start of the visit notes")

    @classmethod
    def from_visit(cls, visit: Visit, preview_chars: int) -> "RecentVisitSchema":
        return cls(
            id=visit.visit_id.value,
            timestamp=visit.timestamp,
            notes_preview=truncate_string(visit.notes, preview_chars),
        )


class PatientSummary(BaseModel):
    id: str
    name: str
    dob: str
    mrn: str
    conditions: str
    visit_count: int
    label: str = Field(..., description="Display label: name, MRN and visit count")
    created_at: datetime

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientSummary":
        return cls(
            id=patient.patient_id.value,
            name=patient.name,
            dob=patient.dob,
            mrn=patient.mrn,
            conditions=patient.conditions,
            visit_count=len(patient.visits),
            label=patient.display_label,
            created_at=patient.created_at,
        )


class PatientDetail(PatientSummary):
    visits: List[VisitSchema] = Field(default_factory=list)

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientDetail":
        summary = PatientSummary.from_patient(patient)
        return cls(
            **summary.model_dump(),
            visits=[VisitSchema.from_visit(v) for v in patient.visits],
        )


class PatientListResponse(BaseModel):
    patients: List[PatientSummary]
    total: int
