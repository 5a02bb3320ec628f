"""
Patient endpoints: list, add, view, recent visits and selection.
"""

from fastapi import APIRouter, Request, status

from ...application.dto.scribe_dto import AddPatientRequest
from ...domain.value_objects.patient_id import PatientId
from ..deps import WorkspaceDep
from ..schemas.common import ApiResponse
from ..schemas.patients import (
    PatientCreateRequest,
    PatientDetail,
    PatientListResponse,
    PatientSummary,
    RecentVisitSchema,
)
from ..utils.responses import ok

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=ApiResponse[PatientListResponse])
async def list_patients(request: Request, workspace: WorkspaceDep):
    patients = workspace.patients.list_patients()
    return ok(
        request,
        data=PatientListResponse(
            patients=[PatientSummary.from_patient(p) for p in patients],
            total=len(patients),
        ),
    )


@router.post("", response_model=ApiResponse[PatientDetail], status_code=status.HTTP_201_CREATED)
async def add_patient(payload: PatientCreateRequest, request: Request, workspace: WorkspaceDep):
    """
    Add a patient.

    A blank name is rejected with 422; name and MRN need not be unique.
    """
    result = await workspace.add_patient.execute(
        AddPatientRequest(
            name=payload.name,
            dob=payload.dob,
            mrn=payload.mrn,
            conditions=payload.conditions,
        )
    )
    return ok(request, data=PatientDetail.from_patient(result.patient), message=result.status)


# Declared before /{patient_id} routes so "selection" is not taken for an id
@router.delete("/selection", response_model=ApiResponse[dict])
async def clear_selection(request: Request, workspace: WorkspaceDep):
    workspace.select_patient.clear()
    return ok(request, data={"selected_patient_id": None}, message=workspace.session.status)


@router.get("/{patient_id}", response_model=ApiResponse[PatientDetail])
async def get_patient(patient_id: str, request: Request, workspace: WorkspaceDep):
    patient = workspace.patients.get(PatientId(patient_id))
    return ok(request, data=PatientDetail.from_patient(patient))


@router.get("/{patient_id}/visits/recent", response_model=ApiResponse[list])
async def recent_visits(patient_id: str, request: Request, workspace: WorkspaceDep):
    """Last few visits, newest last, with shortened notes."""
    notes_settings = workspace.settings.notes
    patient = workspace.patients.get(PatientId(patient_id))
    visits = [
        RecentVisitSchema.from_visit(v, notes_settings.recent_visit_chars).model_dump()
        for v in patient.recent_visits(notes_settings.history_visits)
    ]
    return ok(request, data=visits)


@router.post("/{patient_id}/select", response_model=ApiResponse[PatientSummary])
async def select_patient(patient_id: str, request: Request, workspace: WorkspaceDep):
    patient = workspace.select_patient.execute(PatientId(patient_id))
    return ok(request, data=PatientSummary.from_patient(patient), message=workspace.session.status)
