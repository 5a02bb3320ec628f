"""
Medical note endpoints: generate from the transcript, save to the patient.
"""

from fastapi import APIRouter, Request

from ..deps import WorkspaceDep
from ..schemas.common import ApiResponse
from ..schemas.patients import PatientDetail
from ..schemas.session import NoteGenerationResult
from ..utils.responses import ok

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("/generate", response_model=ApiResponse[NoteGenerationResult])
async def generate_notes(request: Request, workspace: WorkspaceDep):
    """
    Generate medical notes from the current transcript.

    Service failures are not HTTP errors: the response carries the status line
    and the placeholder notes shown to the clinician.
    """
    result = await workspace.generate_notes.execute()
    return ok(
        request,
        data=NoteGenerationResult(
            generated=result.generated,
            status=result.status,
            medical_notes=workspace.session.medical_notes,
        ),
        message=result.status,
    )


@router.post("/save-to-patient", response_model=ApiResponse[dict])
async def save_notes_to_patient(request: Request, workspace: WorkspaceDep):
    """Append the current transcript and notes as a visit of the selected patient."""
    result = await workspace.save_visit.execute()
    data = {"saved": result.saved, "status": result.status}
    if result.patient is not None:
        data["patient"] = PatientDetail.from_patient(result.patient).model_dump(mode="json")
    return ok(request, data=data, message=result.status)
