"""
Recording endpoints: start and stop continuous speech recognition.

Both always answer 200; the outcome is in the recording state and status line.
"""

from fastapi import APIRouter, Request

from ..deps import WorkspaceDep
from ..schemas.common import ApiResponse
from ..schemas.session import RecordingStateResponse
from ..utils.responses import ok

router = APIRouter(prefix="/recording", tags=["recording"])


@router.get("", response_model=ApiResponse[RecordingStateResponse])
async def get_recording(request: Request, workspace: WorkspaceDep):
    return ok(request, data=RecordingStateResponse.from_session(workspace.session))


@router.post("/start", response_model=ApiResponse[RecordingStateResponse])
async def start_recording(request: Request, workspace: WorkspaceDep):
    await workspace.recording.start()
    session = workspace.session
    return ok(request, data=RecordingStateResponse.from_session(session), message=session.status)


@router.post("/stop", response_model=ApiResponse[RecordingStateResponse])
async def stop_recording(request: Request, workspace: WorkspaceDep):
    await workspace.recording.stop()
    session = workspace.session
    return ok(request, data=RecordingStateResponse.from_session(session), message=session.status)
