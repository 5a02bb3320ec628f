"""
Current session endpoints: state snapshot and clear.
"""

from fastapi import APIRouter, Request

from ..deps import WorkspaceDep
from ..schemas.common import ApiResponse
from ..schemas.session import SessionStateResponse
from ..utils.responses import ok

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=ApiResponse[SessionStateResponse])
async def get_session(request: Request, workspace: WorkspaceDep):
    return ok(request, data=SessionStateResponse.from_session(workspace.session))


@router.post("/clear", response_model=ApiResponse[SessionStateResponse])
async def clear_session(request: Request, workspace: WorkspaceDep):
    """Clear transcript and notes. The selected patient stays selected."""
    workspace.clear_session()
    session = workspace.session
    return ok(request, data=SessionStateResponse.from_session(session), message=session.status)
