"""
AI preference endpoints.
"""

from fastapi import APIRouter, Request

from ..deps import WorkspaceDep
from ..schemas.common import ApiResponse
from ..schemas.preferences import PreferencesSchema
from ..utils.responses import ok

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=ApiResponse[PreferencesSchema])
async def get_preferences(request: Request, workspace: WorkspaceDep):
    return ok(request, data=PreferencesSchema.from_preferences(workspace.preferences.current))


@router.put("", response_model=ApiResponse[PreferencesSchema])
async def update_preferences(payload: PreferencesSchema, request: Request, workspace: WorkspaceDep):
    saved = await workspace.update_preferences.execute(payload.to_preferences())
    return ok(request, data=PreferencesSchema.from_preferences(saved), message=workspace.session.status)
