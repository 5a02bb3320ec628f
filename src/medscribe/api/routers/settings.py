"""
API settings endpoints.

Keys are returned masked unless ``reveal=true`` is passed.
"""

from fastapi import APIRouter, Query, Request

from ..deps import WorkspaceDep
from ..schemas.common import ApiResponse
from ..schemas.settings import ApiSettingsResponse, ApiSettingsUpdateRequest
from ..utils.responses import ok

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/api", response_model=ApiResponse[ApiSettingsResponse])
async def get_api_settings(
    request: Request,
    workspace: WorkspaceDep,
    reveal: bool = Query(False, description="Return keys unmasked"),
):
    return ok(
        request,
        data=ApiSettingsResponse.from_settings(
            workspace.api_settings.current,
            reveal=reveal,
            supported_regions=workspace.settings.speech.supported_regions,
        ),
    )


@router.put("/api", response_model=ApiResponse[ApiSettingsResponse])
async def update_api_settings(payload: ApiSettingsUpdateRequest, request: Request, workspace: WorkspaceDep):
    updated = payload.apply_to(workspace.api_settings.current)
    saved = await workspace.update_api_settings.execute(updated)
    return ok(
        request,
        data=ApiSettingsResponse.from_settings(
            saved, supported_regions=workspace.settings.speech.supported_regions
        ),
        message=workspace.session.status,
    )
