"""
Profile API Routes.

Endpoints:
- GET /api/profile - Get the profile (backfills the Notion token if configured)
- PUT /api/profile - Update name, roles and bio
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_profile_service
from api.models.profile_schemas import ProfileResponse, ProfileUpdateRequest, SuccessResponse
from services import ProfileService

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(service: ProfileService = Depends(get_profile_service)):
    return ProfileResponse.from_profile(service.get())


@router.put("", response_model=SuccessResponse)
def update_profile(
    request: ProfileUpdateRequest,
    service: ProfileService = Depends(get_profile_service),
):
    """
    Update the editable profile fields.

    Token fields cannot be set here; they are written only by the
    integration flows under `/api/auth`.
    """
    service.update(request.model_dump())
    return SuccessResponse()
