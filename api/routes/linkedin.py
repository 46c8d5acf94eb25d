from fastapi import APIRouter, Depends

from api.dependencies import get_linkedin_service
from api.models.integration_schemas import LinkedInUpdateRequest, LinkedInUpdateResponse
from services import LinkedInService

router = APIRouter(prefix="/api/linkedin", tags=["LinkedIn"])


@router.post("/update", response_model=LinkedInUpdateResponse)
def update_profile(
    request: LinkedInUpdateRequest,
    service: LinkedInService = Depends(get_linkedin_service),
):
    """Apply an optimized headline and about section (simulated)."""
    return service.update_profile(request.headline, request.about)
