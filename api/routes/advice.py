"""
Advice API Routes.

POST /api/advice runs one advice request: the model reply is validated,
and every `createNotionPage` tool call it contains becomes a Notion export
when Notion is connected.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_advice_service
from api.models.integration_schemas import AdviceRequest, AdviceRunResponse
from api.models.profile_schemas import ErrorResponse
from services import AdviceService

router = APIRouter(prefix="/api/advice", tags=["Advice"])


@router.post(
    "",
    response_model=AdviceRunResponse,
    responses={502: {"model": ErrorResponse, "description": "Advice unavailable"}},
)
def generate_advice(
    request: AdviceRequest,
    service: AdviceService = Depends(get_advice_service),
):
    return service.run(request.task)
