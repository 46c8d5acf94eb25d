from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_notion_exporter
from api.models.integration_schemas import NotionExportRequest
from api.models.profile_schemas import ErrorResponse
from services import NotionExporter

router = APIRouter(prefix="/api/notion", tags=["Notion"])


@router.post(
    "/export",
    responses={
        401: {"model": ErrorResponse, "description": "Notion not connected"},
        502: {"model": ErrorResponse, "description": "Notion rejected the request"},
    },
)
def export_advice(
    request: NotionExportRequest,
    exporter: NotionExporter = Depends(get_notion_exporter),
) -> Dict[str, Any]:
    """
    Create a Notion page from structured advice.

    The page is created under the first page the integration can see.
    Returns Notion's page object unchanged.
    """
    return exporter.export(request.advice, request.title)
