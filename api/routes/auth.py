"""
Integration connection routes.

Endpoints:
- GET /api/auth/status - Connection state for every service
- GET /api/auth/{service}/url - Authorization URL to open in a popup
- POST /api/auth/notion/manual - Store a pasted Notion integration secret
- DELETE /api/auth/{service} - Forget a stored token
- GET /auth/{service}/callback - OAuth redirect target (returns HTML)
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from api.dependencies import (
    get_http_client,
    get_profile_repository,
    get_profile_service,
    get_settings,
    get_tracker,
)
from api.models.integration_schemas import AuthUrlResponse, ManualTokenRequest
from api.models.profile_schemas import ConnectionStatusResponse, ErrorResponse, SuccessResponse
from config.settings import Settings
from repositories import ProfileRepository
from services import ConnectionTracker, ProfileService
from services.oauth_connector import (
    get_connector,
    get_provider_config,
    render_callback_error,
    render_callback_success,
)
from utils.exceptions import CareerAssistantError, ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Integrations"])
callback_router = APIRouter(prefix="/auth", tags=["Integrations"])


@router.get("/status", response_model=ConnectionStatusResponse)
def connection_status(service: ProfileService = Depends(get_profile_service)):
    return ConnectionStatusResponse(services=service.connection_status())


@router.get(
    "/{service}/url",
    response_model=AuthUrlResponse,
    responses={400: {"model": ErrorResponse, "description": "Client id missing or invalid"}},
)
def authorization_url(
    service: str,
    settings: Settings = Depends(get_settings),
    profiles: ProfileRepository = Depends(get_profile_repository),
    http_client: httpx.Client = Depends(get_http_client),
    tracker: ConnectionTracker = Depends(get_tracker),
):
    """
    Build the provider's authorization URL.

    The client opens it in a popup; the provider redirects back to
    `/auth/{service}/callback`.
    """
    connector = get_connector(service, settings, profiles, http_client, tracker)
    return AuthUrlResponse(url=connector.build_authorization_url())


@router.post("/notion/manual", response_model=SuccessResponse)
def connect_notion_manually(
    request: ManualTokenRequest,
    settings: Settings = Depends(get_settings),
    profiles: ProfileRepository = Depends(get_profile_repository),
    http_client: httpx.Client = Depends(get_http_client),
    tracker: ConnectionTracker = Depends(get_tracker),
):
    connector = get_connector("notion", settings, profiles, http_client, tracker)
    connector.connect_manually(request.token)
    return SuccessResponse()


@router.delete("/{service}", response_model=SuccessResponse)
def disconnect(service: str, profile_service: ProfileService = Depends(get_profile_service)):
    get_provider_config(service)
    profile_service.disconnect(service)
    return SuccessResponse()


def _callback_error_status(error: CareerAssistantError) -> int:
    # Rejections by the user or the provider are 400, our own failures 500
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ExternalServiceError) and error.upstream_status is not None:
        return 400
    return 500


@callback_router.get("/{service}/callback", response_class=HTMLResponse)
def oauth_callback(
    service: str,
    code: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
    profiles: ProfileRepository = Depends(get_profile_repository),
    http_client: httpx.Client = Depends(get_http_client),
    tracker: ConnectionTracker = Depends(get_tracker),
):
    """Exchange the authorization code and tell the opener window we are done."""
    try:
        connector = get_connector(service, settings, profiles, http_client, tracker)
        connector.handle_callback(code)
    except CareerAssistantError as e:
        logger.error("OAuth callback for %s failed: %s", service, e.message)
        return HTMLResponse(render_callback_error(e.message), status_code=_callback_error_status(e))

    return HTMLResponse(render_callback_success(connector.config))
