import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.routes.advice import router as advice_router
from api.routes.auth import callback_router as oauth_callback_router
from api.routes.auth import router as auth_router
from api.routes.education import router as education_router
from api.routes.github import router as github_router
from api.routes.goals import router as goals_router
from api.routes.linkedin import router as linkedin_router
from api.routes.notion import router as notion_router
from api.routes.profile import router as profile_router
from api.routes.skills import router as skills_router
from config.settings import Settings, settings as default_settings
from services import AdviceGenerator, ConnectionTracker
from utils.database import create_db_engine, init_db
from utils.exceptions import CareerAssistantError
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

DESCRIPTION = """
Personal career dashboard: profile, skills, education and goals, AI career
advice, and connections to Notion, GitHub and LinkedIn.

## Quick Start

1. **Fill in your profile** → `PUT /api/profile`
2. **Add skills, education and goals** → `POST /api/skills`, `/api/education`, `/api/goals`
3. **Ask for advice** → `POST /api/advice`
4. **Save it to Notion** → connect via `GET /api/auth/notion/url`, then `POST /api/notion/export`

## Errors

Every error response has the shape `{"error": "<message>"}`.
The OAuth callback pages under `/auth/{service}/callback` return HTML.
"""

tags_metadata = [
    {
        "name": "Health",
        "description": "Health check endpoints.",
    },
    {
        "name": "Profile",
        "description": "The single user profile. Tokens are exposed as connected flags only.",
    },
    {
        "name": "Skills",
        "description": "Skills with a self-assessed level from 1 to 5.",
    },
    {
        "name": "Goals",
        "description": "Career goals. Status is `pending` or `completed`.",
    },
    {
        "name": "Integrations",
        "description": "OAuth connections. Get URL → open popup → provider redirects to the callback.",
    },
    {
        "name": "Advice",
        "description": "AI career advice and LinkedIn optimization.",
    },
]


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(CareerAssistantError)
    async def career_assistant_error_handler(request: Request, exc: CareerAssistantError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else first.get("msg")
        else:
            message = "Invalid request"
        logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
        return _error_response(400, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.Client] = None,
    llm: Optional[Any] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (defaults to the environment)
        http_client: Client for calls to Notion/GitHub; created and closed
            by the app when not supplied
        llm: Object with ``invoke_with_tools``; defaults to ``LLMService``
            built on first advice request
    """
    settings = settings or default_settings
    owns_http_client = http_client is None
    http_client = http_client or httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        engine = create_db_engine(settings.DATABASE_URL)
        init_db(engine)
        app.state.engine = engine
        logger.info("Career assistant API started")
        try:
            yield
        finally:
            engine.dispose()
            if owns_http_client:
                http_client.close()
            logger.info("Career assistant API stopped")

    app = FastAPI(
        title="Career Assistant API",
        description=DESCRIPTION,
        version="1.0.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.http_client = http_client
    app.state.tracker = ConnectionTracker()
    app.state.advice_generator = AdviceGenerator(settings, llm=llm)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.ALLOWED_ORIGINS.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint with API information and documentation links"""
        return {
            "message": "Welcome to the Career Assistant API",
            "version": "1.0.0",
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc"
            },
            "endpoints": {
                "health": "/health",
                "ping": "/ping",
                "profile": "/api/profile",
                "skills": "/api/skills",
                "education": "/api/education",
                "goals": "/api/goals",
                "auth": "/api/auth",
                "advice": "/api/advice",
            }
        }

    @app.get("/ping", tags=["Health"])
    def ping():
        """Simple ping endpoint to check if API is responding."""
        return {"message": "pong"}

    @app.get("/health", tags=["Health"])
    def health():
        return {
            "status": "healthy",
            "service": "Career Assistant API",
            "version": "1.0.0"
        }

    # Register routers
    app.include_router(profile_router)
    app.include_router(skills_router)
    app.include_router(education_router)
    app.include_router(goals_router)
    app.include_router(auth_router)
    app.include_router(oauth_callback_router)
    app.include_router(notion_router)
    app.include_router(github_router)
    app.include_router(linkedin_router)
    app.include_router(advice_router)

    return app


app = create_app()
