"""
FastAPI dependency providers.

Process-wide objects (settings, HTTP client, connection tracker, advice
generator) live on ``app.state`` and are created by ``api.main.create_app``;
services are built per request around the request's database session.
"""

import httpx
from fastapi import Depends, Request
from sqlmodel import Session

from config.settings import Settings
from repositories import (
    EducationRepository,
    GoalRepository,
    ProfileRepository,
    SkillRepository,
)
from services import (
    AdviceGenerator,
    AdviceService,
    ConnectionTracker,
    GitHubService,
    LinkedInService,
    NotionExporter,
    ProfileService,
)
from utils.database import get_db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.Client:
    return request.app.state.http_client


def get_tracker(request: Request) -> ConnectionTracker:
    return request.app.state.tracker


def get_advice_generator(request: Request) -> AdviceGenerator:
    return request.app.state.advice_generator


def get_profile_repository(db: Session = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


def get_skill_repository(db: Session = Depends(get_db)) -> SkillRepository:
    return SkillRepository(db)


def get_education_repository(db: Session = Depends(get_db)) -> EducationRepository:
    return EducationRepository(db)


def get_goal_repository(db: Session = Depends(get_db)) -> GoalRepository:
    return GoalRepository(db)


def get_profile_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
    settings: Settings = Depends(get_settings),
    tracker: ConnectionTracker = Depends(get_tracker),
) -> ProfileService:
    """Get ProfileService instance with injected dependencies."""
    return ProfileService(profiles, settings, tracker)


def get_notion_exporter(
    profiles: ProfileRepository = Depends(get_profile_repository),
    http_client: httpx.Client = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> NotionExporter:
    return NotionExporter(profiles, http_client, settings)


def get_github_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
    http_client: httpx.Client = Depends(get_http_client),
) -> GitHubService:
    return GitHubService(profiles, http_client)


def get_linkedin_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> LinkedInService:
    return LinkedInService(profiles)


def get_advice_service(
    profile_service: ProfileService = Depends(get_profile_service),
    skills: SkillRepository = Depends(get_skill_repository),
    education: EducationRepository = Depends(get_education_repository),
    goals: GoalRepository = Depends(get_goal_repository),
    exporter: NotionExporter = Depends(get_notion_exporter),
    generator: AdviceGenerator = Depends(get_advice_generator),
) -> AdviceService:
    return AdviceService(
        profile_service=profile_service,
        skills=skills,
        education=education,
        goals=goals,
        generator=generator,
        exporter=exporter,
    )
