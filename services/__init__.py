"""
Services module - Business Logic Layer.

Contains application services that orchestrate business logic,
sitting between the API layer (routes) and the data layer (repositories).

Services handle:
- Business rule validation
- Orchestrating multiple repository operations
- Coordinating with external services (Notion, GitHub, LLM)

Usage:
    from services import ProfileService

    service = ProfileService(ProfileRepository(db), settings)
    profile = service.get()
"""

from services.profile_service import ProfileService
from services.oauth_connector import OAuthConnector, ConnectionTracker, ConnectionState
from services.notion_exporter import NotionExporter
from services.advice_generator import AdviceGenerator
from services.advice_service import AdviceService
from services.github_service import GitHubService
from services.linkedin_service import LinkedInService

__all__ = [
    "ProfileService",
    "OAuthConnector",
    "ConnectionTracker",
    "ConnectionState",
    "NotionExporter",
    "AdviceGenerator",
    "AdviceService",
    "GitHubService",
    "LinkedInService",
]
