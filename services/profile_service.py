"""
Profile service: reads and edits the singleton profile.
"""

import logging
from typing import Any, Dict, Optional

from config.settings import Settings
from models.profile import Profile, TOKEN_FIELDS
from repositories.profile_repository import ProfileRepository
from services.oauth_connector import ConnectionState, ConnectionTracker

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Business logic around the profile row.

    Token fields are never written here except for the one-time Notion
    backfill from ``NOTION_INTERNAL_SECRET`` and ``disconnect``.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        settings: Settings,
        tracker: Optional[ConnectionTracker] = None,
    ):
        self.profiles = profile_repository
        self.settings = settings
        self.tracker = tracker or ConnectionTracker()

    def get(self) -> Profile:
        """
        Return the profile.

        If no Notion token is stored and an internal secret is configured,
        the secret is persisted as the token first. The backfill is recorded
        on the profile, so it never runs again, not even after the user
        disconnects Notion.
        """
        profile = self.profiles.get()

        internal_secret = self.settings.get_secret("NOTION_INTERNAL_SECRET")
        if internal_secret and not profile.notion_token and not profile.notion_secret_backfilled:
            logger.warning("Notion token missing, backfilling from NOTION_INTERNAL_SECRET")
            profile = self.profiles.backfill_notion_token(internal_secret)

        return profile

    def update(self, fields: Dict[str, Any]) -> Profile:
        """
        Overwrite full name, current role, target role and bio.

        Any token keys in ``fields`` are ignored.
        """
        return self.profiles.update_text_fields(
            full_name=fields.get("full_name"),
            current_role=fields.get("current_role"),
            target_role=fields.get("target_role"),
            bio=fields.get("bio"),
        )

    def connection_status(self) -> Dict[str, str]:
        """Return ``{service: state}`` for every external service."""
        profile = self.get()
        return {
            service: self.tracker.state_for(service, bool(getattr(profile, field))).value
            for service, field in TOKEN_FIELDS.items()
        }

    def disconnect(self, service: str) -> None:
        """Clear the stored token for one service."""
        self.profiles.clear_token(service)
        self.tracker.set(service, ConnectionState.DISCONNECTED)
        logger.info("Disconnected %s", service)
