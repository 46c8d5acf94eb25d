"""
LinkedIn adapter.

The LinkedIn connection is simulated: updates are logged, not sent.
"""

import logging
from typing import Any, Dict, Optional

from repositories.profile_repository import ProfileRepository
from utils.exceptions import AuthError

logger = logging.getLogger(__name__)


class LinkedInService:
    def __init__(self, profile_repository: ProfileRepository):
        self.profiles = profile_repository

    def update_profile(self, headline: Optional[str], about: Optional[str]) -> Dict[str, Any]:
        if not self.profiles.get_token("linkedin"):
            raise AuthError("LinkedIn not connected", service="linkedin")

        logger.info("Updating LinkedIn profile (simulated): headline=%r, about=%d chars", headline, len(about or ""))
        return {"success": True, "message": "Your LinkedIn profile was updated successfully!"}
