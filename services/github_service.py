"""
GitHub adapter: repositories and README content for the connected account.
"""

import logging
from typing import Any, Dict, List

import httpx

from repositories.profile_repository import ProfileRepository
from utils.exceptions import AuthError, ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"


class GitHubService:
    def __init__(self, profile_repository: ProfileRepository, http_client: httpx.Client):
        self.profiles = profile_repository
        self.http = http_client

    def _token(self) -> str:
        token = self.profiles.get_token("github")
        if not token:
            raise AuthError("GitHub not connected", service="github")
        return token

    def _get(self, path: str, accept: str = "application/vnd.github+json", **params) -> httpx.Response:
        headers = {"Authorization": f"token {self._token()}", "Accept": accept}
        try:
            response = self.http.get(f"{GITHUB_API_BASE}{path}", headers=headers, params=params or None)
        except httpx.HTTPError as e:
            logger.error("GitHub request %s failed: %s", path, e)
            raise ExternalServiceError(f"Failed to reach GitHub: {e}", service="github")

        if response.is_error:
            logger.error("GitHub %s returned %s", path, response.status_code)
            raise ExternalServiceError(
                f"GitHub returned HTTP {response.status_code}",
                service="github",
                upstream_status=response.status_code,
            )
        return response

    def list_repos(self) -> List[Dict[str, Any]]:
        """Ten most recently updated repositories of the connected user."""
        response = self._get("/user/repos", sort="updated", per_page=10)
        try:
            return response.json()
        except ValueError:
            raise ExternalServiceError("Failed to fetch repos", service="github")

    def get_readme(self, owner: str, repo: str) -> str:
        """Raw README text of ``owner/repo``."""
        if not owner or not repo:
            raise ValidationError("owner and repo are required")
        response = self._get(f"/repos/{owner}/{repo}/readme", accept="application/vnd.github.v3.raw")
        return response.text
