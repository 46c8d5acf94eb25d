"""
REST client used by the Streamlit dashboard.

Every call goes through the API so the UI holds no database handle of its
own. Errors come back as ``{"error": message}`` and are raised as
``ApiError``.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CareerApiClient:
    """
    Thin wrapper over the career assistant REST API.

    Args:
        base_url: API root, e.g. ``http://127.0.0.1:8000``
        timeout: Per-request timeout in seconds
        session: Optional ``requests.Session`` (tests pass a mocked one)
    """

    def __init__(self, base_url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if not resp.ok:
            try:
                message = resp.json().get("error") or resp.text
            except ValueError:
                message = resp.text
            logger.error("%s %s failed with %s: %s", method, path, resp.status_code, message)
            raise ApiError(message, resp.status_code)
        return resp.json()

    # ============ PROFILE ============

    def get_profile(self) -> Dict[str, Any]:
        return self._request("GET", "/api/profile")

    def update_profile(self, full_name: str, current_role: str, target_role: str, bio: str) -> Dict[str, Any]:
        payload = {
            "full_name": full_name,
            "current_role": current_role,
            "target_role": target_role,
            "bio": bio,
        }
        return self._request("PUT", "/api/profile", json=payload)

    def connection_status(self) -> Dict[str, str]:
        return self._request("GET", "/api/auth/status")["services"]

    # ============ COLLECTIONS ============

    def list_skills(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/skills")

    def add_skill(self, name: str, level: int, category: Optional[str] = None) -> int:
        return self._request("POST", "/api/skills", json={"name": name, "level": level, "category": category})["id"]

    def delete_skill(self, skill_id: int) -> None:
        self._request("DELETE", f"/api/skills/{skill_id}")

    def list_education(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/education")

    def add_education(self, **fields) -> int:
        return self._request("POST", "/api/education", json=fields)["id"]

    def delete_education(self, education_id: int) -> None:
        self._request("DELETE", f"/api/education/{education_id}")

    def list_goals(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/goals")

    def add_goal(self, title: str, description: Optional[str] = None, deadline: Optional[str] = None) -> int:
        payload = {"title": title, "description": description, "deadline": deadline}
        return self._request("POST", "/api/goals", json=payload)["id"]

    def set_goal_status(self, goal_id: int, status: str) -> None:
        self._request("PATCH", f"/api/goals/{goal_id}", json={"status": status})

    def delete_goal(self, goal_id: int) -> None:
        self._request("DELETE", f"/api/goals/{goal_id}")

    # ============ INTEGRATIONS ============

    def authorization_url(self, service: str) -> str:
        return self._request("GET", f"/api/auth/{service}/url")["url"]

    def connect_notion_manually(self, token: str) -> None:
        self._request("POST", "/api/auth/notion/manual", json={"token": token})

    def disconnect(self, service: str) -> None:
        self._request("DELETE", f"/api/auth/{service}")

    def export_to_notion(self, advice: Dict[str, Any], title: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/api/notion/export", json={"advice": advice, "title": title})

    def list_github_repos(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/github/repos")

    def get_github_readme(self, owner: str, repo: str) -> str:
        return self._request("GET", "/api/github/readme", params={"owner": owner, "repo": repo})["content"]

    def update_linkedin(self, headline: str, about: str) -> Dict[str, Any]:
        return self._request("POST", "/api/linkedin/update", json={"headline": headline, "about": about})

    def generate_advice(self, task: str = "advice") -> Dict[str, Any]:
        return self._request("POST", "/api/advice", json={"task": task})

    # ============ DASHBOARD ============

    def fetch_dashboard(self) -> Dict[str, Any]:
        """
        Load profile, skills, education and goals concurrently.

        All four reads complete before this returns; the first failure is
        raised.
        """
        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = {
                "profile": pool.submit(self.get_profile),
                "skills": pool.submit(self.list_skills),
                "education": pool.submit(self.list_education),
                "goals": pool.submit(self.list_goals),
            }
            return {key: future.result() for key, future in futures.items()}
