"""
Unit tests for the dashboard's REST client.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from unittest.mock import Mock

import pytest

from ui.api_client import ApiError, CareerApiClient

RESPONSES = {
    "/api/profile": {"id": 1, "full_name": "Budi"},
    "/api/skills": [{"id": 1, "name": "Go", "level": 4, "category": "Teknik"}],
    "/api/education": [],
    "/api/goals": [{"id": 1, "title": "Lead a team", "status": "pending"}],
}


def make_response(status_code, payload):
    response = Mock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def session():
    session = Mock()

    def request(method, url, timeout=None, **kwargs):
        path = url.replace("http://api.test", "")
        if path in RESPONSES:
            return make_response(200, RESPONSES[path])
        return make_response(401, {"error": "GitHub not connected"})

    session.request.side_effect = request
    return session


class TestCareerApiClient:

    def test_fetch_dashboard_joins_all_four_reads(self, session):
        client = CareerApiClient("http://api.test/", session=session)

        data = client.fetch_dashboard()

        assert data == {
            "profile": RESPONSES["/api/profile"],
            "skills": RESPONSES["/api/skills"],
            "education": [],
            "goals": RESPONSES["/api/goals"],
        }
        assert session.request.call_count == 4

    def test_error_payload_becomes_api_error(self, session):
        client = CareerApiClient("http://api.test", session=session)

        with pytest.raises(ApiError) as exc_info:
            client.list_github_repos()

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "GitHub not connected"

    def test_set_goal_status_sends_patch(self, session):
        client = CareerApiClient("http://api.test", session=session)
        session.request.side_effect = None
        session.request.return_value = make_response(200, {"success": True})

        client.set_goal_status(7, "completed")

        session.request.assert_called_once_with(
            "PATCH", "http://api.test/api/goals/7", timeout=30.0, json={"status": "completed"}
        )
