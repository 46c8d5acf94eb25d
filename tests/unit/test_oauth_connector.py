"""
Unit tests for the OAuth connector.

Token exchanges run against an httpx MockTransport; nothing leaves the
process.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import base64
import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from repositories import ProfileRepository
from services.oauth_connector import (
    PROVIDERS,
    ConnectionState,
    ConnectionTracker,
    get_connector,
    render_callback_error,
    render_callback_success,
)
from utils.exceptions import ConfigurationError, ExternalServiceError, ValidationError


@pytest.fixture
def profiles(db_session):
    return ProfileRepository(db_session)


@pytest.fixture
def tracker():
    return ConnectionTracker()


@pytest.fixture
def connector_for(settings, profiles, make_http_client, tracker):
    """Factory: ``connector, recorder = connector_for("notion", handler, **settings_overrides)``."""

    def _make(service, handler=None, **overrides):
        app_settings = settings.model_copy(update=overrides) if overrides else settings
        http_client, recorder = make_http_client(handler)
        return get_connector(service, app_settings, profiles, http_client, tracker), recorder

    return _make


def json_response(status_code, payload):
    return lambda request: httpx.Response(status_code, json=payload)


# ---------------------------------------------------------------------------
# Authorization URL
# ---------------------------------------------------------------------------

class TestAuthorizationUrl:

    def test_notion_url_carries_client_id_and_callback(self, connector_for, tracker):
        connector, recorder = connector_for("notion")

        url = connector.build_authorization_url()

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://api.notion.com/v1/oauth/authorize"
        assert query["client_id"] == ["notion-client-id"]
        assert query["response_type"] == ["code"]
        assert query["owner"] == ["user"]
        assert query["redirect_uri"] == ["http://testserver/auth/notion/callback"]
        assert recorder.requests == []
        assert tracker.get("notion") == ConnectionState.AUTHORIZING

    def test_github_url_requests_repo_scope(self, connector_for):
        connector, _ = connector_for("github")
        query = parse_qs(urlparse(connector.build_authorization_url()).query)
        assert query["scope"] == ["repo,user"]
        assert query["redirect_uri"] == ["http://testserver/auth/github/callback"]

    def test_trailing_slash_on_app_url_is_dropped(self, connector_for):
        connector, _ = connector_for("notion", APP_URL="https://career.example.com/ ")
        query = parse_qs(urlparse(connector.build_authorization_url()).query)
        assert query["redirect_uri"] == ["https://career.example.com/auth/notion/callback"]

    @pytest.mark.parametrize("client_id", [None, "", "abcd", "   ab  "])
    def test_short_client_id_is_a_configuration_error(self, connector_for, tracker, client_id):
        connector, recorder = connector_for("notion", NOTION_CLIENT_ID=client_id)

        with pytest.raises(ConfigurationError) as exc_info:
            connector.build_authorization_url()

        assert exc_info.value.status_code == 400
        assert recorder.requests == []
        assert tracker.get("notion") is None

    def test_missing_app_url_is_a_configuration_error(self, connector_for):
        connector, _ = connector_for("github", APP_URL=None)
        with pytest.raises(ConfigurationError):
            connector.build_authorization_url()

    def test_unknown_service(self, connector_for):
        with pytest.raises(ValidationError):
            connector_for("myspace")


# ---------------------------------------------------------------------------
# Callback / token exchange
# ---------------------------------------------------------------------------

class TestHandleCallback:

    def test_notion_exchange_stores_token(self, connector_for, profiles, tracker):
        connector, recorder = connector_for("notion", json_response(200, {"access_token": "X"}))

        assert connector.handle_callback("auth-code") == "X"

        assert profiles.get_token("notion") == "X"
        assert tracker.get("notion") == ConnectionState.CONNECTED

        request = recorder.requests[0]
        assert str(request.url) == "https://api.notion.com/v1/oauth/token"
        expected = base64.b64encode(b"notion-client-id:notion-client-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert json.loads(request.content) == {
            "grant_type": "authorization_code",
            "code": "auth-code",
            "redirect_uri": "http://testserver/auth/notion/callback",
        }

    def test_github_exchange_sends_credentials_in_body(self, connector_for, profiles):
        connector, recorder = connector_for("github", json_response(200, {"access_token": "gho_abc"}))

        connector.handle_callback("auth-code")

        request = recorder.requests[0]
        assert str(request.url) == "https://github.com/login/oauth/access_token"
        assert request.headers["Accept"] == "application/json"
        assert "Authorization" not in request.headers
        assert json.loads(request.content) == {
            "client_id": "github-client-id",
            "client_secret": "github-client-secret",
            "code": "auth-code",
        }
        assert profiles.get_token("github") == "gho_abc"

    def test_error_payload_persists_nothing(self, connector_for, profiles, tracker):
        connector, _ = connector_for(
            "github",
            json_response(200, {"error": "bad_verification_code", "error_description": "The code is incorrect"}),
        )
        tracker.set("github", ConnectionState.AUTHORIZING)

        with pytest.raises(ExternalServiceError) as exc_info:
            connector.handle_callback("stale-code")

        assert "The code is incorrect" in exc_info.value.message
        assert profiles.get_token("github") is None
        assert tracker.get("github") == ConnectionState.DISCONNECTED

    def test_error_payload_does_not_replace_existing_token(self, connector_for, profiles):
        profiles.set_token("notion", "secret_existing")
        connector, _ = connector_for("notion", json_response(400, {"error": "invalid_grant"}))

        with pytest.raises(ExternalServiceError):
            connector.handle_callback("bad")

        assert profiles.get_token("notion") == "secret_existing"

    def test_non_2xx_without_error_field(self, connector_for, profiles):
        connector, _ = connector_for("notion", json_response(503, {"message": "down"}))

        with pytest.raises(ExternalServiceError) as exc_info:
            connector.handle_callback("code")

        assert exc_info.value.upstream_status == 503
        assert profiles.get_token("notion") is None

    def test_response_without_token(self, connector_for):
        connector, _ = connector_for("notion", json_response(200, {"workspace_name": "Mine"}))
        with pytest.raises(ExternalServiceError):
            connector.handle_callback("code")

    def test_non_json_response(self, connector_for):
        connector, _ = connector_for("github", lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(ExternalServiceError):
            connector.handle_callback("code")

    def test_transport_failure(self, connector_for, profiles):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        connector, _ = connector_for("github", handler)

        with pytest.raises(ExternalServiceError) as exc_info:
            connector.handle_callback("code")

        assert exc_info.value.upstream_status is None
        assert profiles.get_token("github") is None

    def test_missing_code(self, connector_for, tracker):
        connector, recorder = connector_for("notion")

        with pytest.raises(ValidationError):
            connector.handle_callback(None)

        assert recorder.requests == []
        assert tracker.get("notion") == ConnectionState.DISCONNECTED

    def test_missing_client_secret(self, connector_for):
        connector, recorder = connector_for("github", GITHUB_CLIENT_SECRET=None)

        with pytest.raises(ConfigurationError):
            connector.handle_callback("code")

        assert recorder.requests == []

    def test_linkedin_is_simulated(self, connector_for, profiles):
        connector, recorder = connector_for("linkedin")

        assert connector.handle_callback("anything") == "mock_linkedin_token_123"

        assert recorder.requests == []
        assert profiles.get_token("linkedin") == "mock_linkedin_token_123"

    def test_linkedin_needs_no_code(self, connector_for, profiles, tracker):
        connector, recorder = connector_for("linkedin")
        connector.build_authorization_url()

        assert connector.handle_callback(None) == "mock_linkedin_token_123"

        assert recorder.requests == []
        assert profiles.get_token("linkedin") == "mock_linkedin_token_123"
        assert tracker.get("linkedin") == ConnectionState.CONNECTED


class TestConnectionTracker:

    def test_stored_token_wins_over_abandoned_authorization(self, tracker):
        tracker.set("github", ConnectionState.AUTHORIZING)

        assert tracker.state_for("github", has_token=True) == ConnectionState.CONNECTED

    def test_authorizing_without_token(self, tracker):
        tracker.set("github", ConnectionState.AUTHORIZING)

        assert tracker.state_for("github", has_token=False) == ConnectionState.AUTHORIZING
        assert tracker.state_for("notion", has_token=False) == ConnectionState.DISCONNECTED

        assert recorder.requests == []
        assert profiles.get_token("linkedin") == "mock_linkedin_token_123"


# ---------------------------------------------------------------------------
# Manual Notion token
# ---------------------------------------------------------------------------

class TestManualToken:

    def test_stores_trimmed_token(self, connector_for, profiles, tracker):
        connector, _ = connector_for("notion")

        connector.connect_manually("  secret_abcdefghij  ")

        assert profiles.get_token("notion") == "secret_abcdefghij"
        assert tracker.get("notion") == ConnectionState.CONNECTED

    @pytest.mark.parametrize("token", [None, "", "short", "123456789"])
    def test_short_token_rejected(self, connector_for, profiles, token):
        connector, _ = connector_for("notion")

        with pytest.raises(ValidationError):
            connector.connect_manually(token)

        assert profiles.get_token("notion") is None

    def test_only_notion_accepts_manual_tokens(self, connector_for):
        connector, _ = connector_for("github")
        with pytest.raises(ValidationError):
            connector.connect_manually("gho_abcdefghijklmnop")


# ---------------------------------------------------------------------------
# Popup pages
# ---------------------------------------------------------------------------

class TestCallbackPages:

    @pytest.mark.parametrize("service", ["notion", "github", "linkedin"])
    def test_success_page_posts_service_message(self, service):
        page = render_callback_success(PROVIDERS[service])
        assert f'"type": "{service.upper()}_AUTH_SUCCESS"' in page
        assert "window.close()" in page

    def test_error_page_escapes_message(self):
        page = render_callback_error("<script>alert(1)</script>")
        assert "<script>alert(1)</script>" not in page
        assert "&lt;script&gt;" in page
