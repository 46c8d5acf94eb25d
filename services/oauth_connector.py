"""
OAuth connector shared by every external service.

Each service is a configuration value (``OAuthProviderConfig``) rather
than its own code path. A connector walks one service through

    disconnected -> authorizing -> connected
    authorizing -> disconnected   (on error)

and stores the resulting access token on the profile row.
"""

import base64
import html
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import httpx

from config.settings import Settings
from repositories.profile_repository import ProfileRepository
from utils.exceptions import (
    CareerAssistantError,
    ConfigurationError,
    ExternalServiceError,
    ValidationError,
)
from utils.url_builder import build_callback_url, build_url

logger = logging.getLogger(__name__)

MIN_CLIENT_ID_LENGTH = 5
MIN_MANUAL_TOKEN_LENGTH = 10


class CredentialEncoding(str, Enum):
    """How client credentials travel in the token exchange"""
    BASIC = "basic"          # HTTP Basic header, JSON body with grant_type/code/redirect_uri
    JSON_BODY = "json_body"  # client_id/client_secret/code inside the JSON body
    MOCK = "mock"            # no exchange, a fixed token is stored


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    AUTHORIZING = "authorizing"
    CONNECTED = "connected"


@dataclass(frozen=True)
class OAuthProviderConfig:
    """Everything that differs between one OAuth service and another."""
    service: str
    display_name: str
    authorize_url: str
    token_url: Optional[str]
    credential_encoding: CredentialEncoding
    client_id_setting: str
    client_secret_setting: Optional[str] = None
    extra_authorize_params: Tuple[Tuple[str, str], ...] = ()
    min_client_id_length: int = MIN_CLIENT_ID_LENGTH
    allows_manual_token: bool = False
    mock_token: Optional[str] = None

    @property
    def success_message_type(self) -> str:
        """Type of the cross-window message posted when the popup succeeds."""
        return f"{self.service.upper()}_AUTH_SUCCESS"


PROVIDERS: Dict[str, OAuthProviderConfig] = {
    "notion": OAuthProviderConfig(
        service="notion",
        display_name="Notion",
        authorize_url="https://api.notion.com/v1/oauth/authorize",
        token_url="https://api.notion.com/v1/oauth/token",
        credential_encoding=CredentialEncoding.BASIC,
        client_id_setting="NOTION_CLIENT_ID",
        client_secret_setting="NOTION_CLIENT_SECRET",
        extra_authorize_params=(("response_type", "code"), ("owner", "user")),
        allows_manual_token=True,
    ),
    "github": OAuthProviderConfig(
        service="github",
        display_name="GitHub",
        authorize_url="https://github.com/login/oauth/authorize",
        token_url="https://github.com/login/oauth/access_token",
        credential_encoding=CredentialEncoding.JSON_BODY,
        client_id_setting="GITHUB_CLIENT_ID",
        client_secret_setting="GITHUB_CLIENT_SECRET",
        extra_authorize_params=(("scope", "repo,user"),),
    ),
    # Simulated: the callback stores a fixed token without calling LinkedIn
    "linkedin": OAuthProviderConfig(
        service="linkedin",
        display_name="LinkedIn",
        authorize_url="https://www.linkedin.com/oauth/v2/authorization",
        token_url=None,
        credential_encoding=CredentialEncoding.MOCK,
        client_id_setting="LINKEDIN_CLIENT_ID",
        extra_authorize_params=(
            ("response_type", "code"),
            ("scope", "r_liteprofile w_member_social"),
        ),
        mock_token="mock_linkedin_token_123",
    ),
}


def get_provider_config(service: str) -> OAuthProviderConfig:
    """Look up a provider, raising ValidationError for unknown services."""
    try:
        return PROVIDERS[service]
    except KeyError:
        raise ValidationError(f"Unknown service: {service}")


class ConnectionTracker:
    """
    Process-wide record of in-flight authorizations.

    Only the transient ``authorizing`` state lives here; ``connected`` is
    derived from the stored token. Last writer wins.
    """

    def __init__(self):
        self._states: Dict[str, ConnectionState] = {}

    def set(self, service: str, state: ConnectionState) -> None:
        self._states[service] = state

    def get(self, service: str) -> Optional[ConnectionState]:
        return self._states.get(service)

    def state_for(self, service: str, has_token: bool) -> ConnectionState:
        # A stored token wins over an authorization that was never finished
        if has_token:
            return ConnectionState.CONNECTED
        if self._states.get(service) == ConnectionState.AUTHORIZING:
            return ConnectionState.AUTHORIZING
        return ConnectionState.DISCONNECTED


class OAuthConnector:
    """
    Authorization-code flow for one external service.

    Args:
        config: Provider configuration
        settings: Application settings (client ids/secrets, APP_URL)
        profile_repository: Where the access token is stored
        http_client: Client used for the server-to-server token exchange
        tracker: Shared connection-state tracker
    """

    def __init__(
        self,
        config: OAuthProviderConfig,
        settings: Settings,
        profile_repository: ProfileRepository,
        http_client: httpx.Client,
        tracker: ConnectionTracker,
    ):
        self.config = config
        self.settings = settings
        self.profiles = profile_repository
        self.http = http_client
        self.tracker = tracker

    @property
    def service(self) -> str:
        return self.config.service

    def _client_id(self) -> str:
        client_id = self.settings.get_secret(self.config.client_id_setting)
        if not client_id or len(client_id) < self.config.min_client_id_length:
            raise ConfigurationError(
                f"{self.config.client_id_setting} is missing or invalid.",
                status_code=400,
            )
        return client_id

    def _client_secret(self) -> str:
        secret = None
        if self.config.client_secret_setting:
            secret = self.settings.get_secret(self.config.client_secret_setting)
        if not secret:
            raise ConfigurationError(f"{self.config.client_secret_setting} is not configured.")
        return secret

    def callback_url(self) -> str:
        return build_callback_url(self.settings.APP_URL, self.service)

    # ------------------------------------------------------------------
    # Step 1: authorization URL
    # ------------------------------------------------------------------
    def build_authorization_url(self) -> str:
        """
        Build the provider's authorization URL.

        Performs no network call.

        Raises:
            ConfigurationError: Client id missing/too short, or APP_URL missing/malformed
        """
        client_id = self._client_id()
        redirect_uri = self.callback_url()

        params = [("client_id", client_id)]
        params.extend(self.config.extra_authorize_params)
        params.append(("redirect_uri", redirect_uri))

        self.tracker.set(self.service, ConnectionState.AUTHORIZING)
        return build_url(self.config.authorize_url, params)

    # ------------------------------------------------------------------
    # Step 2: callback / token exchange
    # ------------------------------------------------------------------
    def handle_callback(self, code: Optional[str]) -> str:
        """
        Exchange an authorization code for an access token and store it.

        Returns:
            The access token

        Raises:
            ValidationError: No code supplied (simulated services need none)
            ConfigurationError: Credentials or APP_URL missing
            ExternalServiceError: Transport failure, non-2xx, error payload,
                or a response without an access token
        """
        try:
            if self.config.credential_encoding == CredentialEncoding.MOCK:
                token = self.config.mock_token
            elif not code:
                raise ValidationError("Missing authorization code")
            else:
                token = self._exchange_code(code)

            self.profiles.set_token(self.service, token)
        except CareerAssistantError:
            self.tracker.set(self.service, ConnectionState.DISCONNECTED)
            raise

        self.tracker.set(self.service, ConnectionState.CONNECTED)
        logger.info("Stored %s access token", self.service)
        return token

    def _exchange_code(self, code: str) -> str:
        client_id = self._client_id()
        client_secret = self._client_secret()

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.config.credential_encoding == CredentialEncoding.BASIC:
            basic = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {basic}"
            body = {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.callback_url(),
            }
        else:
            body = {"client_id": client_id, "client_secret": client_secret, "code": code}

        try:
            response = self.http.post(self.config.token_url, headers=headers, json=body)
        except httpx.HTTPError as e:
            logger.error("%s token exchange failed: %s", self.config.display_name, e)
            raise ExternalServiceError(
                f"{self.config.display_name} token exchange failed: {e}",
                service=self.service,
            )

        try:
            data = response.json()
        except ValueError:
            raise ExternalServiceError(
                f"{self.config.display_name} returned a non-JSON token response",
                service=self.service,
                upstream_status=response.status_code,
            )

        if isinstance(data, dict) and data.get("error"):
            detail = data.get("error_description") or data.get("error")
            logger.error("%s OAuth error: %s", self.config.display_name, detail)
            raise ExternalServiceError(
                f"{self.config.display_name} auth error: {detail}",
                service=self.service,
                upstream_status=response.status_code,
            )

        if response.is_error:
            raise ExternalServiceError(
                f"{self.config.display_name} token exchange returned HTTP {response.status_code}",
                service=self.service,
                upstream_status=response.status_code,
            )

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise ExternalServiceError(
                f"Failed to obtain access token from {self.config.display_name}",
                service=self.service,
                upstream_status=response.status_code,
            )
        return token

    # ------------------------------------------------------------------
    # Manual token (Notion internal integration secret)
    # ------------------------------------------------------------------
    def connect_manually(self, token: Optional[str]) -> None:
        """
        Store a pasted token instead of running the OAuth flow.

        Raises:
            ValidationError: Service does not accept manual tokens, or the
                token is shorter than 10 characters
        """
        if not self.config.allows_manual_token:
            raise ValidationError(f"{self.config.display_name} does not accept manual tokens")

        token = (token or "").strip()
        if len(token) < MIN_MANUAL_TOKEN_LENGTH:
            logger.warning("Rejected manual %s token: too short", self.service)
            raise ValidationError(f"Invalid {self.config.display_name} secret format.")

        self.profiles.set_token(self.service, token)
        self.tracker.set(self.service, ConnectionState.CONNECTED)
        logger.info("Stored manual %s token", self.service)


def get_connector(
    service: str,
    settings: Settings,
    profile_repository: ProfileRepository,
    http_client: httpx.Client,
    tracker: ConnectionTracker,
) -> OAuthConnector:
    """Build the connector for a service name."""
    return OAuthConnector(
        get_provider_config(service),
        settings,
        profile_repository,
        http_client,
        tracker,
    )


# ----------------------------------------------------------------------
# Popup pages
# ----------------------------------------------------------------------
def render_callback_success(config: OAuthProviderConfig) -> str:
    """
    Page shown in the OAuth popup after a successful exchange.

    Posts ``{type: "<SERVICE>_AUTH_SUCCESS"}`` to the opener (any origin)
    and closes itself; opened directly, it redirects to the app root.
    """
    message = json.dumps({"type": config.success_message_type})
    name = html.escape(config.display_name)
    return f"""<html>
  <body>
    <script>
      if (window.opener) {{
        window.opener.postMessage({message}, '*');
        window.close();
      }} else {{
        window.location.href = '/';
      }}
    </script>
    <p>{name} connected successfully! This window will close automatically.</p>
  </body>
</html>"""


def render_callback_error(message: str) -> str:
    """Page shown in the OAuth popup when the exchange fails."""
    return f"""<html>
  <body>
    <h3>Connection failed</h3>
    <p>{html.escape(message)}</p>
  </body>
</html>"""
