"""Custom exceptions for the career assistant.

Each exception maps to one HTTP status in the API layer (see
``api/main.py``), so routes can let them propagate instead of building
error responses by hand.
"""

from typing import Optional


class CareerAssistantError(Exception):
    """Base exception for all career assistant errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(CareerAssistantError):
    """Raised when external client credentials or the public base URL are missing or invalid.

    Examples:
    - NOTION_CLIENT_ID not set or implausibly short
    - APP_URL not set
    - Client secret missing at token exchange time
    """

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ValidationError(CareerAssistantError):
    """Raised when user input is malformed (short token, unknown goal status, unknown service)."""

    status_code = 400


class AuthError(CareerAssistantError):
    """Raised when an operation needs an external service that is not connected."""

    status_code = 401

    def __init__(self, message: str, service: Optional[str] = None):
        super().__init__(message)
        self.service = service


class ExternalServiceError(CareerAssistantError):
    """Raised when a third-party HTTP call fails or returns an error payload.

    Examples:
    - Network error / timeout
    - Non-2xx response
    - JSON body with an ``error`` field instead of an access token
    """

    status_code = 502

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        upstream_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.service = service
        self.upstream_status = upstream_status


class ParseError(CareerAssistantError):
    """Raised when the AI response is not valid structured JSON for the requested contract."""

    status_code = 502


class NotFoundError(CareerAssistantError):
    """Raised when a resource addressed by id does not exist."""

    status_code = 404
