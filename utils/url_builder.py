"""URL building and normalization utilities."""

from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode, urlparse

from utils.exceptions import ConfigurationError


def normalize_base_url(base_url: Optional[str]) -> str:
    """
    Validate and normalize the app's public base address.

    Args:
        base_url: Raw value of APP_URL (may have whitespace or a trailing slash)

    Returns:
        Base URL without trailing slash

    Raises:
        ConfigurationError: If the value is missing or not an http(s) URL

    Examples:
        - normalize_base_url('https://app.example.com/') -> 'https://app.example.com'
        - normalize_base_url(' http://localhost:8000 ') -> 'http://localhost:8000'
        - normalize_base_url('localhost:8000') -> ConfigurationError
    """
    if base_url is None or not base_url.strip():
        raise ConfigurationError("APP_URL is not configured.")

    url = base_url.strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"APP_URL is not a valid http(s) URL: {url}")

    return url


def build_callback_url(base_url: Optional[str], service: str) -> str:
    """
    Build the OAuth callback address for a service.

    Examples:
        - build_callback_url('https://app.example.com/', 'notion')
          -> 'https://app.example.com/auth/notion/callback'
    """
    return f"{normalize_base_url(base_url)}/auth/{service}/callback"


def build_url(endpoint: str, params: Iterable[Tuple[str, str]]) -> str:
    """Append URL-encoded query parameters to an endpoint, keeping their order."""
    return f"{endpoint}?{urlencode(list(params))}"
