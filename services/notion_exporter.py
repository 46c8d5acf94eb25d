"""
Notion export adapter.

Turns a structured career advice object into Notion blocks and creates a
page under the first page the stored token can see.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from config.settings import Settings
from repositories.profile_repository import ProfileRepository
from services.advice_schemas import CareerAdvice
from utils.exceptions import AuthError, ExternalServiceError

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com/v1"

# Notion accepts at most 100 children per request
MAX_BLOCKS_PER_REQUEST = 100

DEFAULT_PAGE_TITLE = "Career Plan"


def _rich_text(content: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": content or ""}}]


def _block(block_type: str, content: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {} if content is None else {"rich_text": _rich_text(content)}
    return {"object": "block", "type": block_type, block_type: body}


def build_advice_blocks(advice: CareerAdvice) -> List[Dict[str, Any]]:
    """
    Convert advice into Notion blocks.

    Layout: heading, analysis paragraph, three headed bullet lists
    (short / medium / long term), divider, closing quote. Not truncated.
    """
    blocks = [
        _block("heading_1", "Career Analysis"),
        _block("paragraph", advice.analysis),
    ]

    sections = [
        ("🚀 Getting Started (Short Term)", advice.short_term),
        ("📈 Medium Term (3-12 Months)", advice.medium_term),
        ("🎯 Long Term (1-3 Years)", advice.long_term),
    ]
    for heading, items in sections:
        blocks.append(_block("heading_2", heading))
        blocks.extend(_block("bulleted_list_item", item) for item in items)

    blocks.append(_block("divider"))
    blocks.append(_block("quote", advice.motivation))
    return blocks


def build_page_payload(
    parent_page_id: str,
    title: Optional[str],
    blocks: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """Page-creation request body, with children cut to the per-request limit."""
    return {
        "parent": {"type": "page_id", "page_id": parent_page_id},
        "properties": {
            "title": [{"text": {"content": title or DEFAULT_PAGE_TITLE}}],
        },
        "children": blocks[:MAX_BLOCKS_PER_REQUEST],
    }


def plan_to_advice(plan_content: str) -> CareerAdvice:
    """
    Wrap free-text plan content from a ``createNotionPage`` tool call into
    the advice shape the exporter understands.
    """
    return CareerAdvice(
        analysis="Plan generated automatically by the AI assistant.",
        short_term=[plan_content],
        medium_term=["Plan details are on your Notion page."],
        long_term=["Best of luck!"],
        motivation="The road ahead is yours!",
        full_markdown=plan_content,
    )


class NotionExporter:
    """
    Creates career plan pages in the connected Notion workspace.

    No retries: a failed call surfaces as ExternalServiceError.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        http_client: httpx.Client,
        settings: Settings,
    ):
        self.profiles = profile_repository
        self.http = http_client
        self.settings = settings

    def export(self, advice: CareerAdvice, title: Optional[str] = None) -> Dict[str, Any]:
        """
        Create a page for ``advice``.

        Args:
            advice: Structured advice to render
            title: Page title (defaults to "Career Plan")

        Returns:
            Notion's page-creation response as-is

        Raises:
            AuthError: No Notion token stored (no HTTP call is made)
            ExternalServiceError: Search or page creation failed, or no
                page is accessible to use as the parent
        """
        token = self.profiles.get_token("notion")
        if not token:
            raise AuthError("Notion not connected", service="notion")

        parent_page_id = self.find_parent_page(token)
        payload = build_page_payload(parent_page_id, title, build_advice_blocks(advice))

        data = self._post(token, "/pages", payload)
        logger.info("Created Notion page %s", data.get("id"))
        return data

    def find_parent_page(self, token: str) -> str:
        """Return the id of the first page the token can access."""
        data = self._post(
            token,
            "/search",
            {"filter": {"property": "object", "value": "page"}, "page_size": 1},
        )
        results = data.get("results") or []
        if not results or not results[0].get("id"):
            raise ExternalServiceError(
                "No accessible Notion page found. Share at least one page with the integration.",
                service="notion",
            )
        return results[0]["id"]

    def _headers(self, token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Notion-Version": self.settings.NOTION_API_VERSION,
        }

    def _post(self, token: str, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.http.post(f"{NOTION_API_BASE}{path}", headers=self._headers(token), json=body)
        except httpx.HTTPError as e:
            logger.error("Notion request %s failed: %s", path, e)
            raise ExternalServiceError(f"Failed to reach Notion: {e}", service="notion")

        try:
            data = response.json()
        except ValueError:
            raise ExternalServiceError(
                f"Notion returned a non-JSON response for {path}",
                service="notion",
                upstream_status=response.status_code,
            )

        if response.is_error:
            message = data.get("message") if isinstance(data, dict) else None
            logger.error("Notion %s returned %s: %s", path, response.status_code, message)
            raise ExternalServiceError(
                f"Failed to export to Notion: {message or response.status_code}",
                service="notion",
                upstream_status=response.status_code,
            )
        return data
