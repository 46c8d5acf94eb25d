"""
Unit tests for ProfileService: Notion secret backfill, text-only updates,
connection status.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from unittest.mock import Mock

import pytest

from repositories import ProfileRepository
from services import ConnectionState, ConnectionTracker, ProfileService


@pytest.fixture
def profiles(db_session):
    return ProfileRepository(db_session)


class TestNotionBackfill:

    def test_backfills_internal_secret_exactly_once(self, profiles, settings):
        settings = settings.model_copy(update={"NOTION_INTERNAL_SECRET": "  secret_internal_123  "})
        profiles.backfill_notion_token = Mock(wraps=profiles.backfill_notion_token)
        service = ProfileService(profiles, settings)

        first = service.get()
        second = service.get()

        assert first.notion_token == "secret_internal_123"
        assert second.notion_token == "secret_internal_123"
        assert second.notion_secret_backfilled is True
        assert profiles.backfill_notion_token.call_count == 1

    def test_no_secret_means_no_write(self, profiles, settings):
        profiles.backfill_notion_token = Mock(wraps=profiles.backfill_notion_token)

        profile = ProfileService(profiles, settings).get()

        assert profile.notion_token is None
        profiles.backfill_notion_token.assert_not_called()

    def test_existing_token_is_not_overwritten(self, profiles, settings):
        profiles.set_token("notion", "secret_from_oauth")
        settings = settings.model_copy(update={"NOTION_INTERNAL_SECRET": "secret_internal_123"})

        profile = ProfileService(profiles, settings).get()

        assert profile.notion_token == "secret_from_oauth"


class TestUpdate:

    def test_token_keys_are_ignored(self, profiles, settings):
        service = ProfileService(profiles, settings)

        profile = service.update({
            "full_name": "Budi",
            "current_role": "Backend Developer",
            "target_role": "Engineering Manager",
            "bio": "Payments",
            "notion_token": "injected",
            "github_token": "injected",
        })

        assert profile.full_name == "Budi"
        assert profile.notion_token is None
        assert profile.github_token is None

    def test_missing_fields_become_empty(self, profiles, settings):
        profile = ProfileService(profiles, settings).update({"full_name": "Budi"})
        assert profile.bio is None


class TestConnectionStatus:

    def test_reports_every_service(self, profiles, settings):
        tracker = ConnectionTracker()
        profiles.set_token("github", "gho_abc")
        tracker.set("notion", ConnectionState.AUTHORIZING)

        status = ProfileService(profiles, settings, tracker).connection_status()

        assert status == {
            "notion": "authorizing",
            "linkedin": "disconnected",
            "github": "connected",
        }

    def test_disconnect_clears_token(self, profiles, settings):
        tracker = ConnectionTracker()
        profiles.set_token("linkedin", "mock_linkedin_token_123")
        service = ProfileService(profiles, settings, tracker)

        service.disconnect("linkedin")

        assert profiles.get_token("linkedin") is None
        assert service.connection_status()["linkedin"] == "disconnected"

    def test_disconnected_notion_stays_disconnected_with_internal_secret(self, profiles, settings):
        settings = settings.model_copy(update={"NOTION_INTERNAL_SECRET": "secret_internal_123"})
        service = ProfileService(profiles, settings, ConnectionTracker())
        service.get()

        service.disconnect("notion")

        assert service.connection_status()["notion"] == "disconnected"
        assert service.get().notion_token is None
