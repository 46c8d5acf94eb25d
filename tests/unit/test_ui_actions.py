"""
Unit tests for the dashboard's button actions: API failures are shown in
the page instead of escaping as a traceback.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from unittest.mock import Mock

import pytest

from ui import app as dashboard
from ui.api_client import ApiError


@pytest.fixture
def show_error(monkeypatch):
    mock = Mock()
    monkeypatch.setattr(dashboard, "show_error", mock)
    return mock


class TestRunAction:

    def test_success(self, show_error):
        action = Mock(return_value={"success": True})

        assert dashboard.run_action(action, 7, "completed") is True

        action.assert_called_once_with(7, "completed")
        show_error.assert_not_called()

    def test_api_error_is_shown(self, show_error):
        error = ApiError("Goal 7 not found", 404)
        action = Mock(side_effect=error)

        assert dashboard.run_action(action, 7) is False

        show_error.assert_called_once_with(error)

    def test_other_errors_propagate(self, show_error):
        action = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            dashboard.run_action(action)

        show_error.assert_not_called()
