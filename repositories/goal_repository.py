"""
Goal repository.

Adds status transitions on top of the common CRUD operations.
"""

import logging
from typing import Union

from sqlmodel import Session

from models.goal import Goal, GoalStatus
from repositories.base_repository import BaseRepository
from utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def parse_goal_status(value: Union[str, GoalStatus, None]) -> GoalStatus:
    """
    Convert user input into a GoalStatus.

    Raises:
        ValidationError: If the value is not one of the allowed statuses
    """
    if isinstance(value, GoalStatus):
        return value
    try:
        return GoalStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in GoalStatus)
        raise ValidationError(f"Invalid goal status '{value}'. Must be one of: {allowed}")


class GoalRepository(BaseRepository[Goal]):
    """Repository for managing goals."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Goal)

    def create(self, **fields) -> Goal:
        """Create a goal. New goals always start as pending."""
        fields["status"] = GoalStatus.PENDING.value
        return super().create(**fields)

    def set_status(self, goal_id: int, status: Union[str, GoalStatus]) -> Goal:
        """
        Set a goal's status.

        Setting the status a goal already has is a no-op, so repeating the
        same request never flips it back.

        Args:
            goal_id: Goal primary key
            status: Target status (pending or completed)

        Returns:
            The updated goal

        Raises:
            ValidationError: If status is not an allowed value
            NotFoundError: If the goal does not exist
        """
        target = parse_goal_status(status)

        goal = self.get_by_id(goal_id)
        if goal is None:
            raise NotFoundError(f"Goal {goal_id} not found")

        if goal.status == target.value:
            return goal

        goal.status = target.value
        return self.update(goal)
