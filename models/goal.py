from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field


class GoalStatus(str, Enum):
    """Allowed goal states"""
    PENDING = "pending"
    COMPLETED = "completed"


class Goal(SQLModel, table=True):
    """
    Career goal.

    Only ``status`` changes after creation; it is stored as plain text and
    constrained to ``GoalStatus`` values by the repository.
    """
    __tablename__ = "goals"

    id: Optional[int] = Field(default=None, primary_key=True)

    title: str
    description: Optional[str] = Field(default=None)
    deadline: Optional[str] = Field(default=None)
    status: str = Field(
        default=GoalStatus.PENDING.value,
        description="Goal status: pending, completed"
    )
