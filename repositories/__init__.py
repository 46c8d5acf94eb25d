"""
Repositories module - Data Access Layer.

Provides repository classes for database operations following the Repository pattern.
Each repository handles CRUD operations for a specific domain entity.

Usage:
    from repositories import (
        ProfileRepository,
        SkillRepository,
        GoalRepository,
    )

    # Initialize with a database session
    profile_repo = ProfileRepository(db_session)
    skill_repo = SkillRepository(db_session)

    # Use repository methods
    profile = profile_repo.get()
    skills = skill_repo.list_all()
"""

from repositories.base_repository import BaseRepository
from repositories.profile_repository import ProfileRepository
from repositories.skill_repository import SkillRepository
from repositories.education_repository import EducationRepository
from repositories.goal_repository import GoalRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "SkillRepository",
    "EducationRepository",
    "GoalRepository",
]
