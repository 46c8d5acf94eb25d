"""
Skill repository.

Skills are created and deleted by the user; there is no update operation.
"""

from sqlmodel import Session

from models.skill import Skill
from repositories.base_repository import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    """Repository for managing skills."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Skill)
