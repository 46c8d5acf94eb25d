"""
Education repository.

Education records are created and deleted by the user; there is no update operation.
"""

from sqlmodel import Session

from models.education import Education
from repositories.base_repository import BaseRepository


class EducationRepository(BaseRepository[Education]):
    """Repository for managing education records."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Education)
