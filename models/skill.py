from typing import Optional
from sqlmodel import SQLModel, Field

MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 5


class Skill(SQLModel, table=True):
    __tablename__ = "skills"

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    level: int = Field(default=MIN_SKILL_LEVEL)  # 1-5
    category: Optional[str] = Field(default=None)
