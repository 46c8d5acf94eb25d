from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from models.goal import GoalStatus
from models.skill import MIN_SKILL_LEVEL, MAX_SKILL_LEVEL


class CreatedResponse(BaseModel):
    id: int


# ============ SKILLS ============

class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1)
    level: int = Field(MIN_SKILL_LEVEL, ge=MIN_SKILL_LEVEL, le=MAX_SKILL_LEVEL)
    category: Optional[str] = None


class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    level: int
    category: Optional[str] = None


# ============ EDUCATION ============

class EducationCreate(BaseModel):
    institution: str = Field(..., min_length=1)
    degree: Optional[str] = None
    field: Optional[str] = None
    start_date: Optional[str] = Field(None, description="Free text, not validated as a date")
    end_date: Optional[str] = Field(None, description="Free text, not validated as a date")


class EducationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    institution: str
    degree: Optional[str] = None
    field: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


# ============ GOALS ============

class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    deadline: Optional[str] = Field(None, description="Free text")


class GoalStatusUpdate(BaseModel):
    # Plain string so an unknown value reaches the repository and is
    # reported as a validation error in the usual {"error": ...} shape
    status: str = Field(..., description=f"One of: {', '.join(s.value for s in GoalStatus)}")


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    deadline: Optional[str] = None
    status: str
