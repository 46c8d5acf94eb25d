from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_skill_repository
from api.models.collection_schemas import CreatedResponse, SkillCreate, SkillResponse
from api.models.profile_schemas import SuccessResponse
from repositories import SkillRepository

router = APIRouter(prefix="/api/skills", tags=["Skills"])


@router.get("", response_model=List[SkillResponse])
def list_skills(repo: SkillRepository = Depends(get_skill_repository)):
    return repo.list_all()


@router.post("", response_model=CreatedResponse)
def create_skill(request: SkillCreate, repo: SkillRepository = Depends(get_skill_repository)):
    """Add a skill. `level` must be between 1 and 5."""
    skill = repo.create(**request.model_dump())
    return CreatedResponse(id=skill.id)


@router.delete("/{skill_id}", response_model=SuccessResponse)
def delete_skill(skill_id: int, repo: SkillRepository = Depends(get_skill_repository)):
    """Delete a skill. Unknown ids are ignored."""
    repo.delete_by_id(skill_id)
    return SuccessResponse()
