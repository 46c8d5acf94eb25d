from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_education_repository
from api.models.collection_schemas import CreatedResponse, EducationCreate, EducationResponse
from api.models.profile_schemas import SuccessResponse
from repositories import EducationRepository

router = APIRouter(prefix="/api/education", tags=["Education"])


@router.get("", response_model=List[EducationResponse])
def list_education(repo: EducationRepository = Depends(get_education_repository)):
    return repo.list_all()


@router.post("", response_model=CreatedResponse)
def create_education(request: EducationCreate, repo: EducationRepository = Depends(get_education_repository)):
    record = repo.create(**request.model_dump())
    return CreatedResponse(id=record.id)


@router.delete("/{education_id}", response_model=SuccessResponse)
def delete_education(education_id: int, repo: EducationRepository = Depends(get_education_repository)):
    """Delete an education record. Unknown ids are ignored."""
    repo.delete_by_id(education_id)
    return SuccessResponse()
