"""
Goal API Routes.

Endpoints:
- GET /api/goals - List goals
- POST /api/goals - Create a goal (always starts as pending)
- PATCH /api/goals/{id} - Set status to pending or completed
- DELETE /api/goals/{id} - Delete a goal
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_goal_repository
from api.models.collection_schemas import CreatedResponse, GoalCreate, GoalResponse, GoalStatusUpdate
from api.models.profile_schemas import ErrorResponse, SuccessResponse
from repositories import GoalRepository

router = APIRouter(prefix="/api/goals", tags=["Goals"])


@router.get("", response_model=List[GoalResponse])
def list_goals(repo: GoalRepository = Depends(get_goal_repository)):
    return repo.list_all()


@router.post("", response_model=CreatedResponse)
def create_goal(request: GoalCreate, repo: GoalRepository = Depends(get_goal_repository)):
    goal = repo.create(**request.model_dump())
    return CreatedResponse(id=goal.id)


@router.patch(
    "/{goal_id}",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Status is not pending or completed"},
        404: {"model": ErrorResponse, "description": "Goal not found"},
    },
)
def update_goal_status(
    goal_id: int,
    request: GoalStatusUpdate,
    repo: GoalRepository = Depends(get_goal_repository),
):
    """Set a goal's status. Repeating the same status is a no-op."""
    repo.set_status(goal_id, request.status)
    return SuccessResponse()


@router.delete("/{goal_id}", response_model=SuccessResponse)
def delete_goal(goal_id: int, repo: GoalRepository = Depends(get_goal_repository)):
    repo.delete_by_id(goal_id)
    return SuccessResponse()
