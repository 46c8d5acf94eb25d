from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_github_service
from api.models.integration_schemas import ReadmeResponse
from services import GitHubService

router = APIRouter(prefix="/api/github", tags=["GitHub"])


@router.get("/repos")
def list_repos(service: GitHubService = Depends(get_github_service)) -> List[Dict[str, Any]]:
    """Ten most recently updated repositories of the connected account."""
    return service.list_repos()


@router.get("/readme", response_model=ReadmeResponse)
def get_readme(
    owner: Optional[str] = Query(None),
    repo: Optional[str] = Query(None),
    service: GitHubService = Depends(get_github_service),
):
    return ReadmeResponse(content=service.get_readme(owner, repo))
