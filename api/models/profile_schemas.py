from pydantic import BaseModel, Field
from typing import Dict, Optional

from models.profile import Profile


class ProfileResponse(BaseModel):
    """Profile as exposed to clients. Tokens are reported as connected flags only."""
    id: int
    full_name: Optional[str] = None
    current_role: Optional[str] = None
    target_role: Optional[str] = None
    bio: Optional[str] = None
    notion_connected: bool = False
    linkedin_connected: bool = False
    github_connected: bool = False

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            current_role=profile.current_role,
            target_role=profile.target_role,
            bio=profile.bio,
            notion_connected=bool(profile.notion_token),
            linkedin_connected=bool(profile.linkedin_token),
            github_connected=bool(profile.github_token),
        )


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields. Token fields are not accepted here."""
    full_name: Optional[str] = Field(None, description="Display name")
    current_role: Optional[str] = Field(None, description="Current job title")
    target_role: Optional[str] = Field(None, description="Role the user is working towards")
    bio: Optional[str] = Field(None, description="Free-text biography")


class ConnectionStatusResponse(BaseModel):
    services: Dict[str, str] = Field(..., description="Service name -> disconnected | authorizing | connected")


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
