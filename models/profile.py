"""
Profile model: the single-row table holding user identity and third-party tokens.
"""

from typing import Optional
from sqlmodel import SQLModel, Field

# The profile row always lives at this id
PROFILE_ID = 1

# External service name -> token column
TOKEN_FIELDS = {
    "notion": "notion_token",
    "linkedin": "linkedin_token",
    "github": "github_token",
}

DEFAULT_PROFILE = {
    "full_name": "User",
    "current_role": "Software Developer",
    "target_role": "Senior Software Architect",
    "bio": "A passionate professional looking to advance my career.",
}


class Profile(SQLModel, table=True):
    """
    Singleton user profile.

    Text fields are edited by the user; token fields are written only by
    the OAuth flows (or the manual Notion secret).
    """
    __tablename__ = "profile"

    id: int = Field(default=PROFILE_ID, primary_key=True)
    full_name: Optional[str] = Field(default=None)
    current_role: Optional[str] = Field(default=None)
    target_role: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)

    notion_token: Optional[str] = Field(default=None)
    linkedin_token: Optional[str] = Field(default=None)
    github_token: Optional[str] = Field(default=None)

    # Set once NOTION_INTERNAL_SECRET has been copied into notion_token
    notion_secret_backfilled: bool = Field(default=False)
