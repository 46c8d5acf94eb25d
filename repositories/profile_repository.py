"""
Profile repository for the singleton profile row.

Text fields and token fields are written through separate methods so the
profile-edit path can never touch a token.
"""

from typing import Optional

from sqlmodel import Session

from models.profile import Profile, PROFILE_ID, TOKEN_FIELDS, DEFAULT_PROFILE
from utils.exceptions import ValidationError

EDITABLE_FIELDS = ("full_name", "current_role", "target_role", "bio")


def token_field_for(service: str) -> str:
    """Return the token column for a service name, or raise ValidationError."""
    try:
        return TOKEN_FIELDS[service]
    except KeyError:
        raise ValidationError(f"Unknown service: {service}")


class ProfileRepository:
    """Data access helpers for the profile row."""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Profile:
        """Fetch the profile, creating it with defaults if the row is missing."""
        profile = self.db.get(Profile, PROFILE_ID)
        if profile is None:
            profile = Profile(id=PROFILE_ID, **DEFAULT_PROFILE)
            self._save(profile)
        return profile

    def update_text_fields(
        self,
        full_name: Optional[str],
        current_role: Optional[str],
        target_role: Optional[str],
        bio: Optional[str],
    ) -> Profile:
        """Overwrite the four user-editable fields."""
        profile = self.get()
        profile.full_name = full_name
        profile.current_role = current_role
        profile.target_role = target_role
        profile.bio = bio
        return self._save(profile)

    def get_token(self, service: str) -> Optional[str]:
        """Return the stored token for a service, or None."""
        return getattr(self.get(), token_field_for(service))

    def set_token(self, service: str, token: Optional[str]) -> Profile:
        """Store (or with None, clear) the token for one service."""
        field = token_field_for(service)
        profile = self.get()
        setattr(profile, field, token)
        return self._save(profile)

    def clear_token(self, service: str) -> Profile:
        return self.set_token(service, None)

    def backfill_notion_token(self, token: str) -> Profile:
        """Store the internal secret as the Notion token and mark the backfill done."""
        profile = self.get()
        profile.notion_token = token
        profile.notion_secret_backfilled = True
        return self._save(profile)

    def _save(self, profile: Profile) -> Profile:
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        return profile
