"""User data models."""

from datetime import datetime

from pydantic import BaseModel


class UserPublic(BaseModel):
    """User fields safe to return after signup/login."""

    id: str
    username: str
    email: str


class UserProfile(UserPublic):
    """Full profile returned by /auth/me."""

    created_at: datetime
    last_login_at: datetime | None = None
