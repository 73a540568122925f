"""Session data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SessionState(str, Enum):
    """Lifecycle state of a login session."""

    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"


class SessionRecord(BaseModel):
    """A persisted login session.

    The record, not the signed token that references it, decides whether
    the session is still usable.
    """

    session_id: str
    user_id: str
    token: str = Field(..., description="Random opaque value, never sent to clients")
    created_at: datetime
    expires_at: datetime

    def state_at(self, now: datetime) -> SessionState:
        """Active strictly before expires_at, expired from then on."""
        return SessionState.ACTIVE if now < self.expires_at else SessionState.EXPIRED


class SessionIdentity(BaseModel):
    """Claims carried by a signed session token."""

    user_id: str
    session_id: str


class IssuedSession(BaseModel):
    """Result of a successful login: the signed token and the session it references."""

    token: str
    session_id: str
