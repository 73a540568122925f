"""Login session lifecycle: creation, validation and revocation."""

import logging
import uuid
from datetime import timedelta
from typing import Protocol

from ..models import IssuedSession, SessionIdentity, SessionRecord, SessionState
from ..storage import Database
from .clock import Clock, utc_now
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class HeaderSource(Protocol):
    """Anything that can hand out request headers by name."""

    def get_header(self, name: str) -> str | None: ...


def generate_session_token() -> str:
    """Random opaque value stored with each session record."""
    return f"{uuid.uuid4()}-{uuid.uuid4()}"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an `Authorization: Bearer <token>` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class SessionManager:
    """Manages login sessions backed by the sessions table.

    A session is active while its record exists and the clock is before
    expires_at. Expired records count as absent. Deleting the record revokes
    the session even though tokens referencing it still carry a good signature.
    """

    def __init__(
        self,
        db: Database,
        codec: TokenCodec,
        session_ttl: timedelta = timedelta(days=7),
        clock: Clock = utc_now,
    ):
        """Initialize session manager."""
        self.db = db
        self.codec = codec
        self.session_ttl = session_ttl
        self._clock = clock

    async def create_session(self, user_id: str) -> IssuedSession:
        """Persist a new session for the user and sign a token referencing it.

        Args:
            user_id: Owner of the session

        Returns:
            IssuedSession with the signed token and the new session ID
        """
        now = self._clock()
        row = await self.db.create_session(
            user_id=user_id,
            token=generate_session_token(),
            created_at=now,
            expires_at=now + self.session_ttl,
        )
        record = SessionRecord(**row)

        token = self.codec.sign(user_id, record.session_id)
        logger.info(f"Created session {record.session_id} for user {user_id}")
        return IssuedSession(token=token, session_id=record.session_id)

    async def get_session_state(self, session_id: str) -> SessionState:
        """Report where a session is in its lifecycle."""
        row = await self.db.get_session(session_id)
        if row is None:
            return SessionState.REVOKED
        return SessionRecord(**row).state_at(self._clock())

    async def validate_session(self, token: str) -> SessionIdentity | None:
        """Resolve a signed token to its identity if the session is still active.

        Returns:
            The identity, or None if the token is bad or the session is gone or expired
        """
        identity = self.codec.verify(token)
        if identity is None:
            return None

        row = await self.db.get_session(identity.session_id)
        if row is None:
            logger.debug(f"Token references missing session {identity.session_id}")
            return None

        record = SessionRecord(**row)
        if record.user_id != identity.user_id:
            logger.warning(f"Token user does not own session {record.session_id}")
            return None
        if record.state_at(self._clock()) is not SessionState.ACTIVE:
            logger.debug(f"Session {record.session_id} has expired")
            return None

        return identity

    async def invalidate_session(self, session_id: str) -> None:
        """Delete the session. Deleting an already-deleted session is a no-op."""
        deleted = await self.db.delete_session(session_id)
        if deleted:
            logger.info(f"Invalidated session {session_id}")

    async def resolve_identity(self, request: HeaderSource) -> str | None:
        """Return the user ID behind the request's bearer token, or None."""
        token = extract_bearer_token(request.get_header("Authorization"))
        if token is None:
            return None

        identity = await self.validate_session(token)
        return identity.user_id if identity else None

    async def purge_expired(self) -> int:
        """Delete expired session records. Validation does not depend on this."""
        deleted = await self.db.delete_expired_sessions(self._clock())
        if deleted:
            logger.info(f"Purged {deleted} expired sessions")
        return deleted
