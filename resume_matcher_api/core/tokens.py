"""Signed session tokens (JWT via PyJWT)."""

import logging
from datetime import UTC, datetime, timedelta

import jwt

from ..models import SessionIdentity
from .clock import Clock, utc_now

logger = logging.getLogger(__name__)


class TokenCodec:
    """Signs and verifies compact tokens that reference a login session.

    A valid token only proves that this service issued it and that it has not
    expired. Whether the session it points at still exists is checked by
    SessionManager. Changing the secret invalidates every outstanding token.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Clock = utc_now,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def sign(self, user_id: str, session_id: str) -> str:
        """Issue a token embedding the user and session IDs."""
        issued_at = self._clock()
        payload = {
            "user_id": user_id,
            "session_id": session_id,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str, verify_expiry: bool = True) -> SessionIdentity | None:
        """Return the embedded identity, or None if the token is bad or expired.

        With verify_expiry=False an expired but correctly signed token still
        yields its identity, which is enough to revoke the session it names.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                # Expiry is checked below against the injected clock
                options={
                    "require": ["exp", "user_id", "session_id"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            return None

        exp = payload["exp"]
        if not isinstance(exp, int | float):
            return None
        if verify_expiry and datetime.fromtimestamp(exp, UTC) <= self._clock():
            logger.debug("Rejected token: expired")
            return None

        user_id = payload["user_id"]
        session_id = payload["session_id"]
        if not isinstance(user_id, str) or not isinstance(session_id, str):
            return None

        return SessionIdentity(user_id=user_id, session_id=session_id)
