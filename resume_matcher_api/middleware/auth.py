"""Bearer-token authentication for protected routes."""

import logging

from fastapi import Depends, HTTPException, Request

from ..core import HeaderSource, SessionManager
from ..dependencies import get_session_manager

logger = logging.getLogger(__name__)


class RequestHeaders:
    """Exposes a Starlette request through the HeaderSource interface."""

    def __init__(self, request: Request):
        self._headers = request.headers

    def get_header(self, name: str) -> str | None:
        return self._headers.get(name)


class RequestAuthenticator:
    """Resolves the caller of a request to a user ID.

    Holds no state of its own; every call re-checks the token signature and
    the live session record.
    """

    def __init__(self, session_manager: SessionManager):
        self.session_manager = session_manager

    async def authenticate(self, request: HeaderSource) -> str | None:
        """Return the authenticated user ID, or None if the caller is anonymous."""
        return await self.session_manager.resolve_identity(request)


async def get_current_user_id(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
) -> str:
    """Dependency for routes that require a logged-in user.

    Sets request.state.user_id on success.

    Raises:
        HTTPException: 401 if the bearer token is missing, invalid, expired or revoked
    """
    user_id = await RequestAuthenticator(manager).authenticate(RequestHeaders(request))
    if user_id is None:
        logger.debug(f"Unauthorized request to {request.url.path}")
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.user_id = user_id
    return user_id
