"""Request authentication for protected routes."""

from .auth import RequestAuthenticator, RequestHeaders, get_current_user_id

__all__ = ["RequestAuthenticator", "RequestHeaders", "get_current_user_id"]
