"""API endpoints for the Resume Matcher service."""

from .analyze import router as analyze_router
from .auth import router as auth_router
from .feedback import router as feedback_router
from .health import router as health_router
from .uploads import router as uploads_router

__all__ = [
    "auth_router",
    "analyze_router",
    "uploads_router",
    "feedback_router",
    "health_router",
]
