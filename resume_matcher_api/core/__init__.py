"""Core business logic for authentication, sessions and quotas."""

from .analyzer import AVAILABLE_MODELS, AnalysisError, ResumeAnalyzer
from .clock import Clock, utc_now
from .passwords import PasswordHasher
from .rate_limiter import RateLimiter
from .session_manager import HeaderSource, SessionManager, extract_bearer_token
from .text_extractor import TextExtractionError, extract_text
from .tokens import TokenCodec

__all__ = [
    "AVAILABLE_MODELS",
    "AnalysisError",
    "ResumeAnalyzer",
    "Clock",
    "utc_now",
    "PasswordHasher",
    "RateLimiter",
    "HeaderSource",
    "SessionManager",
    "extract_bearer_token",
    "TextExtractionError",
    "extract_text",
    "TokenCodec",
]
