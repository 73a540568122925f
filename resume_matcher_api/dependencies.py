"""FastAPI dependency providers.

Settings are read here and handed to the core classes explicitly, so tests
can swap any of them through app.dependency_overrides.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends

from .config import settings
from .core import (
    Clock,
    PasswordHasher,
    RateLimiter,
    ResumeAnalyzer,
    SessionManager,
    TokenCodec,
    utc_now,
)
from .storage import Database, get_db


def get_clock() -> Clock:
    """Dependency to get the time source."""
    return utc_now


def get_token_codec(clock: Clock = Depends(get_clock)) -> TokenCodec:
    """Dependency to get the session token codec."""
    return TokenCodec(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(days=settings.token_expire_days),
        clock=clock,
    )


def get_password_hasher() -> PasswordHasher:
    """Dependency to get the password hasher."""
    return PasswordHasher(rounds=settings.bcrypt_rounds)


async def get_session_manager(
    db: Database = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
    clock: Clock = Depends(get_clock),
) -> SessionManager:
    """Dependency to get session manager."""
    return SessionManager(
        db,
        codec,
        session_ttl=timedelta(days=settings.session_expire_days),
        clock=clock,
    )


async def get_rate_limiter(
    db: Database = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> RateLimiter:
    """Dependency to get the analysis rate limiter."""
    return RateLimiter(
        db,
        max_queries=settings.max_queries_per_day,
        window=timedelta(hours=settings.rate_limit_window_hours),
        clock=clock,
    )


@lru_cache(maxsize=1)
def get_analyzer() -> ResumeAnalyzer:
    """Dependency to get the (shared) Gemini analyzer."""
    return ResumeAnalyzer(api_key=settings.gemini_api_key)
