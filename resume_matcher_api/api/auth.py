"""Account and login session endpoints."""

import asyncio
import logging
from typing import Any

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Request

from ..core import Clock, PasswordHasher, RateLimiter, SessionManager, extract_bearer_token
from ..dependencies import get_clock, get_password_hasher, get_rate_limiter, get_session_manager
from ..middleware import get_current_user_id
from ..models import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    MessageResponse,
    SignupRequest,
    UserProfile,
    UserPublic,
)
from ..storage import Database, get_db
from ..validators import validate_email, validate_password, validate_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Same message for unknown user and wrong password
INVALID_CREDENTIALS = "Invalid credentials"


def _public_user(row: dict[str, Any]) -> UserPublic:
    return UserPublic(id=row["user_id"], username=row["username"], email=row["email"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=201,
    summary="Create an account",
    description="""
Create an account and log it in.

- Username: 3-50 characters, unique (case-insensitive)
- Email: unique (case-insensitive)
- Password: at least 12 characters with upper, lower, digit and special character

Returns the user and a bearer token for the `Authorization` header.
""",
)
async def signup(
    body: SignupRequest,
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    manager: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    """Register a new user."""
    if not validate_username(body.username):
        raise HTTPException(status_code=400, detail="Username must be between 3 and 50 characters")

    if not validate_email(body.email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    password_check = validate_password(body.password)
    if not password_check.is_valid:
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Password does not meet requirements",
                "errors": password_check.errors,
            },
        )

    try:
        existing = await db.find_conflicting_user(body.username, body.email)
        if existing:
            if existing["username"].lower() == body.username.lower():
                raise HTTPException(status_code=409, detail="Username already taken")
            raise HTTPException(status_code=409, detail="Email already registered")

        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hasher.hash, body.password)

        try:
            user = await db.create_user(body.username, body.email, password_hash)
        except asyncpg.UniqueViolationError:
            # Lost a race with a concurrent signup
            raise HTTPException(status_code=409, detail="Username or email already registered")

        issued = await manager.create_session(user["user_id"])

        logger.info(f"User signed up: {user['user_id']}")
        return AuthResponse(
            message="Account created successfully",
            user=_public_user(user),
            token=issued.token,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Signup error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    description="Log in with a username or email and password. Each login opens a new session.",
)
async def login(
    body: LoginRequest,
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    manager: SessionManager = Depends(get_session_manager),
    clock: Clock = Depends(get_clock),
) -> AuthResponse:
    """Authenticate a user and start a session."""
    try:
        user = await db.find_user_by_login(body.username)
        if user is None:
            # Unknown users cost as much as wrong passwords
            valid = await asyncio.to_thread(hasher.verify_dummy, body.password)
        else:
            valid = await asyncio.to_thread(hasher.verify, body.password, user["password_hash"])

        if not valid:
            logger.info("Failed login attempt")
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

        await db.update_last_login(user["user_id"], clock())
        issued = await manager.create_session(user["user_id"])

        logger.info(f"User logged in: {user['user_id']}")
        return AuthResponse(
            message="Login successful",
            user=_public_user(user),
            token=issued.token,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    description="""
Revoke the session referenced by the bearer token.

Only the token signature is checked, so logging out of a session that has
already been revoked or has expired still succeeds.
""",
)
async def logout(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """End the caller's session."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise HTTPException(status_code=401, detail="No authorization token provided")

    identity = manager.codec.verify(token, verify_expiry=False)
    if identity is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        await manager.invalidate_session(identity.session_id)
    except Exception as e:
        logger.error(f"Logout error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info(f"User logged out: {identity.user_id}")
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current user",
    description="Get the logged-in user's profile and current analysis quota.",
)
async def me(
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> MeResponse:
    """Get the current user."""
    try:
        user = await db.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")

        rate_limit = await limiter.check_status(user_id)

        return MeResponse(
            user=UserProfile(
                id=user["user_id"],
                username=user["username"],
                email=user["email"],
                created_at=user["created_at"],
                last_login_at=user["last_login_at"],
            ),
            rate_limit=rate_limit,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get user error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
