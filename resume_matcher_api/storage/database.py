"""Database management with PostgreSQL via asyncpg."""

import json
import logging
import uuid
from datetime import datetime
from typing import Any

import asyncpg

from ..config import settings

logger = logging.getLogger(__name__)


def _json_value(value: Any) -> Any:
    return json.loads(value) if isinstance(value, str) else value


class Database:
    """Async PostgreSQL database manager using asyncpg."""

    def __init__(self, db_url: str):
        """Initialize database with connection URL."""
        self.db_url = db_url
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """Establish database connection pool and initialize schema."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            self.db_url,
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
            command_timeout=60,
        )

        from .schema import INIT_SCHEMA

        async with self._pool.acquire() as conn:
            await conn.execute(INIT_SCHEMA)

        logger.info(f"Database connected: {self.db_url.split('@')[-1]}")  # Don't log password

    async def disconnect(self) -> None:
        """Close database connection pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database disconnected")

    def _require_pool(self) -> asyncpg.Pool:
        if not self._pool:
            raise RuntimeError("Database not connected")
        return self._pool

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        async with self._require_pool().acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1

    # User operations
    async def create_user(self, username: str, email: str, password_hash: str) -> dict[str, Any]:
        """Create a user. Username and email are stored lowercased.

        Raises:
            asyncpg.UniqueViolationError: If the username or email is already taken
        """
        user_id = str(uuid.uuid4())

        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO users (user_id, username, email, password_hash)
                VALUES ($1, LOWER($2), LOWER($3), $4)
                RETURNING user_id, username, email, password_hash, created_at, last_login_at
                """,
                user_id,
                username,
                email,
                password_hash,
            )

        logger.debug(f"Created user: {user_id}")
        return dict(row)

    async def find_user_by_login(self, identifier: str) -> dict[str, Any] | None:
        """Find a user whose username or email matches, case-insensitively."""
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT user_id, username, email, password_hash, created_at, last_login_at
                FROM users
                WHERE LOWER(username) = LOWER($1) OR LOWER(email) = LOWER($1)
                LIMIT 1
                """,
                identifier,
            )

        return dict(row) if row else None

    async def find_conflicting_user(self, username: str, email: str) -> dict[str, Any] | None:
        """Find a user that already holds this username or this email."""
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT user_id, username, email
                FROM users
                WHERE LOWER(username) = LOWER($1) OR LOWER(email) = LOWER($2)
                LIMIT 1
                """,
                username,
                email,
            )

        return dict(row) if row else None

    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        """Get user by ID."""
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT user_id, username, email, created_at, last_login_at
                FROM users WHERE user_id = $1
                """,
                user_id,
            )

        return dict(row) if row else None

    async def update_last_login(self, user_id: str, at: datetime) -> None:
        """Stamp the user's last login time."""
        async with self._require_pool().acquire() as conn:
            await conn.execute(
                "UPDATE users SET last_login_at = $1 WHERE user_id = $2", at, user_id
            )

    # Session operations
    async def create_session(
        self, user_id: str, token: str, created_at: datetime, expires_at: datetime
    ) -> dict[str, Any]:
        """Persist a session and return it, including its generated session_id."""
        session_id = str(uuid.uuid4())

        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO sessions (session_id, user_id, token, created_at, expires_at)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING session_id, user_id, token, created_at, expires_at
                """,
                session_id,
                user_id,
                token,
                created_at,
                expires_at,
            )

        logger.debug(f"Created session: {session_id}")
        return dict(row)

    async def get_session(self, session_id: str) -> dict[str, Any] | None:
        """Get session by ID."""
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT session_id, user_id, token, created_at, expires_at
                FROM sessions WHERE session_id = $1
                """,
                session_id,
            )

        return dict(row) if row else None

    async def delete_session(self, session_id: str) -> bool:
        """Delete session. Returns False if it was already gone."""
        async with self._require_pool().acquire() as conn:
            result = await conn.execute("DELETE FROM sessions WHERE session_id = $1", session_id)

        deleted = result.split()[-1] != "0" if result else False
        if deleted:
            logger.debug(f"Deleted session: {session_id}")
        return deleted

    async def delete_expired_sessions(self, now: datetime) -> int:
        """Delete sessions whose expiry has passed."""
        async with self._require_pool().acquire() as conn:
            result = await conn.execute("DELETE FROM sessions WHERE expires_at <= $1", now)

        # Extract count from result string "DELETE N"
        return int(result.split()[-1]) if result else 0

    # Query usage operations
    async def record_query(self, user_id: str, at: datetime) -> None:
        """Append one query usage row."""
        async with self._require_pool().acquire() as conn:
            await conn.execute(
                "INSERT INTO query_usage (user_id, queried_at) VALUES ($1, $2)", user_id, at
            )

    async def get_query_window(self, user_id: str, since: datetime) -> tuple[int, datetime | None]:
        """Count a user's queries at or after `since` and find the oldest of them.

        Both values come from one statement so they always describe the same rows.
        """
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT COUNT(*) AS used, MIN(queried_at) AS oldest
                FROM query_usage
                WHERE user_id = $1 AND queried_at >= $2
                """,
                user_id,
                since,
            )

        return (row["used"] or 0), row["oldest"]

    # Resume operations
    async def create_resume(
        self,
        user_id: str,
        file_name: str,
        file_type: str,
        file_path: str,
        file_size: int,
        extracted_text: str | None,
    ) -> dict[str, Any]:
        """Create a resume record for an uploaded file."""
        resume_id = str(uuid.uuid4())

        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO resumes (
                    resume_id, user_id, file_name, file_type, file_path, file_size, extracted_text
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7)
                RETURNING *
                """,
                resume_id,
                user_id,
                file_name,
                file_type,
                file_path,
                file_size,
                extracted_text,
            )

        logger.debug(f"Created resume: {resume_id}")
        return dict(row)

    async def get_resume(self, resume_id: str, user_id: str) -> dict[str, Any] | None:
        """Get a resume owned by the given user."""
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM resumes WHERE resume_id = $1 AND user_id = $2", resume_id, user_id
            )

        return dict(row) if row else None

    async def list_resumes(self, user_id: str) -> list[dict[str, Any]]:
        """List a user's resumes, newest first."""
        async with self._require_pool().acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT resume_id, file_name, file_type, file_size, created_at
                FROM resumes
                WHERE user_id = $1
                ORDER BY created_at DESC
                """,
                user_id,
            )

        return [dict(row) for row in rows]

    # Analysis operations
    async def create_analysis(
        self,
        user_id: str,
        resume_id: str,
        job_description: str,
        model: str,
        match_percentage: int,
        result: dict[str, Any],
    ) -> dict[str, Any]:
        """Persist an analysis result."""
        analysis_id = str(uuid.uuid4())

        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO analyses (
                    analysis_id, user_id, resume_id, job_description, model,
                    match_percentage, result
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7::jsonb)
                RETURNING *
                """,
                analysis_id,
                user_id,
                resume_id,
                job_description,
                model,
                match_percentage,
                json.dumps(result),  # Convert dict to JSON string for JSONB
            )

        logger.debug(f"Created analysis: {analysis_id}")
        record = dict(row)
        record["result"] = _json_value(record["result"])
        return record

    async def list_analyses(self, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """List a user's most recent analyses."""
        async with self._require_pool().acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT analysis_id, model, match_percentage, job_description, created_at
                FROM analyses
                WHERE user_id = $1
                ORDER BY created_at DESC
                LIMIT $2
                """,
                user_id,
                limit,
            )

        return [dict(row) for row in rows]

    # Feedback operations
    async def create_feedback(
        self, user_id: str, rating: int, category: str, message: str
    ) -> dict[str, Any]:
        """Store a feedback entry."""
        feedback_id = str(uuid.uuid4())

        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO feedback (feedback_id, user_id, rating, category, message)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING *
                """,
                feedback_id,
                user_id,
                rating,
                category,
                message,
            )

        return dict(row)

    async def list_feedback(self, user_id: str) -> list[dict[str, Any]]:
        """List a user's feedback, newest first."""
        async with self._require_pool().acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT feedback_id, rating, category, message, created_at
                FROM feedback
                WHERE user_id = $1
                ORDER BY created_at DESC
                """,
                user_id,
            )

        return [dict(row) for row in rows]


# Global database instance
_db: Database | None = None


async def init_database() -> Database:
    """Initialize and return global database instance."""
    global _db
    if _db is None:
        _db = Database(settings.get_database_url())
        await _db.connect()

    return _db


async def get_db() -> Database:
    """Get database instance (dependency injection).

    Auto-initializes if not already initialized.
    """
    global _db
    if _db is None:
        _db = await init_database()
    return _db
