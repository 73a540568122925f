"""Pytest configuration and fixtures."""

import os
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, Mock

# Set test environment variables BEFORE importing anything that loads settings
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MAX_QUERIES_PER_DAY"] = "5"
os.environ["RATE_LIMIT_WINDOW_HOURS"] = "24"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from resume_matcher_api.config import settings
from resume_matcher_api.models import AnalysisResult

assert settings.bcrypt_rounds == 4, "Test setup failed: bcrypt_rounds should be 4"

TEST_SECRET = os.environ["SECRET_KEY"]
STRONG_PASSWORD = "StrongPass123!@#"


class FakeClock:
    """Settable clock so tests can move time without sleeping."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class MemoryDatabase:
    """In-memory stand-in for storage.Database with the same async operations."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.users: dict[str, dict[str, Any]] = {}
        self.sessions: dict[str, dict[str, Any]] = {}
        self.query_usage: list[dict[str, Any]] = []
        self.resumes: dict[str, dict[str, Any]] = {}
        self.analyses: list[dict[str, Any]] = []
        self.feedback: list[dict[str, Any]] = []

    async def ping(self) -> bool:
        return True

    # Users
    async def create_user(self, username: str, email: str, password_hash: str) -> dict[str, Any]:
        user = {
            "user_id": str(uuid.uuid4()),
            "username": username.lower(),
            "email": email.lower(),
            "password_hash": password_hash,
            "created_at": self.clock(),
            "last_login_at": None,
        }
        self.users[user["user_id"]] = user
        return dict(user)

    async def find_user_by_login(self, identifier: str) -> dict[str, Any] | None:
        needle = identifier.lower()
        for user in self.users.values():
            if user["username"] == needle or user["email"] == needle:
                return dict(user)
        return None

    async def find_conflicting_user(self, username: str, email: str) -> dict[str, Any] | None:
        for user in self.users.values():
            if user["username"] == username.lower() or user["email"] == email.lower():
                return dict(user)
        return None

    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        return {k: v for k, v in user.items() if k != "password_hash"}

    async def update_last_login(self, user_id: str, at: datetime) -> None:
        if user_id in self.users:
            self.users[user_id]["last_login_at"] = at

    # Sessions
    async def create_session(
        self, user_id: str, token: str, created_at: datetime, expires_at: datetime
    ) -> dict[str, Any]:
        session = {
            "session_id": str(uuid.uuid4()),
            "user_id": user_id,
            "token": token,
            "created_at": created_at,
            "expires_at": expires_at,
        }
        self.sessions[session["session_id"]] = session
        return dict(session)

    async def get_session(self, session_id: str) -> dict[str, Any] | None:
        session = self.sessions.get(session_id)
        return dict(session) if session else None

    async def delete_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    async def delete_expired_sessions(self, now: datetime) -> int:
        expired = [sid for sid, s in self.sessions.items() if s["expires_at"] <= now]
        for sid in expired:
            del self.sessions[sid]
        return len(expired)

    # Query usage
    async def record_query(self, user_id: str, at: datetime) -> None:
        self.query_usage.append({"user_id": user_id, "queried_at": at})

    async def get_query_window(self, user_id: str, since: datetime) -> tuple[int, datetime | None]:
        in_window = [
            row["queried_at"]
            for row in self.query_usage
            if row["user_id"] == user_id and row["queried_at"] >= since
        ]
        return len(in_window), min(in_window, default=None)

    # Resumes
    async def create_resume(
        self,
        user_id: str,
        file_name: str,
        file_type: str,
        file_path: str,
        file_size: int,
        extracted_text: str | None,
    ) -> dict[str, Any]:
        resume = {
            "resume_id": str(uuid.uuid4()),
            "user_id": user_id,
            "file_name": file_name,
            "file_type": file_type,
            "file_path": file_path,
            "file_size": file_size,
            "extracted_text": extracted_text,
            "created_at": self.clock(),
        }
        self.resumes[resume["resume_id"]] = resume
        return dict(resume)

    async def get_resume(self, resume_id: str, user_id: str) -> dict[str, Any] | None:
        resume = self.resumes.get(resume_id)
        if resume is None or resume["user_id"] != user_id:
            return None
        return dict(resume)

    async def list_resumes(self, user_id: str) -> list[dict[str, Any]]:
        rows = [r for r in self.resumes.values() if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    # Analyses
    async def create_analysis(
        self,
        user_id: str,
        resume_id: str,
        job_description: str,
        model: str,
        match_percentage: int,
        result: dict[str, Any],
    ) -> dict[str, Any]:
        analysis = {
            "analysis_id": str(uuid.uuid4()),
            "user_id": user_id,
            "resume_id": resume_id,
            "job_description": job_description,
            "model": model,
            "match_percentage": match_percentage,
            "result": result,
            "created_at": self.clock(),
        }
        self.analyses.append(analysis)
        return dict(analysis)

    async def list_analyses(self, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
        rows = [a for a in self.analyses if a["user_id"] == user_id]
        return sorted(rows, key=lambda a: a["created_at"], reverse=True)[:limit]

    # Feedback
    async def create_feedback(
        self, user_id: str, rating: int, category: str, message: str
    ) -> dict[str, Any]:
        entry = {
            "feedback_id": str(uuid.uuid4()),
            "user_id": user_id,
            "rating": rating,
            "category": category,
            "message": message,
            "created_at": self.clock(),
        }
        self.feedback.append(entry)
        return dict(entry)

    async def list_feedback(self, user_id: str) -> list[dict[str, Any]]:
        rows = [f for f in self.feedback if f["user_id"] == user_id]
        return sorted(rows, key=lambda f: f["created_at"], reverse=True)


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a Tuesday, 3pm UTC."""
    return FakeClock(datetime(2025, 1, 14, 15, 0, tzinfo=UTC))


@pytest.fixture
def store(clock) -> MemoryDatabase:
    """Fresh in-memory store for each test."""
    return MemoryDatabase(clock)


@pytest.fixture
def token_codec(clock):
    from resume_matcher_api.core import TokenCodec

    return TokenCodec(TEST_SECRET, clock=clock)


@pytest.fixture
def session_manager(store, token_codec, clock):
    from resume_matcher_api.core import SessionManager

    return SessionManager(store, token_codec, clock=clock)


@pytest.fixture
def rate_limiter(store, clock):
    from resume_matcher_api.core import RateLimiter

    return RateLimiter(store, max_queries=5, clock=clock)


@pytest.fixture
def analysis_result() -> AnalysisResult:
    return AnalysisResult(
        match_percentage=82,
        overall_assessment="Strong backend profile with minor gaps.",
        strengths=["Python", "PostgreSQL"],
        weaknesses=["No Kubernetes experience"],
        missing_keywords=["Kubernetes"],
        recommendations=["Add a deployment project"],
        ats_score=75,
    )


@pytest.fixture
def mock_analyzer(analysis_result):
    """Analyzer double that never calls Gemini."""
    analyzer = Mock()
    analyzer.analyze = AsyncMock(return_value=analysis_result)
    return analyzer


@pytest_asyncio.fixture(scope="function")
async def client(store, clock, mock_analyzer):
    """Create test client with storage, clock and analyzer overridden."""
    from resume_matcher_api.dependencies import get_analyzer, get_clock
    from resume_matcher_api.main import create_app
    from resume_matcher_api.storage import get_db

    test_app = create_app()
    test_app.dependency_overrides[get_db] = lambda: store
    test_app.dependency_overrides[get_clock] = lambda: clock
    test_app.dependency_overrides[get_analyzer] = lambda: mock_analyzer

    try:
        async with AsyncClient(
            transport=ASGITransport(app=test_app),
            base_url="http://test",
            timeout=5.0,
        ) as test_client:
            yield test_client
    finally:
        test_app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Helper that registers a user through the API and returns the response body."""

    async def _signup(
        username: str = "janedoe",
        email: str = "jane@example.com",
        password: str = STRONG_PASSWORD,
    ) -> dict[str, Any]:
        response = await client.post(
            "/auth/signup",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _signup


@pytest_asyncio.fixture
async def auth_headers(signup) -> dict[str, str]:
    """Authorization header for a freshly signed-up user."""
    data = await signup()
    return {"Authorization": f"Bearer {data['token']}"}
