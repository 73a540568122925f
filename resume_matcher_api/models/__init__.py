"""Data models for the Resume Matcher service."""

from .analysis import AnalysisResult, BulletPointImprovement, LearningResource, ModelInfo
from .rate_limit import RateLimitStatus
from .requests import AnalyzeRequest, FeedbackRequest, LoginRequest, SignupRequest
from .responses import (
    AnalysisListResponse,
    AnalysisSummary,
    AnalyzeResponse,
    AuthResponse,
    FeedbackInfo,
    FeedbackListResponse,
    FeedbackResponse,
    HealthResponse,
    MeResponse,
    MessageResponse,
    ModelListResponse,
    ResumeInfo,
    ResumeListResponse,
    UploadedFileInfo,
    UploadResponse,
    VersionResponse,
)
from .session import IssuedSession, SessionIdentity, SessionRecord, SessionState
from .user import UserProfile, UserPublic

__all__ = [
    # Domain models
    "AnalysisResult",
    "BulletPointImprovement",
    "LearningResource",
    "ModelInfo",
    "RateLimitStatus",
    "IssuedSession",
    "SessionIdentity",
    "SessionRecord",
    "SessionState",
    "UserProfile",
    "UserPublic",
    # Request models
    "SignupRequest",
    "LoginRequest",
    "AnalyzeRequest",
    "FeedbackRequest",
    # Response models
    "MessageResponse",
    "AuthResponse",
    "MeResponse",
    "AnalyzeResponse",
    "AnalysisSummary",
    "AnalysisListResponse",
    "ModelListResponse",
    "UploadedFileInfo",
    "UploadResponse",
    "ResumeInfo",
    "ResumeListResponse",
    "FeedbackInfo",
    "FeedbackResponse",
    "FeedbackListResponse",
    "HealthResponse",
    "VersionResponse",
]
