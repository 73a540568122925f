"""Response models for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from .analysis import AnalysisResult, ModelInfo
from .rate_limit import RateLimitStatus
from .user import UserProfile, UserPublic


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class AuthResponse(BaseModel):
    """Response for signup and login."""

    message: str
    user: UserPublic
    token: str


class MeResponse(BaseModel):
    """Current user plus quota state."""

    user: UserProfile
    rate_limit: RateLimitStatus


class AnalyzeResponse(BaseModel):
    """Response for a completed analysis."""

    id: str
    analysis: AnalysisResult
    model: str
    rate_limit: RateLimitStatus = Field(..., description="Quota state after this analysis")
    created_at: datetime


class AnalysisSummary(BaseModel):
    """Analysis history entry."""

    id: str
    model: str
    match_percentage: int
    job_description: str
    created_at: datetime


class AnalysisListResponse(BaseModel):
    """Response for listing analyses."""

    analyses: list[AnalysisSummary]


class ModelListResponse(BaseModel):
    """Available AI models."""

    models: list[ModelInfo]


class UploadedFileInfo(BaseModel):
    """One stored upload."""

    id: str
    file_name: str
    file_type: str
    file_size: int
    has_extracted_text: bool


class UploadResponse(BaseModel):
    """Response for a file upload."""

    message: str
    files: list[UploadedFileInfo]
    extracted_text: str | None = None


class ResumeInfo(BaseModel):
    """Resume listing entry."""

    id: str
    file_name: str
    file_type: str
    file_size: int
    created_at: datetime


class ResumeListResponse(BaseModel):
    """Response for listing resumes."""

    resumes: list[ResumeInfo]


class FeedbackInfo(BaseModel):
    """Stored feedback entry."""

    id: str
    rating: int
    category: str
    message: str
    created_at: datetime


class FeedbackResponse(BaseModel):
    """Response for feedback submission."""

    message: str
    feedback: FeedbackInfo


class FeedbackListResponse(BaseModel):
    """Response for listing feedback."""

    feedbacks: list[FeedbackInfo]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    uptime: str
    database_connected: bool


class VersionResponse(BaseModel):
    """Version information."""

    service_version: str
