"""Request models for API endpoints."""

from pydantic import BaseModel, Field, field_validator

FEEDBACK_CATEGORIES = ("suggestion", "bug", "feature", "other")


class SignupRequest(BaseModel):
    """Request to create an account."""

    username: str = Field(..., min_length=1, description="3-50 characters")
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Request to log in. `username` may also be the account email."""

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class AnalyzeRequest(BaseModel):
    """Request to analyze a resume against a job description.

    Fields are optional at the schema level so the quota check runs before
    input validation.
    """

    resume_id: str | None = Field(default=None, description="ID of an uploaded resume")
    resume_text: str | None = Field(default=None, description="Raw resume text")
    job_description: str | None = None
    model: str | None = Field(default=None, description="Defaults to the configured model")


class FeedbackRequest(BaseModel):
    """Request to submit product feedback."""

    rating: int = Field(..., ge=1, le=5)
    category: str
    message: str = Field(..., min_length=10, max_length=2000)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        """Validate category is one of the allowed values."""
        if v not in FEEDBACK_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(FEEDBACK_CATEGORIES)}")
        return v
