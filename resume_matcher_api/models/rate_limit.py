"""Rate limit status model."""

from datetime import datetime

from pydantic import BaseModel, Field


class RateLimitStatus(BaseModel):
    """Quota state of one user in the rolling window. Derived, never stored."""

    allowed: bool
    remaining: int = Field(..., ge=0)
    used: int = Field(..., ge=0)
    reset_at: datetime = Field(
        ..., description="When the oldest in-window query stops counting"
    )
