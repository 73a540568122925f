"""Analysis result models."""

from pydantic import BaseModel, Field


class BulletPointImprovement(BaseModel):
    """A rewritten resume bullet."""

    original: str
    improved: str
    reason: str = ""


class LearningResource(BaseModel):
    """A course, book, certification or tool that closes a gap."""

    title: str
    type: str = ""
    description: str = ""


class AnalysisResult(BaseModel):
    """Structured match analysis produced by the AI model."""

    match_percentage: int = Field(default=0, ge=0, le=100)
    overall_assessment: str = ""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    bullet_point_improvements: list[BulletPointImprovement] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)
    bottlenecks: list[str] = Field(default_factory=list)
    ats_score: int = Field(default=0, ge=0, le=100)
    format_suggestions: list[str] = Field(default_factory=list)


class ModelInfo(BaseModel):
    """An AI model the analyze endpoint accepts."""

    id: str
    name: str
    description: str
