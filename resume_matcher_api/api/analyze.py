"""Resume analysis endpoints."""

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import settings
from ..core import AVAILABLE_MODELS, AnalysisError, Clock, RateLimiter, ResumeAnalyzer
from ..core.analyzer import is_supported_model
from ..dependencies import get_analyzer, get_clock, get_rate_limiter
from ..middleware import get_current_user_id
from ..models import (
    AnalysisListResponse,
    AnalysisSummary,
    AnalyzeRequest,
    AnalyzeResponse,
    ModelListResponse,
)
from ..storage import Database, get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analyze"])

DIRECT_TEXT_RESUME_ID = "direct-text"


@router.post(
    "",
    response_model=AnalyzeResponse,
    summary="Analyze a resume against a job description",
    description="""
Score a resume against a job description with the selected Gemini model.

Each user gets a fixed number of analyses in a rolling 24-hour window. A slot
frees up exactly 24 hours after the analysis that used it. When no slots are
left the request is rejected with 429, and the body carries `reset_at`.

Provide either `resume_text` or the `resume_id` of an uploaded resume.
Only successful analyses use up quota.
""",
)
async def analyze(
    body: AnalyzeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
    limiter: RateLimiter = Depends(get_rate_limiter),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    clock: Clock = Depends(get_clock),
) -> AnalyzeResponse:
    """Run one quota-gated analysis."""
    try:
        status = await limiter.check_status(user_id)
        if not status.allowed:
            logger.warning(f"Rate limit exceeded for user {user_id}")
            retry_after = max(0, math.ceil((status.reset_at - clock()).total_seconds()))
            raise HTTPException(
                status_code=429,
                detail={
                    "message": (
                        f"You have used all {limiter.max_queries} queries for the rolling "
                        f"window. Reset at: {status.reset_at.isoformat()}"
                    ),
                    "remaining": status.remaining,
                    "used": status.used,
                    "reset_at": status.reset_at.isoformat(),
                },
                headers={"Retry-After": str(retry_after)},
            )

        if not body.job_description:
            raise HTTPException(status_code=400, detail="Job description is required")

        resume_text = body.resume_text
        if body.resume_id and not resume_text:
            resume = await db.get_resume(body.resume_id, user_id)
            if resume is None:
                raise HTTPException(status_code=404, detail="Resume not found")
            if not resume["extracted_text"]:
                raise HTTPException(
                    status_code=400,
                    detail="Resume has no extracted text. Please upload a text-based resume.",
                )
            resume_text = resume["extracted_text"]

        if not resume_text:
            raise HTTPException(
                status_code=400,
                detail="Resume text is required. Either provide resume_text or resume_id.",
            )

        model = body.model or settings.default_model
        if not is_supported_model(model):
            valid = ", ".join(info.id for info in AVAILABLE_MODELS)
            raise HTTPException(status_code=400, detail=f"Invalid model. Valid options: {valid}")

        try:
            result = await analyzer.analyze(resume_text, body.job_description, model)
        except AnalysisError as e:
            logger.error(f"Analysis failed for user {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Analysis failed. Please try again.")

        # Charged only once the model has answered
        await limiter.record_query(user_id)

        record = await db.create_analysis(
            user_id=user_id,
            resume_id=body.resume_id or DIRECT_TEXT_RESUME_ID,
            job_description=body.job_description,
            model=model,
            match_percentage=result.match_percentage,
            result=result.model_dump(),
        )

        return AnalyzeResponse(
            id=record["analysis_id"],
            analysis=result,
            model=model,
            rate_limit=await limiter.check_status(user_id),
            created_at=record["created_at"],
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Analysis error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=AnalysisListResponse)
async def list_analyses(
    limit: int = Query(default=10, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> AnalysisListResponse:
    """List the caller's most recent analyses.

    Args:
        limit: Maximum number of analyses to return

    Returns:
        AnalysisListResponse: Newest first
    """
    try:
        rows = await db.list_analyses(user_id, limit=limit)
        return AnalysisListResponse(
            analyses=[
                AnalysisSummary(
                    id=row["analysis_id"],
                    model=row["model"],
                    match_percentage=row["match_percentage"],
                    job_description=row["job_description"],
                    created_at=row["created_at"],
                )
                for row in rows
            ]
        )
    except Exception as e:
        logger.error(f"Get analyses error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/models", response_model=ModelListResponse)
async def list_models() -> ModelListResponse:
    """List the AI models the analyze endpoint accepts."""
    return ModelListResponse(models=AVAILABLE_MODELS)
