"""User feedback endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ..middleware import get_current_user_id
from ..models import FeedbackInfo, FeedbackListResponse, FeedbackRequest, FeedbackResponse
from ..storage import Database, get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


def _feedback_info(row: dict[str, Any]) -> FeedbackInfo:
    return FeedbackInfo(
        id=row["feedback_id"],
        rating=row["rating"],
        category=row["category"],
        message=row["message"],
        created_at=row["created_at"],
    )


@router.post("", response_model=FeedbackResponse)
async def submit_feedback(
    body: FeedbackRequest,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> FeedbackResponse:
    """Submit feedback (rating 1-5, category, 10-2000 character message)."""
    try:
        row = await db.create_feedback(user_id, body.rating, body.category, body.message)
        return FeedbackResponse(
            message="Feedback submitted successfully",
            feedback=_feedback_info(row),
        )
    except Exception as e:
        logger.error(f"Feedback submission error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=FeedbackListResponse)
async def list_feedback(
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> FeedbackListResponse:
    """List the caller's feedback, newest first."""
    try:
        rows = await db.list_feedback(user_id)
        return FeedbackListResponse(feedbacks=[_feedback_info(row) for row in rows])
    except Exception as e:
        logger.error(f"Get feedback error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
