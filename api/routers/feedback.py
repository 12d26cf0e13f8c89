# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: feedback.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_activity_service
from api.schemas.feedback import FeedbackInfo, FeedbackRequest, FeedbackResponse
from services.KBActivityService import KBActivityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackResponse)
def post_feedback(
        req: FeedbackRequest,
        svc: KBActivityService = Depends(get_activity_service),
) -> FeedbackResponse:
    logger.info("POST /feedback (start) session=%s message=%s rating=%s", req.session_id, req.message_id, req.rating)
    try:
        fb = svc.submit_feedback(
            session_id=req.session_id,
            message_id=req.message_id,
            question=req.question,
            answer=req.answer,
            rating=req.rating,
            comment=req.comment,
            source_ids=req.source_ids,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("POST /feedback -> 500: %s", e)
        raise HTTPException(status_code=500, detail=f"submit_feedback failed: {e}")

    return FeedbackResponse(
        success=True,
        data=FeedbackInfo(
            id=fb.id,
            session_id=fb.session_id,
            message_id=fb.message_id,
            rating=fb.rating,
            comment=fb.comment,
            question=fb.question,
            answer=fb.answer,
            source_ids=fb.source_ids,
            status=fb.status.value,
            created_at=fb.created_at,
        ),
    )
