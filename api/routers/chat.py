# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: chat.py
# -----------------------------------------------------------------------------
import logging
import time
import uuid
from typing import List, Sequence

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_activity_service, get_answer_service, get_review_service
from api.schemas.chat import (
    Correction,
    QuestionRequest,
    QuestionResponse,
    ReviewRequest,
    ReviewResponse,
    SourceReference,
)
from services.KBActivityService import KBActivityService
from services.KBAnswerService import KBAnswerService
from services.KBReviewService import KBReviewService
from source.KBActivity import ChatMode
from source.KBSearchFilters import KBSearchFilters
from source.KBSearchMatch import KBSearchMatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

TRY_AGAIN_DETAIL = "Something went wrong while generating a response. Please try again."


def _to_references(matches: Sequence[KBSearchMatch]) -> List[SourceReference]:
    return [SourceReference(id=m.id, title=m.title, relevance_score=m.similarity) for m in matches]


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


@router.post("/question", response_model=QuestionResponse)
def post_question(
        req: QuestionRequest,
        svc: KBAnswerService = Depends(get_answer_service),
        activity: KBActivityService = Depends(get_activity_service),
) -> QuestionResponse:
    started = time.perf_counter()
    question = (req.message or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="message must not be empty")

    logger.info(
        "POST /chat/question (start) session=%s question_len=%d history=%d",
        req.session_id, len(question), len(req.history),
    )

    filters = KBSearchFilters(
        phase=req.filters.phase if req.filters else None,
        company=req.filters.company if req.filters else None,
    )

    try:
        out = svc.answer_question(
            question,
            history=[turn.model_dump() for turn in req.history],
            filters=filters,
            session_id=req.session_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("post_question failed session=%s: %s", req.session_id, e)
        raise HTTPException(status_code=500, detail=TRY_AGAIN_DETAIL)

    message_id = str(uuid.uuid4())
    activity.record_exchange(
        session_id=req.session_id,
        mode=ChatMode.QUESTION,
        question=question,
        answer=out.answer,
        source_ids=[m.id for m in out.sources],
        response_time_ms=_elapsed_ms(started),
        message_id=message_id,
    )

    logger.info(
        "POST /chat/question (done) session=%s has_answer=%s sources=%d",
        req.session_id, out.has_answer, len(out.sources),
    )

    return QuestionResponse(
        message_id=message_id,
        answer=out.answer,
        sources=_to_references(out.sources),
        has_answer=out.has_answer,
    )


@router.post("/review", response_model=ReviewResponse)
def post_review(
        req: ReviewRequest,
        svc: KBReviewService = Depends(get_review_service),
        activity: KBActivityService = Depends(get_activity_service),
) -> ReviewResponse:
    started = time.perf_counter()
    if not req.text.strip():
        raise HTTPException(status_code=400, detail="text must not be empty")

    logger.info("POST /chat/review (start) session=%s text_len=%d", req.session_id, len(req.text))

    try:
        out = svc.review_text(req.text, session_id=req.session_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("post_review failed session=%s: %s", req.session_id, e)
        raise HTTPException(status_code=500, detail=TRY_AGAIN_DETAIL)

    message_id = str(uuid.uuid4())
    activity.record_exchange(
        session_id=req.session_id,
        mode=ChatMode.REVIEW,
        question=req.text,
        answer=out.revised_text,
        source_ids=[m.id for m in out.sources],
        response_time_ms=_elapsed_ms(started),
        message_id=message_id,
    )

    logger.info(
        "POST /chat/review (done) session=%s corrections=%d sources=%d",
        req.session_id, len(out.corrections), len(out.sources),
    )

    return ReviewResponse(
        message_id=message_id,
        original_text=out.original_text,
        revised_text=out.revised_text,
        corrections=[Correction(**c.to_dict()) for c in out.corrections],
        sources=_to_references(out.sources),
    )
