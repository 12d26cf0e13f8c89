# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: api/schemas/feedback.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    message_id: str = Field(..., min_length=1)
    rating: Optional[Literal[1, -1]] = None
    comment: Optional[str] = Field(None, max_length=1000)
    question: str
    answer: str
    source_ids: List[str] = Field(default_factory=list)


class FeedbackInfo(BaseModel):
    id: str
    session_id: str
    message_id: str
    rating: Optional[int] = None
    comment: Optional[str] = None
    question: str
    answer: str
    source_ids: List[str] = Field(default_factory=list)
    status: str
    created_at: datetime


class FeedbackResponse(BaseModel):
    success: bool
    data: FeedbackInfo
