# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: api/schemas/chat.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class QuestionFilters(BaseModel):
    phase: Optional[str] = None
    company: Optional[str] = None


class QuestionRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    history: List[ChatTurn] = Field(default_factory=list)
    filters: Optional[QuestionFilters] = None


class SourceReference(BaseModel):
    id: str
    title: str
    relevance_score: Optional[float] = None


class QuestionResponse(BaseModel):
    message_id: str
    answer: str
    sources: List[SourceReference] = Field(default_factory=list)
    has_answer: bool


class ReviewRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class Correction(BaseModel):
    type: str
    original: str = ""
    revised: str = ""
    reason: str = ""


class ReviewResponse(BaseModel):
    message_id: str
    original_text: str
    revised_text: str
    corrections: List[Correction] = Field(default_factory=list)
    sources: List[SourceReference] = Field(default_factory=list)
