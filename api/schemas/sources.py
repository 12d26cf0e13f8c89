# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: api/schemas/sources.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class SourceCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    metadata: Optional[Dict[str, Any]] = None
    source_type: Literal["manual", "slack"] = "manual"


class SourceUpdateRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


class SourceInfo(BaseModel):
    id: str
    title: str
    content: str
    source_type: str
    metadata: Optional[Dict[str, Any]] = None
    is_active: bool
    has_embedding: bool
    created_at: datetime
    updated_at: datetime


class ListSourcesResponse(BaseModel):
    data: List[SourceInfo]
    total: int
    page: int
    limit: int
    total_pages: int
