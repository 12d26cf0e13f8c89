# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: sources.py
# -----------------------------------------------------------------------------
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_source_service
from api.schemas.sources import (
    ListSourcesResponse,
    SourceCreateRequest,
    SourceInfo,
    SourceUpdateRequest,
)
from services.KBSourceService import KBSourceService
from source.KBSource import KBSource
from store.KBSourceStore import SourceNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sources", tags=["sources"])


def _to_info(s: KBSource) -> SourceInfo:
    return SourceInfo(
        id=s.id,
        title=s.title,
        content=s.content,
        source_type=s.source_type.value,
        metadata=s.metadata.to_dict() if s.metadata is not None else None,
        is_active=s.is_active,
        has_embedding=s.has_embedding,
        created_at=s.created_at,
        updated_at=s.updated_at,
    )


@router.get("", response_model=ListSourcesResponse)
def list_sources(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        svc: KBSourceService = Depends(get_source_service),
) -> ListSourcesResponse:
    logger.info("GET /sources (start) page=%d limit=%d search=%r is_active=%s", page, limit, search, is_active)
    try:
        items, total = svc.list_sources(page=page, limit=limit, search=search, is_active=is_active)
    except Exception as e:
        logger.exception("GET /sources -> 500: %s", e)
        raise HTTPException(status_code=500, detail=f"list_sources failed: {e}")

    return ListSourcesResponse(
        data=[_to_info(s) for s in items],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if total else 0,
    )


@router.post("", response_model=SourceInfo, status_code=201)
def create_source(
        req: SourceCreateRequest,
        svc: KBSourceService = Depends(get_source_service),
) -> SourceInfo:
    logger.info("POST /sources (start) title='%s'", req.title[:80])
    try:
        created = svc.register_source(
            req.title,
            req.content,
            metadata=req.metadata,
            source_type=req.source_type,
        )
    except ValueError as e:
        logger.warning("POST /sources -> 400: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("POST /sources -> 500: %s", e)
        raise HTTPException(status_code=500, detail=f"register_source failed: {e}")

    logger.info("POST /sources (done) id=%s", created.id)
    return _to_info(created)


@router.get("/{source_id}", response_model=SourceInfo)
def get_source(
        source_id: str,
        svc: KBSourceService = Depends(get_source_service),
) -> SourceInfo:
    try:
        return _to_info(svc.get_source(source_id))
    except SourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{source_id}", response_model=SourceInfo)
def update_source(
        source_id: str,
        req: SourceUpdateRequest,
        svc: KBSourceService = Depends(get_source_service),
) -> SourceInfo:
    logger.info("PATCH /sources/%s (start)", source_id)
    try:
        updated = svc.update_source(
            source_id,
            title=req.title,
            content=req.content,
            is_active=req.is_active,
            metadata=req.metadata,
        )
    except SourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("PATCH /sources/%s -> 500: %s", source_id, e)
        raise HTTPException(status_code=500, detail=f"update_source failed: {e}")

    return _to_info(updated)


@router.delete("/{source_id}", response_model=SourceInfo)
def delete_source(
        source_id: str,
        svc: KBSourceService = Depends(get_source_service),
) -> SourceInfo:
    # logical delete: the record stays, it just stops being retrievable
    logger.info("DELETE /sources/%s (start)", source_id)
    try:
        return _to_info(svc.deactivate_source(source_id))
    except SourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
