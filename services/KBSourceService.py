# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: KBSourceService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from source.KBSource import KBSource, KBSourceMetadata, SourceType, utc_now
from store.KBSourceStore import KBSourceStore, SourceNotFoundError
from utility.logging_utils import get_class_logger


class KBSourceService:
    """
    Owns the source write path:
      - register: embed content synchronously, then insert
      - update: re-embed only when the content actually changes
      - deactivate: logical delete (is_active=False); nothing is physically removed
    """

    def __init__(
        self,
        *,
        store: KBSourceStore,
        embedder: Any,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.logger = logger or get_class_logger(self.__class__)

    def embed(self, text: str) -> np.ndarray:
        return self.embedder.embed(text)

    @staticmethod
    def _require_text(name: str, value: Optional[str]) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError(f"{name} must not be empty")
        return value

    def register_source(
        self,
        title: str,
        content: str,
        *,
        metadata: Optional[Dict[str, Any]] = None,
        source_type: SourceType | str = SourceType.MANUAL,
    ) -> KBSource:
        title = self._require_text("title", title)
        content = self._require_text("content", content)

        self.logger.info("register_source: title='%s' content_chars=%d (start)", title[:80], len(content))
        embedding = self.embed(content)

        source = KBSource(
            title=title,
            content=content,
            embedding=embedding,
            metadata=KBSourceMetadata.from_dict(metadata),
            source_type=SourceType(source_type),
        )
        stored = self.store.insert(source)
        self.logger.info("register_source: id=%s dim=%d (done)", stored.id, len(embedding))
        return stored

    def get_source(self, source_id: str) -> KBSource:
        source = self.store.get(source_id)
        if source is None:
            raise SourceNotFoundError(source_id)
        return source

    def update_source(
        self,
        source_id: str,
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
        is_active: Optional[bool] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> KBSource:
        existing = self.get_source(source_id)
        changes: Dict[str, Any] = {}

        if title is not None:
            changes["title"] = self._require_text("title", title)

        if content is not None:
            content = self._require_text("content", content)
            if content != existing.content:
                changes["content"] = content
                changes["embedding"] = self.embed(content)

        if is_active is not None:
            changes["is_active"] = bool(is_active)

        if metadata is not None:
            changes["metadata"] = KBSourceMetadata.from_dict(metadata)

        if not changes:
            self.logger.info("update_source: id=%s nothing to change", source_id)
            return existing

        updated = dataclasses.replace(existing, updated_at=utc_now(), **changes)
        stored = self.store.update(updated)
        self.logger.info(
            "update_source: id=%s fields=%s re_embedded=%s (done)",
            source_id,
            sorted(k for k in changes if k != "embedding"),
            "embedding" in changes,
        )
        return stored

    def deactivate_source(self, source_id: str) -> KBSource:
        return self.update_source(source_id, is_active=False)

    def list_sources(
        self,
        *,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[KBSource], int]:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")

        items = self.store.list_all()
        if is_active is not None:
            items = [s for s in items if s.is_active == is_active]

        needle = (search or "").strip().lower()
        if needle:
            items = [s for s in items if needle in s.title.lower() or needle in s.content.lower()]

        # newest first
        items.sort(key=lambda s: s.created_at, reverse=True)
        total = len(items)
        start = (page - 1) * limit
        return items[start:start + limit], total
