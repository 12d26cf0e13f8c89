# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: InMemoryKBSourceStore
# -----------------------------------------------------------------------------
import copy
import threading
from typing import Any, Dict, List, Optional, Sequence

from embedding.vector_codec import decode_vector
from source.KBSearchFilters import KBSearchFilters
from source.KBSource import KBSource
from store.KBSourceStore import KBSourceStore, SourceNotFoundError, content_matches_keywords
from utility.logging_utils import get_class_logger


class InMemoryKBSourceStore(KBSourceStore):
    """
    Dict-backed source store (insertion ordered). Used for local dev and tests.
    Embeddings may be handed in as arrays, lists or JSON text; they are decoded
    on the way in so readers always get numeric arrays (or None if corrupt).
    """

    def __init__(self, logger=None) -> None:
        self._sources: Dict[str, KBSource] = {}
        self._lock = threading.Lock()
        self.logger = logger or get_class_logger(self.__class__)

    @staticmethod
    def _normalise(source: KBSource) -> KBSource:
        stored = copy.deepcopy(source)
        raw_embedding: Any = stored.embedding
        stored.embedding = decode_vector(raw_embedding)
        return stored

    def insert(self, source: KBSource) -> KBSource:
        with self._lock:
            if source.id in self._sources:
                raise ValueError(f"Source id already exists: {source.id}")
            self._sources[source.id] = self._normalise(source)
            stored = self._sources[source.id]
        self.logger.info("Inserted source %s", stored.short_preview())
        return copy.deepcopy(stored)

    def update(self, source: KBSource) -> KBSource:
        with self._lock:
            if source.id not in self._sources:
                raise SourceNotFoundError(source.id)
            self._sources[source.id] = self._normalise(source)
            stored = self._sources[source.id]
        self.logger.info("Updated source %s (active=%s)", stored.id, stored.is_active)
        return copy.deepcopy(stored)

    def get(self, source_id: str) -> Optional[KBSource]:
        with self._lock:
            found = self._sources.get(source_id)
        return copy.deepcopy(found) if found is not None else None

    def list_all(self) -> List[KBSource]:
        with self._lock:
            return [copy.deepcopy(s) for s in self._sources.values()]

    def fetch_candidates(self, filters: Optional[KBSearchFilters] = None) -> List[KBSource]:
        filters = filters or KBSearchFilters()
        with self._lock:
            out = [
                copy.deepcopy(s)
                for s in self._sources.values()
                if s.is_retrievable() and filters.matches(s.metadata)
            ]
        self.logger.debug("fetch_candidates: %d candidates (filters=%s)", len(out), filters.to_dict())
        return out

    def find_by_keywords(
            self,
            keywords: Sequence[str],
            limit: int,
            filters: Optional[KBSearchFilters] = None,
    ) -> List[KBSource]:
        if not keywords or limit <= 0:
            return []
        filters = filters or KBSearchFilters()
        out: List[KBSource] = []
        with self._lock:
            for s in self._sources.values():
                if s.is_active and filters.matches(s.metadata) and content_matches_keywords(s.content, keywords):
                    out.append(copy.deepcopy(s))
                    if len(out) >= limit:
                        break
        return out
