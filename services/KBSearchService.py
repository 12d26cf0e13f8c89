# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: KBSearchService
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

import settings
from source.KBSearchFilters import KBSearchFilters
from source.KBSearchMatch import KBSearchMatch
from source.KBSource import KBSource
from store.KBSourceStore import KBSourceStore
from utility.logging_utils import get_class_logger


def cosine_similarity(query: np.ndarray, vec: Optional[np.ndarray]) -> float:
    """
    dot(q, v) / (|q| * |v|). Missing, wrong-dimension or zero-norm vectors score 0.0.
    """
    if vec is None or vec.shape != query.shape:
        return 0.0
    denom = float(np.linalg.norm(query)) * float(np.linalg.norm(vec))
    if denom == 0.0:
        return 0.0
    return float(np.dot(query, vec) / denom)


def keyword_tokens(query_text: str) -> List[str]:
    """Whitespace tokens longer than one character."""
    return [t for t in (query_text or "").split() if len(t) > 1]


@dataclass
class KBSearchService:
    """
    Similarity search over registered sources:
        - embeds the query text
        - fetches active, embedded, filter-matching candidates from the store
        - scores each by cosine similarity (flat scan)
        - thresholds, sorts (descending, stable), caps
    Any failure on the semantic path degrades to a keyword search that never raises.
    """
    embedder: Any  # KBEmbedder or anything with embed(text) -> np.ndarray
    store: KBSourceStore
    default_threshold: float = settings.QUESTION_DEFAULTS["threshold"]
    default_max_results: int = settings.QUESTION_DEFAULTS["max_results"]
    fallback_similarity: float = settings.KEYWORD_FALLBACK_SIMILARITY
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def embed(self, text: str) -> np.ndarray:
        return self.embedder.embed(text)

    def search(
            self,
            query_text: str,
            *,
            threshold: Optional[float] = None,
            max_results: Optional[int] = None,
            filters: Optional[KBSearchFilters] = None,
    ) -> List[KBSearchMatch]:
        threshold = self.default_threshold if threshold is None else threshold
        max_results = self.default_max_results if max_results is None else max_results
        filters = filters or KBSearchFilters()

        self.logger.info(
            "search: query='%s' threshold=%.2f max_results=%d filters=%s (start)",
            (query_text or "")[:120],
            threshold,
            max_results,
            filters.to_dict(),
        )

        try:
            matches = self._vector_search(query_text, threshold, max_results, filters)
        except Exception as e:
            self.logger.warning("search: vector search failed, using keyword fallback: %s", e, exc_info=True)
            return self._keyword_fallback(query_text, max_results, filters)

        self.logger.info("search: %d matches (done)", len(matches))
        return matches

    def _vector_search(
            self,
            query_text: str,
            threshold: float,
            max_results: int,
            filters: KBSearchFilters,
    ) -> List[KBSearchMatch]:
        query_vec = np.asarray(self.embedder.embed(query_text), dtype=np.float32)
        if query_vec.ndim != 1 or query_vec.size == 0:
            raise ValueError(f"query embedding must be a non-empty 1-D vector, got shape {query_vec.shape}")

        candidates: Sequence[KBSource] = self.store.fetch_candidates(filters)
        self.logger.debug("search: scoring %d candidates (dim=%d)", len(candidates), query_vec.shape[0])

        scored: List[KBSearchMatch] = []
        skipped = 0
        for source in candidates:
            vec = source.embedding
            if vec is None or vec.shape != query_vec.shape:
                skipped += 1
                continue
            similarity = cosine_similarity(query_vec, vec)
            if similarity >= threshold:
                scored.append(KBSearchMatch(
                    id=source.id,
                    title=source.title,
                    content=source.content,
                    similarity=similarity,
                ))

        if skipped:
            self.logger.warning("search: skipped %d candidates with missing/mismatched embeddings", skipped)

        # list.sort is stable: ties keep fetch order
        scored.sort(key=lambda m: m.similarity, reverse=True)
        return scored[:max_results]

    def _keyword_fallback(
            self,
            query_text: str,
            max_results: int,
            filters: KBSearchFilters,
    ) -> List[KBSearchMatch]:
        tokens = keyword_tokens(query_text)
        if not tokens or max_results <= 0:
            self.logger.info("search fallback: no usable keywords, returning no matches")
            return []

        try:
            sources = self.store.find_by_keywords(tokens, max_results, filters=filters)
        except Exception as e:
            self.logger.error("search fallback: keyword search failed: %s", e, exc_info=True)
            return []

        matches = [
            KBSearchMatch(id=s.id, title=s.title, content=s.content, similarity=self.fallback_similarity)
            for s in sources[:max_results]
        ]
        self.logger.info("search fallback: %d keyword matches (tokens=%d)", len(matches), len(tokens))
        return matches
