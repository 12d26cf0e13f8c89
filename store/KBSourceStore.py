# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: KBSourceStore
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, List, Optional, runtime_checkable

from source.KBSearchFilters import KBSearchFilters
from source.KBSource import KBSource


class SourceNotFoundError(KeyError):
    """Raised when a source id is unknown to the store."""

    def __init__(self, source_id: str):
        super().__init__(source_id)
        self.source_id = source_id

    def __str__(self) -> str:
        return f"Source not found: {self.source_id}"


def content_matches_keywords(content: str, keywords: Sequence[str]) -> bool:
    """Case-insensitive 'contains any keyword' test used by keyword search."""
    haystack = (content or "").lower()
    return any(k.lower() in haystack for k in keywords)


@runtime_checkable
class KBSourceStore(Protocol):
    def insert(self, source: KBSource) -> KBSource:
        ...

    def update(self, source: KBSource) -> KBSource:
        ...

    def get(self, source_id: str) -> Optional[KBSource]:
        ...

    def list_all(self) -> List[KBSource]:
        ...

    def fetch_candidates(self, filters: Optional[KBSearchFilters] = None) -> List[KBSource]:
        """Active sources with an embedding that match the filters, in store order."""
        ...

    def find_by_keywords(
            self,
            keywords: Sequence[str],
            limit: int,
            filters: Optional[KBSearchFilters] = None,
    ) -> List[KBSource]:
        """Up to `limit` active, filter-matching sources whose content contains any keyword."""
        ...
