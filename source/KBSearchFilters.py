# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: KBSearchFilters
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Optional, Dict, Any

from source.KBSource import KBSourceMetadata


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class KBSearchFilters:
    """
    Categorical filters applied to candidate sources.

    phase:   exact match on metadata phase
    company: case-insensitive substring match on metadata company
             (company names are free text, e.g. "Acme" matches "Acme Corp")
    """

    phase: Optional[str] = None
    company: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "phase", _clean(self.phase))
        object.__setattr__(self, "company", _clean(self.company))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "KBSearchFilters":
        data = data or {}
        return cls(phase=data.get("phase"), company=data.get("company"))

    @property
    def is_empty(self) -> bool:
        return self.phase is None and self.company is None

    def matches(self, metadata: Optional[KBSourceMetadata]) -> bool:
        if self.is_empty:
            return True
        if metadata is None:
            return False
        if self.phase is not None and metadata.phase != self.phase:
            return False
        if self.company is not None:
            company = metadata.company or ""
            if self.company.lower() not in company.lower():
                return False
        return True

    def to_dict(self) -> Dict[str, str]:
        return {k: v for k, v in (("phase", self.phase), ("company", self.company)) if v is not None}
