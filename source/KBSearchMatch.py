# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: KBSearchMatch
# -----------------------------------------------------------------------------
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class KBSearchMatch:
    """A ranked search hit. similarity is cosine in [-1, 1] (not clamped)."""
    id: str
    title: str
    content: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
