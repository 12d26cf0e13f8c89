# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: KBSource
# -----------------------------------------------------------------------------
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, List

import numpy as np


class SourceType(str, Enum):
    MANUAL = "manual"
    SLACK = "slack"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class KBSourceMetadata:
    """
    Category-like tags attached to a source. Only the recognised keys take
    part in filtering; anything else is carried through untouched in ``raw``.
    """

    poster: Optional[str] = None
    phase: Optional[str] = None
    theme: Optional[str] = None
    company: Optional[str] = None
    job_type: Optional[str] = None
    links: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    # wire key -> attribute name
    KNOWN_KEYS = {
        "poster": "poster",
        "phase": "phase",
        "theme": "theme",
        "company": "company",
        "jobType": "job_type",
        "job_type": "job_type",
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["KBSourceMetadata"]:
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValueError(f"metadata must be an object, got {type(data).__name__}")

        kwargs: Dict[str, Any] = {}
        raw: Dict[str, Any] = {}
        for key, value in data.items():
            attr = cls.KNOWN_KEYS.get(key)
            if attr is not None:
                kwargs[attr] = None if value is None else str(value)
            elif key == "links":
                if isinstance(value, (list, tuple)):
                    kwargs["links"] = [str(v) for v in value if v is not None]
                elif value:
                    kwargs["links"] = [str(value)]
            elif key == "raw" and isinstance(value, dict):
                raw.update(value)
            else:
                raw[key] = value
        return cls(raw=raw, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.raw)
        for wire_key, value in (
            ("poster", self.poster),
            ("phase", self.phase),
            ("theme", self.theme),
            ("company", self.company),
            ("jobType", self.job_type),
        ):
            if value is not None:
                out[wire_key] = value
        if self.links:
            out["links"] = list(self.links)
        return out


@dataclass
class KBSource:
    """
    A unit of registered knowledge.
    Retrievable only while active and carrying an embedding.
    """

    title: str
    content: str
    embedding: Optional[np.ndarray] = None
    metadata: Optional[KBSourceMetadata] = None
    is_active: bool = True
    source_type: SourceType = SourceType.MANUAL
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None and np.asarray(self.embedding).size > 0

    def is_retrievable(self) -> bool:
        return self.is_active and self.has_embedding

    def short_preview(self, n: int = 80) -> str:
        """Return a compact preview for logging/debugging."""
        clean = " ".join(self.content.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[{self.id[:8]} | {self.title}] {preview}"
