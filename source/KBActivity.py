# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: KBActivity
# -----------------------------------------------------------------------------
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from source.KBSource import utc_now

FEEDBACK_RATINGS = (1, -1)
MAX_FEEDBACK_COMMENT_CHARS = 1000


class ChatMode(str, Enum):
    QUESTION = "question"
    REVIEW = "review"


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"


@dataclass
class KBChatLog:
    """
    One answered exchange. For review mode `question` is the submitted text
    and `answer` the revised text.
    """

    session_id: str
    mode: ChatMode
    question: str
    answer: str
    source_ids: List[str] = field(default_factory=list)
    response_time_ms: Optional[int] = None
    message_id: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.mode = ChatMode(self.mode)
        self.source_ids = list(self.source_ids or [])

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["mode"] = self.mode.value
        return out


@dataclass
class KBFeedback:
    """User rating (+1 / -1) and/or comment on one answered message."""

    session_id: str
    message_id: str
    question: str
    answer: str
    rating: Optional[int] = None
    comment: Optional[str] = None
    source_ids: List[str] = field(default_factory=list)
    status: FeedbackStatus = FeedbackStatus.PENDING
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.session_id or not self.message_id:
            raise ValueError("session_id and message_id are required")
        if self.rating is not None and self.rating not in FEEDBACK_RATINGS:
            raise ValueError(f"rating must be 1 or -1, got {self.rating!r}")
        if self.comment is not None and len(self.comment) > MAX_FEEDBACK_COMMENT_CHARS:
            raise ValueError(f"comment must be at most {MAX_FEEDBACK_COMMENT_CHARS} characters")
        # empty comment means no comment
        self.comment = self.comment or None
        self.status = FeedbackStatus(self.status)
        self.source_ids = list(self.source_ids or [])

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["status"] = self.status.value
        return out
