# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: KBActivityService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from source.KBActivity import ChatMode, KBChatLog, KBFeedback
from store.KBActivityStore import KBActivityStore
from utility.logging_utils import get_class_logger


@dataclass
class KBActivityService:
    """
    Records what users asked and how they rated it:
        - record_exchange: one chat log per answered question / review
        - submit_feedback: rating (+1 / -1) and optional comment on a message
    A chat log that cannot be written is logged and dropped; the user already has the answer.
    """
    store: KBActivityStore
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def record_exchange(
            self,
            *,
            session_id: str,
            mode: ChatMode | str,
            question: str,
            answer: str,
            source_ids: Sequence[str] = (),
            response_time_ms: Optional[int] = None,
            message_id: Optional[str] = None,
    ) -> Optional[KBChatLog]:
        log = KBChatLog(
            session_id=session_id,
            mode=ChatMode(mode),
            question=question,
            answer=answer,
            source_ids=list(source_ids),
            response_time_ms=response_time_ms,
            message_id=message_id,
        )
        try:
            stored = self.store.add_chat_log(log)
        except Exception as e:
            self.logger.error("record_exchange: chat log not stored (session=%s): %s", session_id, e, exc_info=True)
            return None

        self.logger.info(
            "record_exchange: session=%s mode=%s sources=%d time_ms=%s",
            session_id, log.mode.value, len(log.source_ids), response_time_ms,
        )
        return stored

    def submit_feedback(
            self,
            *,
            session_id: str,
            message_id: str,
            question: str,
            answer: str,
            rating: Optional[int] = None,
            comment: Optional[str] = None,
            source_ids: Sequence[str] = (),
    ) -> KBFeedback:
        # KBFeedback validates rating / comment and raises ValueError
        feedback = KBFeedback(
            session_id=session_id,
            message_id=message_id,
            question=question,
            answer=answer,
            rating=rating,
            comment=comment,
            source_ids=list(source_ids),
        )
        stored = self.store.add_feedback(feedback)
        self.logger.info(
            "submit_feedback: session=%s message=%s rating=%s has_comment=%s",
            session_id, message_id, rating, feedback.comment is not None,
        )
        return stored

    def list_chat_logs(self, session_id: Optional[str] = None) -> List[KBChatLog]:
        return self.store.list_chat_logs(session_id)

    def list_feedback(self, message_id: Optional[str] = None) -> List[KBFeedback]:
        return self.store.list_feedback(message_id)
