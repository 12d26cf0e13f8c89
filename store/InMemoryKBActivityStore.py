# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: InMemoryKBActivityStore
# -----------------------------------------------------------------------------
import copy
import threading
from typing import List, Optional

from source.KBActivity import KBChatLog, KBFeedback
from store.KBActivityStore import KBActivityStore
from utility.logging_utils import get_class_logger


class InMemoryKBActivityStore(KBActivityStore):
    """List-backed chat log / feedback store for local dev and tests."""

    def __init__(self, logger=None) -> None:
        self._chat_logs: List[KBChatLog] = []
        self._feedback: List[KBFeedback] = []
        self._lock = threading.Lock()
        self.logger = logger or get_class_logger(self.__class__)

    def add_chat_log(self, log: KBChatLog) -> KBChatLog:
        with self._lock:
            self._chat_logs.append(copy.deepcopy(log))
        self.logger.debug("chat log %s stored (session=%s mode=%s)", log.id, log.session_id, log.mode.value)
        return copy.deepcopy(log)

    def list_chat_logs(self, session_id: Optional[str] = None) -> List[KBChatLog]:
        with self._lock:
            return [copy.deepcopy(x) for x in self._chat_logs if session_id is None or x.session_id == session_id]

    def add_feedback(self, feedback: KBFeedback) -> KBFeedback:
        with self._lock:
            self._feedback.append(copy.deepcopy(feedback))
        self.logger.debug("feedback %s stored (message=%s)", feedback.id, feedback.message_id)
        return copy.deepcopy(feedback)

    def list_feedback(self, message_id: Optional[str] = None) -> List[KBFeedback]:
        with self._lock:
            return [copy.deepcopy(x) for x in self._feedback if message_id is None or x.message_id == message_id]
