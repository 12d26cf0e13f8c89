# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: KBActivityStore
# -----------------------------------------------------------------------------

from typing import Protocol, List, Optional, runtime_checkable

from source.KBActivity import KBChatLog, KBFeedback


@runtime_checkable
class KBActivityStore(Protocol):
    """Append-only record of chat exchanges and the feedback given on them."""

    def add_chat_log(self, log: KBChatLog) -> KBChatLog:
        ...

    def list_chat_logs(self, session_id: Optional[str] = None) -> List[KBChatLog]:
        """Oldest first."""
        ...

    def add_feedback(self, feedback: KBFeedback) -> KBFeedback:
        ...

    def list_feedback(self, message_id: Optional[str] = None) -> List[KBFeedback]:
        """Oldest first."""
        ...
