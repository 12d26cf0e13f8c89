# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: ChromaKBActivityStore
# -----------------------------------------------------------------------------
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import chromadb
from chromadb import ClientAPI
from chromadb.api.models.Collection import Collection

from config.Config import Config
from source.KBActivity import ChatMode, FeedbackStatus, KBChatLog, KBFeedback
from store.KBActivityStore import KBActivityStore
from utility.logging_utils import get_class_logger

# Activity records are only ever looked up by metadata; Chroma still wants a vector per record.
_PLACEHOLDER_EMBEDDING = [0.0]


def _scalars(values: Dict[str, Any]) -> Dict[str, Any]:
    """Chroma metadata holds scalars only: drop None, JSON-encode lists."""
    out: Dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = json.dumps(list(value), ensure_ascii=False)
        elif isinstance(value, datetime):
            value = value.isoformat()
        out[key] = value
    return out


@dataclass
class ChromaKBActivityStore(KBActivityStore):
    """
    Chat logs and feedback in two Chroma collections named after the source
    collection (`<name>_chat_logs`, `<name>_feedback`). Pass the source store's
    client to share one Chroma instance.
    """
    cfg: Optional[Config] = None
    client: Optional[ClientAPI] = None
    collection_prefix: str = "kb_sources"
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.cfg is not None:
            self.collection_prefix = self.cfg.chroma_collection or self.collection_prefix

        if self.client is None:
            chroma_path = getattr(self.cfg, "chroma_path", "") if self.cfg else ""
            self.client = chromadb.PersistentClient(path=chroma_path) if chroma_path else chromadb.EphemeralClient()

        self.chat_logs: Collection = self.client.get_or_create_collection(
            name=f"{self.collection_prefix}_chat_logs",
            embedding_function=None,
        )
        self.feedback: Collection = self.client.get_or_create_collection(
            name=f"{self.collection_prefix}_feedback",
            embedding_function=None,
        )
        self.logger.info("Chroma activity collections ready: '%s', '%s'", self.chat_logs.name, self.feedback.name)

    @staticmethod
    def _metadatas(res: Dict[str, Any]) -> List[Dict[str, Any]]:
        ids = res.get("ids") or []
        metadatas = res.get("metadatas")
        return [dict(metadatas[i] or {}) if metadatas is not None else {} for i in range(len(ids))]

    @staticmethod
    def _where(key: str, value: Optional[str]) -> Optional[Dict[str, Any]]:
        return {key: value} if value is not None else None

    # ------------------------------------------------------------------
    # chat logs
    # ------------------------------------------------------------------
    def add_chat_log(self, log: KBChatLog) -> KBChatLog:
        self.chat_logs.add(
            ids=[log.id],
            embeddings=[_PLACEHOLDER_EMBEDDING],
            metadatas=[_scalars(log.to_dict())],
        )
        self.logger.debug("chat log %s stored (session=%s mode=%s)", log.id, log.session_id, log.mode.value)
        return log

    def list_chat_logs(self, session_id: Optional[str] = None) -> List[KBChatLog]:
        res = self.chat_logs.get(where=self._where("session_id", session_id), include=["metadatas"])
        logs = [
            KBChatLog(
                id=md["id"],
                session_id=md["session_id"],
                mode=ChatMode(md["mode"]),
                question=md.get("question", ""),
                answer=md.get("answer", ""),
                source_ids=json.loads(md["source_ids"]) if md.get("source_ids") else [],
                response_time_ms=md.get("response_time_ms"),
                message_id=md.get("message_id"),
                created_at=datetime.fromisoformat(md["created_at"]),
            )
            for md in self._metadatas(res)
        ]
        return sorted(logs, key=lambda x: x.created_at)

    # ------------------------------------------------------------------
    # feedback
    # ------------------------------------------------------------------
    def add_feedback(self, feedback: KBFeedback) -> KBFeedback:
        self.feedback.add(
            ids=[feedback.id],
            embeddings=[_PLACEHOLDER_EMBEDDING],
            metadatas=[_scalars(feedback.to_dict())],
        )
        self.logger.debug("feedback %s stored (message=%s)", feedback.id, feedback.message_id)
        return feedback

    def list_feedback(self, message_id: Optional[str] = None) -> List[KBFeedback]:
        res = self.feedback.get(where=self._where("message_id", message_id), include=["metadatas"])
        items = [
            KBFeedback(
                id=md["id"],
                session_id=md["session_id"],
                message_id=md["message_id"],
                question=md.get("question", ""),
                answer=md.get("answer", ""),
                rating=md.get("rating"),
                comment=md.get("comment"),
                source_ids=json.loads(md["source_ids"]) if md.get("source_ids") else [],
                status=FeedbackStatus(md.get("status", FeedbackStatus.PENDING.value)),
                created_at=datetime.fromisoformat(md["created_at"]),
            )
            for md in self._metadatas(res)
        ]
        return sorted(items, key=lambda x: x.created_at)
