# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: ChromaKBSourceStore
# -----------------------------------------------------------------------------
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence, Dict, Any, List, Optional

import chromadb
from chromadb import ClientAPI
from chromadb.api.models.Collection import Collection

from config.Config import Config
from embedding.vector_codec import decode_vector, encode_vector
from source.KBSearchFilters import KBSearchFilters
from source.KBSource import KBSource, KBSourceMetadata, SourceType, utc_now
from store.KBSourceStore import KBSourceStore, SourceNotFoundError, content_matches_keywords
from utility.logging_utils import get_class_logger

# Typed metadata attributes flattened into Chroma's scalar metadata
_TAG_FIELDS = ("poster", "phase", "theme", "company", "job_type")


@dataclass
class ChromaKBSourceStore(KBSourceStore):
    """
    Keeps sources (content + embedding + flattened metadata) in one Chroma
    collection. Chroma is used as a record store only: similarity ranking is
    done by KBSearchService over the fetched candidates.
    """
    cfg: Optional[Config] = None
    client: Optional[ClientAPI] = None
    collection_name: str = "kb_sources"
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.cfg is not None:
            self.collection_name = self.cfg.chroma_collection or self.collection_name

        if self.client is None:
            chroma_path = getattr(self.cfg, "chroma_path", "") if self.cfg else ""
            if chroma_path:
                self.logger.info("Initialising Chroma persistent client (path=%s)", chroma_path)
                self.client = chromadb.PersistentClient(path=chroma_path)
            else:
                self.logger.info("Initialising Chroma ephemeral client")
                self.client = chromadb.EphemeralClient()

        # Embeddings are always supplied by KBEmbedder, never computed by Chroma
        self.collection: Collection = self.client.get_or_create_collection(
            name=self.collection_name,
            embedding_function=None,
        )
        self.logger.info("Chroma collection ready: '%s'", self.collection_name)

    # ------------------------------------------------------------------
    # record <-> KBSource
    # ------------------------------------------------------------------
    @staticmethod
    def _to_metadata(source: KBSource) -> Dict[str, Any]:
        md: Dict[str, Any] = {
            "title": source.title,
            "is_active": bool(source.is_active),
            "source_type": SourceType(source.source_type).value,
            "created_at": source.created_at.isoformat(),
            "updated_at": source.updated_at.isoformat(),
        }
        tags = source.metadata
        if tags is not None:
            md["has_metadata"] = True
            for name in _TAG_FIELDS:
                value = getattr(tags, name)
                if value is not None:
                    md[name] = value
            if tags.links:
                md["links"] = json.dumps(tags.links, ensure_ascii=False)
            if tags.raw:
                md["raw"] = json.dumps(tags.raw, ensure_ascii=False, default=str)
        return md

    @staticmethod
    def _from_record(source_id: str, document: Optional[str], md: Optional[Dict[str, Any]], embedding: Any) -> KBSource:
        md = md or {}

        tags: Optional[KBSourceMetadata] = None
        if md.get("has_metadata"):
            tags = KBSourceMetadata(
                links=json.loads(md["links"]) if md.get("links") else [],
                raw=json.loads(md["raw"]) if md.get("raw") else {},
                **{name: md.get(name) for name in _TAG_FIELDS},
            )

        def _ts(key: str) -> datetime:
            value = md.get(key)
            return datetime.fromisoformat(value) if value else utc_now()

        return KBSource(
            id=source_id,
            title=md.get("title", ""),
            content=document or "",
            embedding=decode_vector(embedding),
            metadata=tags,
            is_active=bool(md.get("is_active", True)),
            source_type=SourceType(md.get("source_type", SourceType.MANUAL.value)),
            created_at=_ts("created_at"),
            updated_at=_ts("updated_at"),
        )

    def _rows(self, res: Dict[str, Any]) -> List[KBSource]:
        ids: List[str] = res.get("ids") or []
        documents = res.get("documents")
        metadatas = res.get("metadatas")
        # may come back as a numpy array, so no truthiness tests here
        embeddings = res.get("embeddings")

        out: List[KBSource] = []
        for i, source_id in enumerate(ids):
            out.append(self._from_record(
                source_id,
                documents[i] if documents is not None else None,
                metadatas[i] if metadatas is not None else None,
                embeddings[i] if embeddings is not None and i < len(embeddings) else None,
            ))
        return out

    def _upsert(self, source: KBSource) -> None:
        vec = encode_vector(decode_vector(source.embedding))
        if vec is None:
            raise ValueError(f"Chroma store requires a valid embedding for source '{source.id}'")

        self.collection.upsert(
            ids=[source.id],
            documents=[source.content],
            embeddings=[vec],
            metadatas=[self._to_metadata(source)],
        )

    # ------------------------------------------------------------------
    # KBSourceStore
    # ------------------------------------------------------------------
    def insert(self, source: KBSource) -> KBSource:
        if self.get(source.id) is not None:
            raise ValueError(f"Source id already exists: {source.id}")
        self._upsert(source)
        self.logger.info("Inserted source %s into '%s'", source.short_preview(), self.collection_name)
        return self.get(source.id)

    def update(self, source: KBSource) -> KBSource:
        if self.get(source.id) is None:
            raise SourceNotFoundError(source.id)
        self._upsert(source)
        self.logger.info("Updated source %s (active=%s)", source.id, source.is_active)
        return self.get(source.id)

    def get(self, source_id: str) -> Optional[KBSource]:
        res = self.collection.get(ids=[source_id], include=["documents", "metadatas", "embeddings"])
        rows = self._rows(res)
        return rows[0] if rows else None

    def list_all(self) -> List[KBSource]:
        res = self.collection.get(include=["documents", "metadatas", "embeddings"])
        return self._rows(res)

    def fetch_candidates(self, filters: Optional[KBSearchFilters] = None) -> List[KBSource]:
        filters = filters or KBSearchFilters()

        clauses: List[Dict[str, Any]] = [{"is_active": True}]
        if filters.phase is not None:
            clauses.append({"phase": filters.phase})
        where = clauses[0] if len(clauses) == 1 else {"$and": clauses}

        self.logger.debug("fetch_candidates: where=%s", where)
        res = self.collection.get(where=where, include=["documents", "metadatas", "embeddings"])

        # Chroma has no case-insensitive substring operator, so company is matched here
        out = [s for s in self._rows(res) if s.is_retrievable() and filters.matches(s.metadata)]
        self.logger.debug("fetch_candidates: %d candidates (filters=%s)", len(out), filters.to_dict())
        return out

    def find_by_keywords(
            self,
            keywords: Sequence[str],
            limit: int,
            filters: Optional[KBSearchFilters] = None,
    ) -> List[KBSource]:
        if not keywords or limit <= 0:
            return []
        filters = filters or KBSearchFilters()
        res = self.collection.get(where={"is_active": True}, include=["documents", "metadatas"])
        hits = [
            s for s in self._rows(res)
            if filters.matches(s.metadata) and content_matches_keywords(s.content, keywords)
        ]
        return hits[:limit]
