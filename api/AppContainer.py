# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: AppContainer.py
# -----------------------------------------------------------------------------
import settings
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.KBEmbedder import KBEmbedder
from services.KBActivityService import KBActivityService
from services.KBAnswerService import KBAnswerService
from services.KBReviewService import KBReviewService
from services.KBSearchService import KBSearchService
from services.KBSourceService import KBSourceService
from store.ChromaKBActivityStore import ChromaKBActivityStore
from store.ChromaKBSourceStore import ChromaKBSourceStore
from store.InMemoryKBActivityStore import InMemoryKBActivityStore
from store.InMemoryKBSourceStore import InMemoryKBSourceStore
from store.KBActivityStore import KBActivityStore
from store.KBSourceStore import KBSourceStore
from utility.logging_utils import get_class_logger


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    One instance is shared by all requests via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("AppContainer config: %s", self.cfg.summary())

        # Gateways
        self.embedder = KBEmbedder(cfg=self.cfg)
        self.openai_chat = OpenAIChat(cfg=self.cfg)

        # Storage
        self.store = self.build_store(self.cfg)
        self.activity_store = self.build_activity_store(self.cfg, self.store)

        # Services
        self.search_service = KBSearchService(embedder=self.embedder, store=self.store)
        self.source_service = KBSourceService(store=self.store, embedder=self.embedder)
        self.answer_service = KBAnswerService(
            search_service=self.search_service,
            chat_client=self.openai_chat,
        )
        self.review_service = KBReviewService(
            search_service=self.search_service,
            chat_client=self.openai_chat,
        )
        self.activity_service = KBActivityService(store=self.activity_store)

    @staticmethod
    def build_store(cfg: Config) -> KBSourceStore:
        if settings.SOURCE_STORE_BACKEND == "memory":
            return InMemoryKBSourceStore()
        return ChromaKBSourceStore(cfg=cfg)

    @staticmethod
    def build_activity_store(cfg: Config, source_store: KBSourceStore) -> KBActivityStore:
        if isinstance(source_store, ChromaKBSourceStore):
            # one Chroma client per process
            return ChromaKBActivityStore(cfg=cfg, client=source_store.client)
        return InMemoryKBActivityStore()
