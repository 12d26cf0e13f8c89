# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: KBEmbedder
# -----------------------------------------------------------------------------
from typing import Any, List, Optional, Sequence

import numpy as np
from openai import OpenAI

from config.Config import Config
from utility.logging_utils import get_class_logger


class KBEmbedder:
    """
    Embedding gateway: text -> fixed-length float32 vector.

    Talks to any OpenAI-compatible embeddings endpoint (OpenRouter by default).
    Failures propagate to the caller; nothing here substitutes a zero vector
    or retries.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            batch_size: int = 64,
            normalize: bool = True,
            client: Optional[Any] = None,
            logger=None,
    ):
        self.cfg = cfg
        self.batch_size = batch_size
        self.normalize = normalize
        self.logger = logger or get_class_logger(self.__class__)
        self.model = cfg.openai_embed_model

        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
            default_headers={
                "HTTP-Referer": cfg.app_url,
                "X-Title": cfg.app_title,
            },
        )
        self.logger.info("KBEmbedder initialised (model=%s, normalize=%s)", self.model, self.normalize)

    def _embed_batch(self, texts: List[str]) -> np.ndarray:
        resp = self.client.embeddings.create(model=self.model, input=texts)

        arr = np.asarray([d.embedding for d in resp.data], dtype=np.float32)
        if arr.ndim != 2 or arr.shape[0] != len(texts):
            raise RuntimeError(
                f"Malformed embeddings response: expected {len(texts)} vectors, got shape {arr.shape}"
            )

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms
        return arr

    def embed(self, text: str) -> np.ndarray:
        """Embed a single text. Blank text is rejected."""
        if not text or not text.strip():
            raise ValueError("text to embed must not be empty")

        vec = self._embed_batch([text])[0]
        self.logger.debug("Embedded text (chars=%d, dim=%d)", len(text), vec.shape[0])
        return vec

    def embed_texts(self, texts: Sequence[str]) -> List[np.ndarray]:
        items = list(texts)
        if any(not t or not t.strip() for t in items):
            raise ValueError("texts to embed must not be empty")

        out: List[np.ndarray] = []
        for i in range(0, len(items), self.batch_size):
            out.extend(self._embed_batch(items[i:i + self.batch_size]))

        self.logger.info("Embedded %d texts (batch=%d)", len(out), self.batch_size)
        return out
