# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: kb_fakes.py
# -----------------------------------------------------------------------------
"""
Network-free test doubles for the embedding and completion gateways.
"""
import hashlib
import re
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

DIM = 16


def unit(*components: float, dim: int = DIM) -> np.ndarray:
    """Vector with the given leading components, zero padded to `dim`."""
    v = np.zeros(dim, dtype=np.float32)
    v[:len(components)] = components
    return v


class FakeEmbedder:
    """
    Deterministic bag-of-words hashing embedder.
    `overrides` pins exact texts to exact vectors; `fail` makes every call raise.
    """

    def __init__(self, dim: int = DIM, overrides: Optional[Dict[str, Any]] = None, fail: bool = False):
        self.dim = dim
        self.overrides = dict(overrides or {})
        self.fail = fail
        self.calls: List[str] = []

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        if self.fail:
            raise RuntimeError("embedding provider unavailable")
        if text in self.overrides:
            return np.asarray(self.overrides[text], dtype=np.float32)

        vec = np.zeros(self.dim, dtype=np.float32)
        for token in re.findall(r"\w+", text.lower()):
            idx = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % self.dim
            vec[idx] += 1.0
        if not vec.any():
            vec[0] = 1.0
        return vec

    def embed_texts(self, texts: Sequence[str]) -> List[np.ndarray]:
        return [self.embed(t) for t in texts]


class FakeChat:
    """Records every complete() call and returns a canned response (or raises)."""

    def __init__(self, response: str = "", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def complete(self, messages, *, model=None, temperature=0.3, max_tokens=2048) -> str:
        self.calls.append({
            "messages": list(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return self.response
