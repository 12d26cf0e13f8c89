# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: vector_codec.py
# -----------------------------------------------------------------------------
"""
(De)serialization of stored embedding vectors.

Storage backends may hand vectors back as numpy arrays, plain lists or JSON
text (e.g. ``"[0.1, 0.2, ...]"``). Store adapters normalise everything to a
1-D float32 array here so search only ever sees numeric arrays.
"""
import json
from typing import Any, List, Optional

import numpy as np


def decode_vector(value: Any) -> Optional[np.ndarray]:
    """
    Return a 1-D float32 array, or None when the value is missing or corrupt.
    """
    if value is None:
        return None

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return None

    try:
        arr = np.asarray(value, dtype=np.float32)
    except (TypeError, ValueError):
        return None

    if arr.ndim != 1 or arr.size == 0 or not np.all(np.isfinite(arr)):
        return None
    return arr


def encode_vector(vec: Optional[np.ndarray]) -> Optional[List[float]]:
    """Numeric array -> plain list of floats (what JSON/Chroma accept)."""
    if vec is None:
        return None
    return [float(x) for x in np.asarray(vec, dtype=np.float32).ravel()]
