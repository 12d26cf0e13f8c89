# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


# -----------------------------------------------------------------------------
# Question mode (answer pipeline)
# -----------------------------------------------------------------------------
QUESTION_DEFAULTS: Dict[str, Any] = {
    "threshold": _env_float("KB_QUESTION_THRESHOLD", 0.3),
    "max_results": _env_int("KB_QUESTION_MAX_RESULTS", 5),
    "model": _env("KB_QUESTION_MODEL", "gpt-4o-mini"),
    "temperature": _env_float("KB_QUESTION_TEMPERATURE", 0.3),
    "max_tokens": _env_int("KB_QUESTION_MAX_TOKENS", 2048),
}


# -----------------------------------------------------------------------------
# Review mode (correction pipeline)
# Review grounds editorial rules, so it needs a closer match but draws on more
# example material.
# -----------------------------------------------------------------------------
REVIEW_DEFAULTS: Dict[str, Any] = {
    "threshold": _env_float("KB_REVIEW_THRESHOLD", 0.5),
    "max_results": _env_int("KB_REVIEW_MAX_RESULTS", 8),
    "model": _env("KB_REVIEW_MODEL", "gpt-4o-mini"),
    "temperature": _env_float("KB_REVIEW_TEMPERATURE", 0.2),
    "max_tokens": _env_int("KB_REVIEW_MAX_TOKENS", 2048),
}


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
# Placeholder score for keyword-fallback hits. Not comparable to cosine scores.
KEYWORD_FALLBACK_SIMILARITY = _env_float("KB_KEYWORD_FALLBACK_SIMILARITY", 0.7)


# -----------------------------------------------------------------------------
# Source store backend: "memory" | "chroma"
# -----------------------------------------------------------------------------
SOURCE_STORE_BACKEND = _env("KB_SOURCE_STORE", "chroma").lower()


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
for _mode, _defaults in (("question", QUESTION_DEFAULTS), ("review", REVIEW_DEFAULTS)):
    if not -1.0 <= _defaults["threshold"] <= 1.0:
        raise RuntimeError(f"{_mode} threshold must be within [-1, 1], got {_defaults['threshold']}")
    if _defaults["max_results"] < 1:
        raise RuntimeError(f"{_mode} max_results must be >= 1, got {_defaults['max_results']}")
    if _defaults["max_tokens"] < 1:
        raise RuntimeError(f"{_mode} max_tokens must be >= 1, got {_defaults['max_tokens']}")

if SOURCE_STORE_BACKEND not in ("memory", "chroma"):
    raise RuntimeError(f"KB_SOURCE_STORE must be 'memory' or 'chroma', got {SOURCE_STORE_BACKEND!r}")
