# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: structured_extract.py
# -----------------------------------------------------------------------------
"""
Best-effort extraction of a JSON object from free-form model output.

Models often wrap JSON in prose or code fences, so the first ``{`` .. last
``}`` span is taken and parsed. Three outcomes:

  PARSED     - a JSON object was found and decoded
  NOT_FOUND  - no ``{...}`` span in the text
  INVALID    - a span was found but is not a decodable JSON object
"""
import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class ExtractionStatus(str, Enum):
    PARSED = "parsed"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class StructuredExtraction:
    status: ExtractionStatus
    raw: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def extract_json_object(text: Optional[str]) -> StructuredExtraction:
    raw = text or ""
    match = _JSON_OBJECT_RE.search(raw)
    if match is None:
        return StructuredExtraction(status=ExtractionStatus.NOT_FOUND, raw=raw)

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return StructuredExtraction(status=ExtractionStatus.INVALID, raw=raw, error=str(e))

    # the span starts with "{", so a successful decode is always a dict
    return StructuredExtraction(status=ExtractionStatus.PARSED, raw=raw, data=data)
