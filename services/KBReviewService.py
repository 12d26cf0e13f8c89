# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: KBReviewService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

import settings
from chat.OpenAIChat import Message
from config.KBPrompts import REVIEW_SYSTEM_PROMPT, review_user_prompt
from services.KBContextAssembler import KBContextAssembler
from services.KBSearchService import KBSearchService
from source.KBSearchMatch import KBSearchMatch
from utility.logging_utils import get_class_logger
from utility.structured_extract import ExtractionStatus, extract_json_object

CORRECTION_TYPES = ("structure", "wording", "addition", "deletion", "info")


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x)


@dataclass
class KBCorrection:
    type: str
    original: str
    revised: str
    reason: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KBCorrection":
        return cls(
            type=_safe_str(data.get("type")),
            original=_safe_str(data.get("original")),
            revised=_safe_str(data.get("revised")),
            reason=_safe_str(data.get("reason")),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class KBReviewResult:
    original_text: str
    revised_text: str
    corrections: List[KBCorrection]
    sources: List[KBSearchMatch]


@dataclass
class KBReviewService:
    """
    Text review grounded in registered rules/examples:
        - searches sources (review-mode threshold / cap, no filters)
        - builds a JSON-only correction prompt (even with an empty context)
        - calls the LLM at low temperature
        - tolerantly parses {revised_text, corrections}; bad JSON never raises
    """
    search_service: KBSearchService
    chat_client: Any
    context_assembler: KBContextAssembler = field(default_factory=KBContextAssembler)
    threshold: float = settings.REVIEW_DEFAULTS["threshold"]
    max_results: int = settings.REVIEW_DEFAULTS["max_results"]
    model: Optional[str] = settings.REVIEW_DEFAULTS["model"]
    temperature: float = settings.REVIEW_DEFAULTS["temperature"]
    max_tokens: int = settings.REVIEW_DEFAULTS["max_tokens"]
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def review_text(self, text: str, *, session_id: Optional[str] = None) -> KBReviewResult:
        if not text or not text.strip():
            raise ValueError("text must not be empty")

        self.logger.info("review_text: session=%s text_chars=%d (start)", session_id, len(text))

        matches = self.search_service.search(
            text,
            threshold=self.threshold,
            max_results=self.max_results,
        )
        # no short-circuit: an empty context is left for the model to flag
        context = self.context_assembler.assemble(matches)

        messages: List[Message] = [
            {"role": "system", "content": REVIEW_SYSTEM_PROMPT},
            {"role": "user", "content": review_user_prompt(context, text)},
        ]

        response = self.chat_client.complete(
            messages,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        revised_text, corrections = self.parse_response(response, text)

        self.logger.info(
            "review_text: session=%s corrections=%d sources=%d (done)",
            session_id,
            len(corrections),
            len(matches),
        )
        return KBReviewResult(
            original_text=text,
            revised_text=revised_text,
            corrections=corrections,
            sources=list(matches),
        )

    def parse_response(self, response: str, original_text: str) -> tuple[str, List[KBCorrection]]:
        extraction = extract_json_object(response)

        if extraction.status is ExtractionStatus.NOT_FOUND:
            self.logger.warning("review_text: no JSON object in model response; returning text unchanged")
            return original_text, []

        if extraction.status is ExtractionStatus.INVALID:
            self.logger.warning("review_text: model JSON could not be parsed (%s)", extraction.error)
            return original_text, [KBCorrection(type="info", original="", revised="", reason=response)]

        data = extraction.data or {}
        revised_text = data.get("revised_text")
        if not isinstance(revised_text, str) or not revised_text:
            revised_text = original_text

        raw_corrections = data.get("corrections")
        if not isinstance(raw_corrections, list):
            raw_corrections = []

        corrections = [KBCorrection.from_dict(c) for c in raw_corrections if isinstance(c, dict)]
        unknown = [c.type for c in corrections if c.type not in CORRECTION_TYPES]
        if unknown:
            self.logger.debug("review_text: unrecognised correction types kept as-is: %s", unknown)
        return revised_text, corrections
