# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: KBAnswerService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import settings
from chat.OpenAIChat import Message
from config.KBPrompts import NO_SOURCE_MESSAGE, QUESTION_SYSTEM_PROMPT, question_user_prompt
from services.KBContextAssembler import KBContextAssembler
from services.KBSearchService import KBSearchService
from source.KBSearchFilters import KBSearchFilters
from source.KBSearchMatch import KBSearchMatch
from utility.logging_utils import get_class_logger


@dataclass
class KBAnswerResult:
    answer: str
    sources: List[KBSearchMatch]
    has_answer: bool


@dataclass
class KBAnswerService:
    """
    Question answering grounded in registered sources:
        - searches sources (question-mode threshold / cap, optional filters)
        - no matches -> fixed refusal, the LLM is never asked
        - otherwise builds system prompt + history + (context, question) and calls the LLM
        - returns answer + matches
    """
    search_service: KBSearchService
    chat_client: Any  # OpenAIChat or anything with complete(messages, ...) -> str
    context_assembler: KBContextAssembler = field(default_factory=KBContextAssembler)
    threshold: float = settings.QUESTION_DEFAULTS["threshold"]
    max_results: int = settings.QUESTION_DEFAULTS["max_results"]
    model: Optional[str] = settings.QUESTION_DEFAULTS["model"]
    temperature: float = settings.QUESTION_DEFAULTS["temperature"]
    max_tokens: int = settings.QUESTION_DEFAULTS["max_tokens"]
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.logger.info(
            "KBAnswerService initialised (search=%s chat_client=%s)",
            type(self.search_service).__name__,
            type(self.chat_client).__name__,
        )

    def answer_question(
            self,
            question: str,
            history: Optional[Sequence[Dict[str, str]]] = None,
            filters: Optional[KBSearchFilters] = None,
            *,
            session_id: Optional[str] = None,
    ) -> KBAnswerResult:
        q = (question or "").strip()
        if not q:
            raise ValueError("question must not be empty")

        history = list(history or [])
        self.logger.info(
            "answer_question: session=%s query='%s' history_turns=%d filters=%s (start)",
            session_id,
            q[:120],
            len(history),
            filters.to_dict() if filters else {},
        )

        matches = self.search_service.search(
            q,
            threshold=self.threshold,
            max_results=self.max_results,
            filters=filters,
        )

        if not matches:
            self.logger.info("answer_question: session=%s no matching sources, refusing (done)", session_id)
            return KBAnswerResult(answer=NO_SOURCE_MESSAGE, sources=[], has_answer=False)

        context = self.context_assembler.assemble(matches)
        self.logger.debug("answer_question: context_chars=%d", len(context))

        messages: List[Message] = [{"role": "system", "content": QUESTION_SYSTEM_PROMPT}]
        # prior turns go BEFORE the new question, order and roles preserved
        messages.extend({"role": turn["role"], "content": turn["content"]} for turn in history)
        messages.append({"role": "user", "content": question_user_prompt(context, question)})

        answer = self.chat_client.complete(
            messages,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        self.logger.info(
            "answer_question: session=%s answer_chars=%d sources=%d (done)",
            session_id,
            len(answer),
            len(matches),
        )
        return KBAnswerResult(answer=answer, sources=list(matches), has_answer=True)
