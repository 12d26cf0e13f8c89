# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from openai import OpenAI

from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}

# Short aliases -> provider model ids. Unknown names pass through unchanged.
MODELS: Dict[str, str] = {
    # fast / cheap
    "gpt-4o-mini": "openai/gpt-4o-mini",
    # higher accuracy
    "gpt-4o": "openai/gpt-4o",
    "claude-sonnet": "anthropic/claude-sonnet-4",
    "claude-haiku": "anthropic/claude-3-5-haiku",
}


def resolve_model(name: str) -> str:
    return MODELS.get(name, name)


@dataclass
class OpenAIChat:
    """
        Completion gateway over an OpenAI-compatible chat endpoint.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str
          cfg.openai_chat_model: str  (alias from MODELS or a provider model id)
          cfg.app_url / cfg.app_title: OpenRouter attribution headers
    """

    cfg: Any
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not getattr(self.cfg, "openai_api_key", None):
            raise ValueError("Config is missing openai_api_key")

        self.model = getattr(self.cfg, "openai_chat_model", None)
        if not self.model:
            raise ValueError("Config missing openai_chat_model.")

        if self.client is None:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=getattr(self.cfg, "openai_base_url", None),
                default_headers={
                    "HTTP-Referer": getattr(self.cfg, "app_url", ""),
                    "X-Title": getattr(self.cfg, "app_title", ""),
                },
            )

        self.logger.info("OpenAIChat initialised (default model=%s)", resolve_model(self.model))

    # Standard chat call
    def chat(
            self,
            messages: List[Message],
            model: Optional[str] = None,
            temperature: float = 0.3,
            max_tokens: int = 2048,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": resolve_model(model or self.model),
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if extra_params:
            params.update(extra_params)

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s messages=%d",
            params["model"], temperature, max_tokens, len(messages)
        )

        resp = self.client.chat.completions.create(**params)

        self.logger.debug("Raw ChatCompletion response: %r", resp)

        # Return the full response object (NOT just the content)
        return resp

    def complete(
            self,
            messages: List[Message],
            *,
            model: Optional[str] = None,
            temperature: float = 0.3,
            max_tokens: int = 2048,
    ) -> str:
        """
        messages -> text of the first choice.
        A response with no choices/content yields "" rather than an error.
        """
        resp = self.chat(messages, model=model, temperature=temperature, max_tokens=max_tokens)

        choices = getattr(resp, "choices", None) or []
        if not choices:
            self.logger.warning("Chat response had no choices (model=%s)", getattr(resp, "model", None))
            return ""

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None) or ""

        self.logger.info(
            "Chat answer generated (model=%s, chars=%d)", getattr(resp, "model", None), len(content)
        )
        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))
        return content
