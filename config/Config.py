# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # OpenAI-compatible provider (OpenRouter by default) for chat + embeddings
    openai_api_key: str
    openai_base_url: str = "https://openrouter.ai/api/v1"
    openai_chat_model: str = "gpt-4o-mini"
    openai_embed_model: str = "openai/text-embedding-3-small"

    # Attribution headers sent to OpenRouter
    app_url: str = "http://localhost:8000"
    app_title: str = "Knowledge ChatBot"

    # Chroma (local persistent client); empty path means in-process only
    chroma_path: str = ""
    chroma_collection: str = "kb_sources"

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "openai_embed_model": "OPENAI_EMBED_MODEL",
        "app_url": "KB_APP_URL",
        "app_title": "KB_APP_TITLE",
        "chroma_path": "CHROMA_PATH",
        "chroma_collection": "CHROMA_COLLECTION",
    }

    # Fields that must be non-empty
    REQUIRED_FIELDS = ("openai_api_key",)

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables (unset vars keep defaults)."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                kwargs[field_name] = value.strip()
        kwargs.setdefault("openai_api_key", "")
        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast if any required config is missing.
        """
        missing_fields = [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url,
            "openai_chat_model": self.openai_chat_model,
            "openai_embed_model": self.openai_embed_model,
            "app_url": self.app_url,
            "chroma_path": self.chroma_path or "(ephemeral)",
            "chroma_collection": self.chroma_collection,
        }
