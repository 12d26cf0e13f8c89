# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-16
# Description: test_config.py
# -----------------------------------------------------------------------------
import pytest

from config.Config import Config


def test_from_env_reads_overrides_and_keeps_defaults(monkeypatch):
    for env_name in Config.ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_CHAT_MODEL", " gpt-4o ")

    cfg = Config.from_env()

    assert cfg.openai_api_key == "sk-test"
    assert cfg.openai_chat_model == "gpt-4o"
    assert cfg.openai_base_url == "https://openrouter.ai/api/v1"
    assert cfg.openai_embed_model == "openai/text-embedding-3-small"


def test_missing_api_key_fails_fast(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        Config.from_env()


def test_summary_never_contains_secrets():
    cfg = Config(openai_api_key="sk-very-secret")
    assert "sk-very-secret" not in str(cfg.summary())
