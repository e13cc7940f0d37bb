"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from fitcoach.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_token_required(monkeypatch):
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    with pytest.raises(ValidationError):
        _settings()


def test_defaults(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    settings = _settings(telegram_bot_token="t")

    assert settings.completion_model == "llama-3.3-70b-versatile"
    assert settings.completion_base_url == "https://api.groq.com/openai/v1"
    assert settings.answer_validation == "lenient"
    assert settings.mid_dialog_commands == "passthrough"
    assert settings.keep_dialog_on_failure is False
    assert settings.store_configured is False


def test_policies_from_environment(monkeypatch):
    monkeypatch.setenv("ANSWER_VALIDATION", "strict")
    monkeypatch.setenv("MID_DIALOG_COMMANDS", "abort")
    monkeypatch.setenv("KEEP_DIALOG_ON_FAILURE", "true")
    settings = _settings(telegram_bot_token="t")

    assert settings.answer_validation == "strict"
    assert settings.mid_dialog_commands == "abort"
    assert settings.keep_dialog_on_failure is True


def test_invalid_policy_rejected():
    with pytest.raises(ValidationError):
        _settings(telegram_bot_token="t", answer_validation="sometimes")


def test_credentials_flags():
    settings = _settings(
        telegram_bot_token="t",
        supabase_url="https://x.supabase.co",
        supabase_key="k",
        groq_api_key="g",
    )
    assert settings.store_configured is True
    assert settings.completion_configured is True
