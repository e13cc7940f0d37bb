"""
FitCoach - Configuration and settings.

Only the Telegram token is required. Store and completion credentials are
optional at load time; features that need them fail at call time and are
reported to the user with a static message.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, read from the environment and .env.

    Dialog policies (answer_validation, mid_dialog_commands,
    keep_dialog_on_failure) are explicit product decisions, not hardcoded.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Telegram
    telegram_bot_token: str

    # Completion service (OpenAI-compatible endpoint, Groq by default)
    groq_api_key: str | None = None
    completion_base_url: str = "https://api.groq.com/openai/v1"
    completion_model: str = "llama-3.3-70b-versatile"
    completion_max_tokens: int | None = None

    # Supabase
    supabase_url: str | None = None
    supabase_key: str | None = None

    # Application
    fitcoach_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # FITCOACH_LOG_PROMPTS=1 - log prompts to local files (dev only)
    fitcoach_log_prompts: bool = False

    # Dialog policies
    answer_validation: Literal["lenient", "strict"] = "lenient"
    mid_dialog_commands: Literal["passthrough", "abort"] = "passthrough"
    keep_dialog_on_failure: bool = False

    # User id for the local console chat
    dev_user_id: int = 1

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def completion_configured(self) -> bool:
        return bool(self.groq_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
