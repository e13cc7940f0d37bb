"""FitCoach prompt templates."""

from fitcoach.prompts.coach import SYSTEM_PROMPT, chat_system_prompt, serialize_profile

__all__ = [
    "SYSTEM_PROMPT",
    "chat_system_prompt",
    "serialize_profile",
]
