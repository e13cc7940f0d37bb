"""
FitCoach - Completion Client.

Provides plain-text chat completions.
"""

from fitcoach.llm.client import call_llm_chat, get_raw_async_client

__all__ = [
    "call_llm_chat",
    "get_raw_async_client",
]
