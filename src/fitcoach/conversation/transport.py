"""
Transport seam between the conversation logic and a messaging front-end.

The state machine only sees InboundMessage and talks back through a
Responder, so the same logic runs behind Telegram and the console chat.
"""

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class InboundMessage:
    """One text event from a user."""
    user_id: int
    text: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Responder(Protocol):
    """Outbound actions available to the conversation logic."""

    async def send_text(self, text: str, *, clear_keyboard: bool = False) -> None:
        """Send plain text, optionally removing any active reply keyboard."""
        ...

    async def send_markdown(self, text: str) -> None:
        """Send text rendered as markdown."""
        ...

    async def send_choices(self, text: str, options: Sequence[str]) -> None:
        """Send text with a one-time single-choice keyboard."""
        ...
