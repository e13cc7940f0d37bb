"""
Command Dispatcher.

Lookup table from command name to entry point. Commands are matched before
any dialog routing; MID_DIALOG_COMMANDS decides what happens to a dialog
that is in progress when one arrives:
- passthrough: the command runs, the dialog stays where it was
- abort: the dialog is dropped, then the command runs
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Literal

from fitcoach.coach.plans import send_motivation, send_nutrition_plan, send_workout_plan
from fitcoach.coach.profile import show_profile
from fitcoach.conversation.machine import Conversation
from fitcoach.conversation.transport import InboundMessage, Responder

logger = logging.getLogger(__name__)

Handler = Callable[[InboundMessage, Responder], Awaitable[None]]

RESET_TEXT = (
    "If you want to reset, please contact support or wait for future updates. "
    "For now, you can just type /start to see if you can override."
)

HELP_TEXT = (
    "Available commands:\n"
    "/start - Begin your journey\n"
    "/profile - View your profile\n"
    "/workout - Get a workout plan\n"
    "/diet - Get a nutrition plan\n"
    "/progress - Log your progress\n"
    "/motivation - Get a daily boost\n\n"
    "You can also just talk to me!"
)


@dataclass(frozen=True)
class Command:
    name: str
    description: str
    handler: Handler


async def send_reset_notice(message: InboundMessage, responder: Responder) -> None:
    """/reset is inert: guidance text only, no state or store changes."""
    await responder.send_text(RESET_TEXT)


async def send_help(message: InboundMessage, responder: Responder) -> None:
    await responder.send_text(HELP_TEXT)


class CommandDispatcher:
    """Maps command names to conversation and coaching entry points."""

    def __init__(
        self,
        conversation: Conversation,
        mid_dialog: Literal["passthrough", "abort"] = "passthrough",
    ) -> None:
        self.conversation = conversation
        self.mid_dialog = mid_dialog
        self.commands: dict[str, Command] = {
            c.name: c
            for c in [
                Command("start", "Begin your journey", conversation.start),
                Command("profile", "View your profile", show_profile),
                Command("workout", "Get a workout plan", send_workout_plan),
                Command("diet", "Get a nutrition plan", send_nutrition_plan),
                Command("progress", "Log your progress", conversation.begin_progress),
                Command("motivation", "Get a daily boost", send_motivation),
                Command("reset", "Reset your profile", send_reset_notice),
                Command("help", "Show available commands", send_help),
            ]
        }

    def __contains__(self, name: str) -> bool:
        return name in self.commands

    @property
    def names(self) -> list[str]:
        return list(self.commands)

    async def dispatch(self, name: str, message: InboundMessage, responder: Responder) -> None:
        """Run a registered command. Raises KeyError for unknown names."""
        command = self.commands[name]
        if self.mid_dialog == "abort":
            await self.conversation.cancel_dialog(message.user_id)
        logger.debug(f"/{name} from {message.user_id}")
        await command.handler(message, responder)


def build_dispatcher(conversation: Conversation | None = None) -> CommandDispatcher:
    """Dispatcher wired to configured policies."""
    from fitcoach.config import settings
    from fitcoach.conversation.machine import DialogPolicy

    conversation = conversation or Conversation(policy=DialogPolicy.from_settings())
    return CommandDispatcher(conversation, mid_dialog=settings.mid_dialog_commands)
