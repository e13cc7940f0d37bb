"""
Console transport for `fitcoach chat`.

Drives the same dispatcher and state machine as Telegram, rendering replies
with rich. Choice keyboards are shown as a numbered list; typing the number
picks the option.
"""

from dataclasses import replace
from typing import Sequence

from rich.console import Console
from rich.markdown import Markdown

from fitcoach.bot.commands import CommandDispatcher
from fitcoach.conversation.transport import InboundMessage


class ConsoleResponder:
    """Responder that prints to a rich Console."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self.choices: list[str] = []

    async def send_text(self, text: str, *, clear_keyboard: bool = False) -> None:
        if clear_keyboard:
            self.choices = []
        self.console.print(f"\n[bold green]Coach:[/bold green] {text}")

    async def send_markdown(self, text: str) -> None:
        self.console.print("\n[bold green]Coach:[/bold green]")
        self.console.print(Markdown(text))

    async def send_choices(self, text: str, options: Sequence[str]) -> None:
        self.choices = list(options)
        self.console.print(f"\n[bold green]Coach:[/bold green] {text}")
        for i, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{i}[/cyan]. {option}")

    def resolve_choice(self, text: str) -> str:
        """Map a typed option number to its label; one-time like a keyboard."""
        if self.choices and text.isdigit() and 1 <= int(text) <= len(self.choices):
            text = self.choices[int(text) - 1]
        self.choices = []
        return text


async def handle_console_input(
    dispatcher: CommandDispatcher,
    responder: ConsoleResponder,
    user: InboundMessage,
    user_input: str,
) -> None:
    """Process one console line as a command or as dialog text."""
    if user_input.startswith("/"):
        name = user_input[1:].split(maxsplit=1)[0].lower() if len(user_input) > 1 else ""
        if name in dispatcher:
            await dispatcher.dispatch(name, replace(user, text=user_input), responder)
            return

    text = responder.resolve_choice(user_input)
    await dispatcher.conversation.handle_text(replace(user, text=text), responder)
