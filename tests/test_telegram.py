"""
Tests for the Telegram transport.

Uses mocked telegram objects; nothing talks to the Bot API.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import ParseMode
from telegram.error import BadRequest
from telegram.ext import CommandHandler, MessageHandler, TypeHandler

from fitcoach.bot.commands import CommandDispatcher
from fitcoach.bot.telegram import (
    UNEXPECTED_ERROR,
    TelegramBot,
    TelegramResponder,
    inbound_from_update,
    split_text,
)
from fitcoach.conversation.machine import Conversation


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


@pytest.fixture
def message():
    msg = MagicMock()
    msg.text = "hello"
    msg.reply_text = AsyncMock()
    return msg


def _update(message, user_id=42, username="jane", first_name="Jane", last_name=None):
    update = MagicMock(spec=Update)
    update.effective_message = message
    update.effective_user = MagicMock(
        id=user_id, username=username, first_name=first_name, last_name=last_name,
    )
    return update


class TestSplitText:
    """Tests for message chunking."""

    def test_short_text_single_chunk(self):
        assert split_text("hi") == ["hi"]

    def test_empty_text(self):
        assert split_text("") == []

    def test_prefers_line_breaks(self):
        text = "aaaa\nbbbb\ncccc"
        assert split_text(text, limit=10) == ["aaaa\nbbbb", "cccc"]

    def test_hard_cut_without_line_breaks(self):
        assert split_text("x" * 25, limit=10) == ["x" * 10, "x" * 10, "x" * 5]


class TestTelegramResponder:
    """Tests for outbound rendering."""

    def test_send_text(self, message):
        _run(TelegramResponder(message).send_text("hi"))
        message.reply_text.assert_awaited_once_with("hi", reply_markup=None)

    def test_send_text_clears_keyboard(self, message):
        _run(TelegramResponder(message).send_text("How old are you?", clear_keyboard=True))
        markup = message.reply_text.await_args.kwargs["reply_markup"]
        assert isinstance(markup, ReplyKeyboardRemove)

    def test_send_choices_one_time_keyboard(self, message):
        _run(TelegramResponder(message).send_choices("Gender?", ["Male", "Female", "Other"]))

        markup = message.reply_text.await_args.kwargs["reply_markup"]
        assert isinstance(markup, ReplyKeyboardMarkup)
        assert markup.one_time_keyboard is True
        assert [[button.text for button in row] for row in markup.keyboard] == [
            ["Male"], ["Female"], ["Other"],
        ]

    def test_send_markdown(self, message):
        _run(TelegramResponder(message).send_markdown("*bold*"))
        message.reply_text.assert_awaited_once_with("*bold*", parse_mode=ParseMode.MARKDOWN)

    def test_send_markdown_falls_back_to_plain(self, message):
        message.reply_text.side_effect = [BadRequest("Can't parse entities"), None]

        _run(TelegramResponder(message).send_markdown("*broken"))

        assert message.reply_text.await_count == 2
        assert message.reply_text.await_args_list[1].args == ("*broken",)
        assert message.reply_text.await_args_list[1].kwargs == {}


class TestInbound:
    """Tests for update conversion."""

    def test_inbound_from_update(self, message):
        inbound = inbound_from_update(_update(message, last_name="Doe"))
        assert inbound.user_id == 42
        assert inbound.text == "hello"
        assert inbound.username == "jane"
        assert inbound.display_name == "Jane Doe"

    def test_update_without_user(self, message):
        update = _update(message)
        update.effective_user = None
        assert inbound_from_update(update) is None

    def test_non_text_message(self, message):
        message.text = None
        assert inbound_from_update(_update(message)).text is None


class TestTelegramBot:
    """Tests for callbacks and application wiring."""

    @pytest.fixture
    def bot(self):
        return TelegramBot(CommandDispatcher(Conversation()))

    def test_on_text_feeds_conversation(self, bot, message):
        with patch.object(bot.dispatcher.conversation, "handle_text", new_callable=AsyncMock) as mock_handle:
            _run(bot.on_text(_update(message), MagicMock()))

        inbound, responder = mock_handle.await_args.args
        assert inbound.user_id == 42
        assert inbound.text == "hello"
        assert isinstance(responder, TelegramResponder)

    def test_command_callback_dispatches(self, bot, message):
        with patch.object(bot.dispatcher, "dispatch", new_callable=AsyncMock) as mock_dispatch:
            _run(bot.command_callback("workout")(_update(message), MagicMock()))

        name, inbound, _ = mock_dispatch.await_args.args
        assert name == "workout"
        assert inbound.user_id == 42

    def test_on_error_replies(self, bot, message):
        context = MagicMock(error=RuntimeError("boom"))
        _run(bot.on_error(_update(message), context))
        message.reply_text.assert_awaited_once_with(UNEXPECTED_ERROR)

    def test_on_error_without_update(self, bot):
        _run(bot.on_error(None, MagicMock(error=RuntimeError("boom"))))

    def test_post_init_registers_commands(self, bot):
        application = MagicMock()
        application.bot.set_my_commands = AsyncMock()
        application.bot.username = "fitcoach_bot"

        _run(bot.post_init(application))

        commands = application.bot.set_my_commands.await_args.args[0]
        names = [c.command for c in commands]
        assert names == ["start", "profile", "workout", "diet", "progress", "motivation", "help"]

    def test_build_application_handlers(self, bot):
        application = bot.build_application("123456:test-token-not-real")

        assert isinstance(application.handlers[-1][0], TypeHandler)
        group = application.handlers[0]
        commands = [h for h in group if isinstance(h, CommandHandler)]
        assert [next(iter(h.commands)) for h in commands] == bot.dispatcher.names
        assert isinstance(group[-1], MessageHandler)
        assert bot.on_error in application.error_handlers
