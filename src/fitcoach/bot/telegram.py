"""
Telegram transport.

Builds the python-telegram-bot Application:
- group -1: logs every inbound update
- group 0: one CommandHandler per registered command, then a text handler
  that feeds the conversation state machine

Unregistered "/something" texts fall through to the text handler.
"""

import logging
from typing import Sequence

from telegram import BotCommand, Message, ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import MessageLimit, ParseMode
from telegram.error import BadRequest
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    TypeHandler,
    filters,
)

from fitcoach.bot.commands import CommandDispatcher
from fitcoach.conversation.transport import InboundMessage

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later."


def split_text(text: str, limit: int = MessageLimit.MAX_TEXT_LENGTH) -> list[str]:
    """Split text into Telegram-sized chunks, preferring line breaks."""
    chunks = []
    while len(text) > limit:
        cut = text.rfind("\n", 0, limit)
        if cut <= 0:
            cut = limit
        chunks.append(text[:cut])
        text = text[cut:].lstrip("\n")
    if text:
        chunks.append(text)
    return chunks


class TelegramResponder:
    """Responder that replies to one Telegram message."""

    def __init__(self, message: Message) -> None:
        self._message = message

    async def send_text(self, text: str, *, clear_keyboard: bool = False) -> None:
        markup = ReplyKeyboardRemove() if clear_keyboard else None
        for chunk in split_text(text):
            await self._message.reply_text(chunk, reply_markup=markup)

    async def send_markdown(self, text: str) -> None:
        for chunk in split_text(text):
            try:
                await self._message.reply_text(chunk, parse_mode=ParseMode.MARKDOWN)
            except BadRequest as e:
                # Model output is not always valid Telegram markdown
                logger.warning(f"Markdown rejected, sending plain text: {e}")
                await self._message.reply_text(chunk)

    async def send_choices(self, text: str, options: Sequence[str]) -> None:
        keyboard = ReplyKeyboardMarkup(
            [[option] for option in options],
            one_time_keyboard=True,
            resize_keyboard=True,
        )
        await self._message.reply_text(text, reply_markup=keyboard)


def inbound_from_update(update: Update) -> InboundMessage | None:
    """Extract sender and text; None for updates without a user and message."""
    user = update.effective_user
    message = update.effective_message
    if user is None or message is None:
        return None
    return InboundMessage(
        user_id=user.id,
        text=message.text,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
    )


class TelegramBot:
    """Glue between python-telegram-bot callbacks and the dispatcher."""

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self.dispatcher = dispatcher

    async def log_update(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        message = update.effective_message
        who = (user.username or user.id) if user else "unknown"
        text = message.text if message and message.text else "Non-text message"
        logger.info(f"{who}: {text}")

    def command_callback(self, name: str):
        async def callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            message = inbound_from_update(update)
            if message is None:
                return
            await self.dispatcher.dispatch(name, message, TelegramResponder(update.effective_message))

        return callback

    async def on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = inbound_from_update(update)
        if message is None:
            return
        await self.dispatcher.conversation.handle_text(message, TelegramResponder(update.effective_message))

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("Unhandled error while handling an update", exc_info=context.error)
        if isinstance(update, Update) and update.effective_message:
            await update.effective_message.reply_text(UNEXPECTED_ERROR)

    async def post_init(self, application: Application) -> None:
        await application.bot.set_my_commands([
            BotCommand(c.name, c.description)
            for c in self.dispatcher.commands.values()
            if c.name != "reset"
        ])
        logger.info(f"✅ AI FITCOACH PRO is running as @{application.bot.username}")

    def build_application(self, token: str) -> Application:
        application = Application.builder().token(token).post_init(self.post_init).build()

        application.add_handler(TypeHandler(Update, self.log_update), group=-1)
        for name in self.dispatcher.names:
            application.add_handler(CommandHandler(name, self.command_callback(name)))
        application.add_handler(MessageHandler(filters.TEXT, self.on_text))
        application.add_error_handler(self.on_error)

        return application
