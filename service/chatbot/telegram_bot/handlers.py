"""
Telegram message and command handlers.

Thin adapters: Update -> event -> dispatcher -> reply. All conversation
logic lives in the dispatcher.
"""

from telegram import Bot, Update
from telegram.constants import ChatAction
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from chatbot.exceptions import FileLinkError
from .dispatcher import UpdateDispatcher
from .events import event_from_update
from .logging_config import bot_logger as logger

MAX_MESSAGE_LENGTH = 4096

DISPATCHER_KEY = "dispatcher"


async def resolve_file_link(bot: Bot, file_id: str) -> str:
    """Resolve a Telegram file id to its download URL."""
    try:
        file = await bot.get_file(file_id)
    except TelegramError as e:
        raise FileLinkError(str(e)) from e
    if not file.file_path:
        raise FileLinkError(f"no file_path for file_id={file_id}")
    return file.file_path


def split_message(text: str) -> list[str]:
    """Split long messages for Telegram's 4096 char limit."""
    if len(text) <= MAX_MESSAGE_LENGTH:
        return [text]

    chunks = []
    while text:
        if len(text) <= MAX_MESSAGE_LENGTH:
            chunks.append(text)
            break
        split_at = text.rfind("\n", 0, MAX_MESSAGE_LENGTH)
        if split_at <= 0:
            split_at = MAX_MESSAGE_LENGTH
        chunks.append(text[:split_at])
        text = text[split_at:].lstrip("\n")

    return chunks


async def handle_update(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /start, text, voice and photo messages.

    The reply is always sent, whether the dispatcher succeeded or returned
    its fixed failure text.
    """
    event = event_from_update(update)
    if event is None:
        logger.warning(f"Ignoring unsupported update {update.update_id}")
        return

    dispatcher: UpdateDispatcher = context.bot_data[DISPATCHER_KEY]

    # Typing indicator is cosmetic; the event is handled even if it fails
    try:
        await context.bot.send_chat_action(event.chat_id, ChatAction.TYPING)
    except TelegramError as e:
        logger.warning(f"Could not send typing action to chat {event.chat_id}: {e}")

    outcome = await dispatcher.handle(event)

    # Telegram rejects empty messages
    reply = outcome.reply if outcome.reply.strip() else "..."
    for chunk in split_message(reply):
        await update.effective_message.reply_text(chunk)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors that escaped a handler."""
    logger.error(f"Update {update} caused error: {context.error}", exc_info=context.error)
