"""
Main Telegram bot setup.

Uses python-telegram-bot library with long polling.
"""

from functools import partial

from openai import AsyncOpenAI
from telegram.ext import Application, CommandHandler, MessageHandler, filters

from chatbot.config import Settings
from chatbot.prompts import resolve_instructions
from chatbot.services import (
    FileDownloader,
    LLMClient,
    TranscriptionClient,
    VisionClient,
    create_openai_client,
)
from .context import SessionStore
from .dispatcher import UpdateDispatcher
from .handlers import DISPATCHER_KEY, handle_update, handle_error, resolve_file_link
from .logging_config import bot_logger as logger

OPENAI_CLIENT_KEY = "openai_client"
DOWNLOADER_KEY = "downloader"

# Only new messages; edits of earlier messages are not new turns
NEW_MESSAGE = filters.UpdateType.MESSAGE


def build_dispatcher(
    settings: Settings,
    client: AsyncOpenAI,
    downloader: FileDownloader,
    application: Application,
) -> UpdateDispatcher:
    """Wire the session store and API clients into a dispatcher."""
    return UpdateDispatcher(
        store=SessionStore(),
        llm=LLMClient.from_settings(client, settings),
        transcriber=TranscriptionClient.from_settings(client, downloader, settings),
        vision=VisionClient.from_settings(client, downloader, settings),
        resolve_file_link=partial(resolve_file_link, application.bot),
        instructions=resolve_instructions(settings),
    )


async def close_api_clients(application: Application) -> None:
    """Close HTTP clients on application shutdown."""
    client = application.bot_data.get(OPENAI_CLIENT_KEY)
    if client is not None:
        await client.close()
    downloader = application.bot_data.get(DOWNLOADER_KEY)
    if downloader is not None:
        await downloader.aclose()
    logger.info("Bot shut down")


def build_application(settings: Settings) -> Application:
    """Create the telegram bot application and register handlers."""

    # Each update runs as its own task
    application = (
        Application.builder()
        .token(settings.bot_token)
        .concurrent_updates(True)
        .post_shutdown(close_api_clients)
        .build()
    )

    client = create_openai_client(settings)
    downloader = FileDownloader.from_settings(settings)
    application.bot_data[OPENAI_CLIENT_KEY] = client
    application.bot_data[DOWNLOADER_KEY] = downloader
    application.bot_data[DISPATCHER_KEY] = build_dispatcher(settings, client, downloader, application)

    # Register handlers
    application.add_handler(CommandHandler("start", handle_update, filters=NEW_MESSAGE))

    # Voice messages
    application.add_handler(MessageHandler(filters.VOICE & NEW_MESSAGE, handle_update))

    # Photos
    application.add_handler(MessageHandler(filters.PHOTO & NEW_MESSAGE, handle_update))

    # Text messages; commands other than /start go to the model as text
    application.add_handler(MessageHandler(filters.TEXT & NEW_MESSAGE, handle_update))

    # Error handler
    application.add_error_handler(handle_error)

    logger.info("Telegram bot application initialized")

    return application
