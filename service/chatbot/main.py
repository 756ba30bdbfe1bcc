import sys

from pydantic import ValidationError

from chatbot.config import get_settings
from chatbot.telegram_bot.bot import build_application
from chatbot.telegram_bot.logging_config import bot_logger as logger


def main() -> None:
    """Start the bot with long polling."""
    try:
        settings = get_settings()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors() if err.get("loc"))
        logger.error(f"[STARTUP] BOT_TOKEN and OPENAI_API_KEY must be set (env or .env). Invalid: {missing}")
        sys.exit(1)

    logger.info("[STARTUP] Initializing Telegram bot...")
    application = build_application(settings)

    logger.info("[STARTUP] Bot ready, polling for updates")
    application.run_polling()


if __name__ == "__main__":
    main()
