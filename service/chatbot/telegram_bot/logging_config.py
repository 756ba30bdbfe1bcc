"""
Logging configuration for the chat bot.
"""

import logging
import sys

LOG_FORMAT = '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Setup console logging for the bot and its API clients."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    # Package logger: chatbot.* modules log through it
    logger = logging.getLogger("chatbot")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    # httpx logs every request URL at INFO, which includes the bot token
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger


# Global logger instance
bot_logger = setup_logging()
