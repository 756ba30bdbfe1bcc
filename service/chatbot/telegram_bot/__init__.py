"""
Telegram Bot module.

ARCHITECTURE: Thin routing layer over the dispatcher.
- handlers.py turns each Telegram update into an event
- dispatcher.py runs the event through the API clients and the session store
- handlers.py sends the resulting reply back to the chat

Sessions are kept in memory per (user, chat) for the lifetime of the process.
"""

from .bot import build_application
from .context import SessionStore
from .dispatcher import UpdateDispatcher
from .events import StartEvent, TextEvent, VoiceEvent, PhotoEvent, PhotoVariant, Outcome

__all__ = [
    "build_application",
    "SessionStore",
    "UpdateDispatcher",
    "StartEvent",
    "TextEvent",
    "VoiceEvent",
    "PhotoEvent",
    "PhotoVariant",
    "Outcome",
]
