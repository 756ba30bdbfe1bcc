"""
Inbound chat events and handler outcomes.

Handlers turn a python-telegram-bot ``Update`` into one of these plain
values, so the dispatcher can be driven without a live Telegram connection.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from telegram import Update

from chatbot.schemas import SessionKey


@dataclass(frozen=True)
class ChatEvent:
    user_id: int
    chat_id: int

    @property
    def key(self) -> SessionKey:
        return SessionKey(self.user_id, self.chat_id)


@dataclass(frozen=True)
class StartEvent(ChatEvent):
    pass


@dataclass(frozen=True)
class TextEvent(ChatEvent):
    text: str


@dataclass(frozen=True)
class VoiceEvent(ChatEvent):
    file_id: str


@dataclass(frozen=True)
class PhotoVariant:
    file_id: str
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class PhotoEvent(ChatEvent):
    # Telegram lists sizes from smallest to largest
    photos: Tuple[PhotoVariant, ...]

    @property
    def largest(self) -> PhotoVariant:
        return self.photos[-1]


AnyEvent = Union[StartEvent, TextEvent, VoiceEvent, PhotoEvent]


@dataclass
class Outcome:
    """Result of handling one event: the text to send back, and the error if any."""
    reply: str
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def event_from_update(update: Update) -> Optional[AnyEvent]:
    """
    Convert a Telegram update into an event.

    Returns None for updates this bot does not handle.
    """
    message = update.effective_message
    user = update.effective_user
    chat = update.effective_chat
    if message is None or user is None or chat is None:
        return None

    ids = {"user_id": user.id, "chat_id": chat.id}

    if message.voice:
        return VoiceEvent(file_id=message.voice.file_id, **ids)

    if message.photo:
        photos = tuple(
            PhotoVariant(file_id=p.file_id, width=p.width, height=p.height)
            for p in message.photo
        )
        return PhotoEvent(photos=photos, **ids)

    if message.text is not None:
        if is_start_command(message.text):
            return StartEvent(**ids)
        return TextEvent(text=message.text, **ids)

    return None


def is_start_command(text: str) -> bool:
    """True for "/start", "/start payload" and "/start@BotName"."""
    words = text.split(maxsplit=1)
    if not words:
        return False
    return words[0].split("@", 1)[0] == "/start"
