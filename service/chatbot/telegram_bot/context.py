"""
Conversation history storage for the Telegram bot.

Simple in-memory dict keyed by (user id, chat id). Lives as long as the
process: no size cap, no expiry, no persistence. Concurrent updates for the
same key are not serialized; their appends may interleave.
"""

from typing import Dict, List

from chatbot.schemas import Message, SessionKey


class SessionStore:
    """In-memory session storage: SessionKey -> ordered list of messages."""

    def __init__(self):
        self._sessions: Dict[SessionKey, List[Message]] = {}

    def get_or_create(self, user_id: int, chat_id: int) -> List[Message]:
        """Get the message list for a user in a chat, creating it on first use."""
        key = SessionKey(user_id, chat_id)
        return self._sessions.setdefault(key, [])

    def append(self, key: SessionKey, message: Message) -> None:
        """Append a message to the end of a session."""
        self.get_or_create(key.user_id, key.chat_id).append(message)

    def __len__(self) -> int:
        return len(self._sessions)
