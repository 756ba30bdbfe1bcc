"""
Tests for the in-memory session store.
"""

import pytest
from pydantic import ValidationError

from chatbot.schemas import Message, SessionKey
from chatbot.telegram_bot.context import SessionStore


class TestSessionStore:

    def test_created_lazily_and_empty(self):
        store = SessionStore()
        assert len(store) == 0
        assert store.get_or_create(1, 2) == []
        assert len(store) == 1

    def test_same_key_returns_same_list(self):
        store = SessionStore()
        first = store.get_or_create(1, 2)
        first.append(Message.user("hi"))
        assert store.get_or_create(1, 2) is first

    def test_append_preserves_order(self):
        store = SessionStore()
        key = SessionKey(1, 2)
        store.append(key, Message.user("a"))
        store.append(key, Message.assistant("b"))
        store.append(key, Message.user("c"))
        assert [m.content for m in store.get_or_create(1, 2)] == ["a", "b", "c"]

    def test_append_creates_session(self):
        store = SessionStore()
        store.append(SessionKey(7, 8), Message.user("first"))
        assert store.get_or_create(7, 8) == [Message.user("first")]

    def test_user_and_chat_both_part_of_key(self):
        store = SessionStore()
        store.append(SessionKey(1, 1), Message.user("x"))
        assert store.get_or_create(1, 2) == []
        assert store.get_or_create(2, 1) == []

    def test_no_size_cap(self):
        store = SessionStore()
        key = SessionKey(1, 1)
        for i in range(1000):
            store.append(key, Message.user(str(i)))
        assert len(store.get_or_create(1, 1)) == 1000


class TestMessage:

    def test_constructors(self):
        assert Message.system("s").role == "system"
        assert Message.user("u").role == "user"
        assert Message.assistant("a").role == "assistant"

    def test_serializes_to_api_shape(self):
        assert Message.user("hello").model_dump() == {"role": "user", "content": "hello"}

    def test_immutable(self):
        message = Message.user("hello")
        with pytest.raises(ValidationError):
            message.content = "changed"
        assert message.content == "hello"
