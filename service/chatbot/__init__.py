"""Telegram chat bot backed by the OpenAI chat-completion and Whisper APIs."""

__version__ = "0.1.0"
