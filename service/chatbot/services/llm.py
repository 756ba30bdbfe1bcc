import logging
from typing import Any, Sequence, Type

import httpx
import openai
from openai import AsyncOpenAI

from chatbot.config import Settings
from chatbot.exceptions import ChatBotError, LLMRequestError
from chatbot.schemas import Message

logger = logging.getLogger(__name__)

# Errors the SDK and the downloader raise for transport, status and decoding failures
CLIENT_ERRORS = (openai.OpenAIError, httpx.HTTPError, ValueError)


def describe_client_error(error: Exception) -> str:
    """One-line description of a transport/status/decoding failure for logs."""
    if isinstance(error, openai.APIStatusError):
        return f"HTTP {error.status_code}: {error.message}"
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}: {error.response.text[:500]}"
    return f"{type(error).__name__}: {error}"


def response_error_message(response: Any) -> str | None:
    """
    Message of an ``error`` object carried in a successful response body.

    The SDK keeps unknown fields as extras, so ``error`` is a plain dict here.
    """
    error = getattr(response, "error", None)
    if not error:
        return None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(getattr(error, "message", None) or error)


def extract_choice_text(response: Any, error_cls: Type[ChatBotError]) -> str:
    """
    Pull the assistant text out of a chat-completion response.

    Returns the trimmed content of the first choice. An ``error`` object,
    an empty ``choices`` list or a choice without text content raise
    ``error_cls``.
    """
    choices = getattr(response, "choices", None) or []
    if choices:
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise error_cls("first choice has no text content")
        return content.strip()

    message = response_error_message(response)
    if message:
        raise error_cls(f"API error: {message}")

    raise error_cls("empty response: no choices")


class LLMClient:
    """Chat-completion client: system instruction + history + new user content."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4o",
        max_tokens: int = 1000,
        temperature: float = 0.1,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, client: AsyncOpenAI, settings: Settings) -> "LLMClient":
        return cls(
            client,
            model=settings.chat_model,
            max_tokens=settings.chat_max_tokens,
            temperature=settings.chat_temperature,
        )

    def build_messages(self, system_instruction: str, history: Sequence[Message], new_content: str) -> list[dict]:
        messages = [Message.system(system_instruction)]
        messages.extend(history)
        messages.append(Message.user(new_content))
        return [m.model_dump() for m in messages]

    async def complete(self, system_instruction: str, history: Sequence[Message], new_content: str) -> str:
        """
        Ask the model for the next assistant turn.

        Args:
            system_instruction: Always sent first, never part of history
            history: Session messages, in order
            new_content: The new user message

        Returns:
            Trimmed assistant text

        Raises:
            LLMRequestError: on any failure; nothing is retried
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(system_instruction, history, new_content),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except CLIENT_ERRORS as e:
            detail = describe_client_error(e)
            logger.error(f"Chat completion request failed: {detail}")
            raise LLMRequestError(detail) from e

        logger.debug(f"Chat completion response: {response}")

        try:
            return extract_choice_text(response, LLMRequestError)
        except LLMRequestError as e:
            logger.error(f"Chat completion returned no usable answer: {e.detail}")
            raise
