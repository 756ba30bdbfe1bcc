"""
Update dispatcher - one handler per inbound event kind.

Each handler runs its chain (resolve link, transcribe/describe, ask the
model, update the session) and returns an ``Outcome`` with the text to send.
Client errors are caught here, per event: the user gets a fixed message and
the bot stays available for the next update.
"""

import logging
from typing import Awaitable, Callable

from chatbot.exceptions import ChatBotError
from chatbot.prompts import (
    WELCOME_TEXT,
    VOICE_ERROR_TEXT,
    PHOTO_ERROR_TEXT,
    TEXT_ERROR_TEXT,
    PHOTO_SESSION_TEMPLATE,
    PHOTO_PROMPT_TEMPLATE,
)
from chatbot.schemas import Message
from chatbot.services.llm import LLMClient
from chatbot.services.transcription import TranscriptionClient
from chatbot.services.vision import VisionClient
from .context import SessionStore
from .events import AnyEvent, StartEvent, TextEvent, VoiceEvent, PhotoEvent, Outcome

logger = logging.getLogger(__name__)

# file_id -> download URL
FileLinkResolver = Callable[[str], Awaitable[str]]


class UpdateDispatcher:
    def __init__(
        self,
        store: SessionStore,
        llm: LLMClient,
        transcriber: TranscriptionClient,
        vision: VisionClient,
        resolve_file_link: FileLinkResolver,
        instructions: str,
    ):
        self.store = store
        self.llm = llm
        self.transcriber = transcriber
        self.vision = vision
        self.resolve_file_link = resolve_file_link
        self.instructions = instructions

    async def handle(self, event: AnyEvent) -> Outcome:
        """Route an event to its handler."""
        if isinstance(event, StartEvent):
            return await self.handle_start(event)
        if isinstance(event, VoiceEvent):
            return await self.handle_voice(event)
        if isinstance(event, PhotoEvent):
            return await self.handle_photo(event)
        if isinstance(event, TextEvent):
            return await self.handle_text(event)
        raise TypeError(f"Unsupported event: {type(event).__name__}")

    async def handle_start(self, event: StartEvent) -> Outcome:
        logger.info(f"User {event.user_id} started the bot")
        return Outcome(WELCOME_TEXT)

    async def handle_voice(self, event: VoiceEvent) -> Outcome:
        logger.info(f"User {event.user_id} sent a voice message")
        try:
            link = await self.resolve_file_link(event.file_id)
            text = await self.transcriber.transcribe(link)
            logger.debug(f"Transcript: {text}")
            reply = await self._converse(event, text)
        except ChatBotError as e:
            logger.error(f"Voice handling failed for user {event.user_id}: {e} ({e.detail})")
            return Outcome(VOICE_ERROR_TEXT, error=e)
        return Outcome(reply)

    async def handle_photo(self, event: PhotoEvent) -> Outcome:
        logger.info(f"User {event.user_id} sent an image ({len(event.photos)} sizes)")
        try:
            link = await self.resolve_file_link(event.largest.file_id)
            description = await self.vision.describe_image(link)
            logger.debug(f"Image description: {description}")

            messages = self.store.get_or_create(event.user_id, event.chat_id)
            self.store.append(event.key, Message.user(PHOTO_SESSION_TEMPLATE.format(description=description)))

            reply = await self.llm.complete(
                self.instructions,
                list(messages),
                PHOTO_PROMPT_TEMPLATE.format(description=description),
            )
            self.store.append(event.key, Message.assistant(reply))
        except ChatBotError as e:
            logger.error(f"Photo handling failed for user {event.user_id}: {e} ({e.detail})")
            return Outcome(PHOTO_ERROR_TEXT, error=e)
        return Outcome(reply)

    async def handle_text(self, event: TextEvent) -> Outcome:
        logger.info(f"User {event.user_id} sent a text message, text_len={len(event.text)}")
        try:
            reply = await self._converse(event, event.text)
        except ChatBotError as e:
            logger.error(f"Text handling failed for user {event.user_id}: {e} ({e.detail})")
            return Outcome(TEXT_ERROR_TEXT, error=e)
        logger.info(f"Replying to user {event.user_id}, reply_len={len(reply)}")
        return Outcome(reply)

    async def _converse(self, event: AnyEvent, text: str) -> str:
        """
        Store the user turn, ask the model, store the answer.

        The request is system + earlier history + the new turn, so the new
        turn is sent exactly once. If the model call fails the user turn
        stays in the session and no assistant turn is added.
        """
        messages = self.store.get_or_create(event.user_id, event.chat_id)
        history = list(messages)
        self.store.append(event.key, Message.user(text))

        reply = await self.llm.complete(self.instructions, history, text)
        self.store.append(event.key, Message.assistant(reply))
        return reply
