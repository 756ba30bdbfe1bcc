"""
Errors raised at the API client boundary.

Each client collapses transport failures, upstream error payloads and empty
results into one component error. The technical cause is kept in ``detail``
for logging; ``str(error)`` is the generic message.
"""

from typing import Optional


class ChatBotError(Exception):
    default_message = "Chat bot error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(self.default_message)
        self.detail = detail


class LLMRequestError(ChatBotError):
    default_message = "Request to language-model API failed"


class TranscriptionError(ChatBotError):
    default_message = "Audio transcription failed"


class ImageAnalysisError(ChatBotError):
    default_message = "Image analysis failed"


class FileLinkError(ChatBotError):
    default_message = "Could not resolve attachment link"
