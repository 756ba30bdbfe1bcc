from .openai_client import FileDownloader, create_openai_client
from .llm import LLMClient
from .transcription import TranscriptionClient
from .vision import VisionClient

__all__ = [
    "FileDownloader",
    "create_openai_client",
    "LLMClient",
    "TranscriptionClient",
    "VisionClient",
]
