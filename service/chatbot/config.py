from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Telegram
    bot_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("BOT_TOKEN", "TELEGRAM_BOT_TOKEN"),
    )

    # OpenAI
    openai_api_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("OPENAI_API_KEY"),
    )
    openai_base_url: str = "https://api.openai.com/v1"
    request_timeout: float = 60.0

    # Chat completion
    chat_model: str = "gpt-4o"
    chat_max_tokens: int = 1000
    chat_temperature: float = 0.1

    # Vision (same endpoint, multimodal content)
    vision_model: str = "gpt-4o"
    vision_max_tokens: int = 300

    # Whisper
    transcription_model: str = "whisper-1"

    # Optional: replaces the built-in system instruction
    bot_instructions: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
