"""
Prompts and fixed reply texts for the chat bot.
"""

from chatbot.config import Settings


BOT_INSTRUCTIONS = """You are a friendly assistant in a Telegram chat.

Answer briefly and to the point, in the language the user writes in.
Users may send text, voice messages (you receive their transcript) and
pictures (you receive a description of the picture). Treat transcripts and
descriptions as if the user had typed them.

If you do not know something, say so instead of making it up."""


WELCOME_TEXT = "Welcome! Start chatting or enter a command."

# Fixed failure replies, one per event kind
VOICE_ERROR_TEXT = "An error occurred while recognizing the audio."
PHOTO_ERROR_TEXT = "An error occurred while analyzing the image."
TEXT_ERROR_TEXT = "An error occurred while processing your request."

VISION_QUESTION = "What is depicted in this picture?"

# Stored in the session after a photo is described
PHOTO_SESSION_TEMPLATE = "The user sent an image. Description: {description}"

# Sent to the model on top of the session to get the reply for a photo
PHOTO_PROMPT_TEMPLATE = "Describe this image: {description}"


def resolve_instructions(settings: Settings) -> str:
    """System instruction for this run: the configured override, else the default."""
    return settings.bot_instructions.strip() or BOT_INSTRUCTIONS
