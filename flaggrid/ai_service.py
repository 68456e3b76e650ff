"""
AI service for grid recognition using Google GenAI SDK.
"""
import functools
import logging

from django.conf import settings
from google import genai
from google.genai import types

from .exceptions import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

MODEL_NAME = 'gemini-2.5-pro'
DEFAULT_TIMEOUT_SECONDS = 120


class GeminiRecognizer:
    """
    Sends one image and one instruction to Gemini and returns its text.

    The credential is passed in rather than read from the environment, and
    ``client`` may be any object exposing ``models.generate_content``.
    """

    def __init__(self, api_key: str, model: str = MODEL_NAME,
                 timeout: float = DEFAULT_TIMEOUT_SECONDS, client=None):
        if not api_key and client is None:
            raise ConfigurationError('A Gemini API key is required')
        self.model = model
        if client is None:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout * 1000)),
            )
        self._client = client

    def recognize(self, image_data: bytes, mime_type: str, instruction: str) -> str:
        """
        Run the instruction against the image.

        Args:
            image_data: Raw image bytes.
            mime_type: MIME type of the image.
            instruction: Prompt text sent alongside the image.

        Returns:
            The model's text, unmodified.

        Raises:
            UpstreamError: if the call fails or returns no text.
        """
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image_data, mime_type=mime_type),
                    instruction
                ],
                config=types.GenerateContentConfig(
                    temperature=0.1,
                )
            )
        except Exception as e:
            raise UpstreamError(f"Gemini API error: {e}") from e

        text = getattr(response, 'text', None)
        if not text:
            raise UpstreamError('Gemini returned an empty response')
        return text


@functools.lru_cache(maxsize=None)
def get_recognizer() -> GeminiRecognizer:
    """Return the process-wide recognizer built from settings."""
    logger.info(f"Creating Gemini recognizer for model {settings.GEMINI_MODEL}")
    return GeminiRecognizer(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
    )
