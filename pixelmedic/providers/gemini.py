"""
Google Gemini Vision Provider

Default provider. Sends the screenshot as inline PNG data through the
google-genai SDK.
"""

import asyncio
import base64
import binascii

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..errors import TransportFailure
from .base import IMAGE_MIME_TYPE, VisionProvider


class GeminiProvider(VisionProvider):
    """
    Vision provider using Google's Gemini models.

    Example:
        provider = GeminiProvider(api_key="AIza...")
        text = await provider.generate(ANALYSIS_PROMPT, image_data)
    """

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key (get from https://aistudio.google.com/apikey)
            model: Gemini model to use (default: gemini-2.0-flash)
        """
        self.client = genai.Client(api_key=api_key)
        self.model = model

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "gemini"

    def build_contents(self, prompt: str, image_base64: str) -> list[types.Content]:
        """
        Build the single user turn: prompt text, then the inline image.

        Raises:
            TransportFailure: If the image data is not valid base64
        """
        try:
            image_bytes = base64.b64decode(image_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise TransportFailure(f"Image data is not valid base64: {e}") from e

        return [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=prompt),
                    types.Part.from_bytes(data=image_bytes, mime_type=IMAGE_MIME_TYPE),
                ],
            )
        ]

    async def generate(self, prompt: str, image_base64: str) -> str:
        contents = self.build_contents(prompt, image_base64)

        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=contents,
            )
        except genai_errors.APIError as e:
            raise TransportFailure(f"Gemini API error: {e.message or e}") from e
        except Exception as e:
            raise TransportFailure(f"Gemini request failed: {e}") from e

        return response.text or ""
