"""
OpenAI Vision Provider

Implements the analysis request using OpenAI's vision-capable chat models.
"""

import asyncio

import openai

from ..errors import TransportFailure
from .base import IMAGE_MIME_TYPE, VisionProvider


class OpenAIProvider(VisionProvider):
    """
    Vision provider using OpenAI's gpt-4o family.

    OpenAI takes inline images as data URLs, so the PNG prefix is added
    back here after the client stripped it.

    Example:
        provider = OpenAIProvider(api_key="sk-...")
        text = await provider.generate(ANALYSIS_PROMPT, image_data)
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o"
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (get from https://platform.openai.com/api-keys)
            model: OpenAI model to use, must be vision-capable
        """
        self.client = openai.OpenAI(api_key=api_key)
        self.model = model

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "openai"

    def build_messages(self, prompt: str, image_base64: str) -> list[dict]:
        return [{
            "role": "user",
            "content": [
                {
                    "type": "text",
                    "text": prompt
                },
                {
                    "type": "image_url",
                    "image_url": {
                        "url": f"data:{IMAGE_MIME_TYPE};base64,{image_base64}",
                        "detail": "high"
                    }
                }
            ]
        }]

    async def generate(self, prompt: str, image_base64: str) -> str:
        try:
            response = await asyncio.to_thread(
                self.client.chat.completions.create,
                model=self.model,
                messages=self.build_messages(prompt, image_base64),
                max_tokens=4096,
                temperature=0.3  # Lower temperature for more consistent output
            )
        except openai.APIError as e:
            raise TransportFailure(f"OpenAI API error: {str(e)}") from e
        except Exception as e:
            raise TransportFailure(f"OpenAI request failed: {str(e)}") from e

        return response.choices[0].message.content or ""
