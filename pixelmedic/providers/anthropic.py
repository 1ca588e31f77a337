"""
Anthropic Claude Vision Provider

Implements the analysis request using Claude's vision capabilities.
"""

import asyncio

import anthropic

from ..errors import TransportFailure
from .base import IMAGE_MIME_TYPE, VisionProvider


class AnthropicProvider(VisionProvider):
    """
    Vision provider using Anthropic's Claude models.

    Example:
        provider = AnthropicProvider(api_key="sk-ant-...")
        text = await provider.generate(ANALYSIS_PROMPT, image_data)
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 4096
    ):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key (get from https://console.anthropic.com/)
            model: Claude model to use, must be vision-capable
            max_tokens: Reply budget; issue lists with code fixes run long
        """
        self.client = anthropic.Anthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "anthropic"

    def build_messages(self, prompt: str, image_base64: str) -> list[dict]:
        return [{
            "role": "user",
            "content": [
                {
                    "type": "text",
                    "text": prompt
                },
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": IMAGE_MIME_TYPE,
                        "data": image_base64
                    }
                }
            ]
        }]

    async def generate(self, prompt: str, image_base64: str) -> str:
        try:
            response = await asyncio.to_thread(
                self.client.messages.create,
                model=self.model,
                max_tokens=self.max_tokens,
                messages=self.build_messages(prompt, image_base64)
            )
        except anthropic.APIError as e:
            raise TransportFailure(f"Anthropic API error: {str(e)}") from e
        except Exception as e:
            raise TransportFailure(f"Anthropic request failed: {str(e)}") from e

        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
