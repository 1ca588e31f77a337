"""
Vision Provider Implementations

Pluggable vision model providers following a common interface.
Supports Google Gemini (default), Anthropic Claude and OpenAI.
"""

from typing import Optional

from .base import ANALYSIS_PROMPT, IMAGE_MIME_TYPE, VisionProvider
from .gemini import GeminiProvider
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider

__all__ = [
    "ANALYSIS_PROMPT",
    "IMAGE_MIME_TYPE",
    "VisionProvider",
    "GeminiProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "get_provider",
]

_PROVIDERS = {
    "gemini": GeminiProvider,
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(provider_name: str, api_key: str, model: Optional[str] = None) -> VisionProvider:
    """
    Factory function to get a vision provider for a credential.

    Args:
        provider_name: One of "gemini", "anthropic" or "openai"
        api_key: Credential for that provider
        model: Optional model override, provider default otherwise

    Returns:
        Configured vision provider instance

    Raises:
        ValueError: If provider name is unknown

    Example:
        provider = get_provider("gemini", store.credential)
        text = await provider.generate(ANALYSIS_PROMPT, image_data)
    """
    try:
        provider_cls = _PROVIDERS[provider_name]
    except KeyError:
        raise ValueError(
            f"Unknown provider: {provider_name}. "
            f"Choose from: {', '.join(_PROVIDERS)}"
        ) from None

    if model:
        return provider_cls(api_key=api_key, model=model)
    return provider_cls(api_key=api_key)
