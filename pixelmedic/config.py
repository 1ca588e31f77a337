"""
Configuration Management

Loads configuration from .env files and provides typed config objects.
Handles API keys, provider selection and the credentials file location.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models import Config


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from .env file and environment variables.

    Searches for .env file in:
    1. Provided env_file path
    2. Current directory
    3. User's home directory

    Environment variables override .env file values.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with all settings

    Example:
        config = load_config()
        key = config.api_key_for(config.vision_provider)
    """
    if env_file and env_file.exists():
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(".env")
    elif (Path.home() / ".env").exists():
        load_dotenv(Path.home() / ".env")

    config = Config(
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        vision_provider=os.getenv("VISION_PROVIDER", "gemini"),
        model=os.getenv("PIXELMEDIC_MODEL") or None,
        credentials_file=os.getenv("PIXELMEDIC_CREDENTIALS_FILE") or None,
    )

    return config
