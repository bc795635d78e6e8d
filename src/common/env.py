"""Environment configuration interface for qa-kit.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place. Pipeline components
never call these accessors themselves; the CLI reads them and passes the
values in.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def openai_api_key() -> str | None:
        """Get the bearer credential for the oracle API.

        Returns:
            API key, or None when OPENAI_API_KEY is unset or empty
        """
        return os.getenv("OPENAI_API_KEY") or None

    @staticmethod
    def openai_model() -> str:
        """Get the chat completion model name.

        Returns:
            Model name, defaults to 'gpt-4o-mini'
        """
        return os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    @staticmethod
    def openai_base_url() -> str:
        """Get the oracle API base URL.

        Returns:
            Base URL without trailing slash, defaults to the public OpenAI API
        """
        return os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")

    @staticmethod
    def openai_temperature() -> float:
        """Get the sampling temperature.

        Returns:
            Temperature, defaults to 0.3
        """
        return float(os.getenv("OPENAI_TEMPERATURE", "0.3"))

    @staticmethod
    def openai_timeout() -> float:
        """Get the per-request timeout in seconds.

        Returns:
            Timeout, defaults to 60
        """
        return float(os.getenv("OPENAI_TIMEOUT", "60"))

    @staticmethod
    def log_level() -> str:
        """Get the logging level.

        Returns:
            Upper-case level name, defaults to 'INFO'
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()


# Singleton instance for convenient access
env = Environment()
