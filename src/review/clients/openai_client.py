"""OpenAI chat completions client used as the review oracle."""

from typing import Any

import requests

from common.env import Environment
from common.logger import get_logger

from .base import MissingCredentialError, OracleClient, OracleResponseError

logger = get_logger(__name__)


class OpenAIClient(OracleClient):
    """Client for an OpenAI-compatible chat completions API.

    Each call sends one user message and returns the first choice's content.
    There are no retries; a failed call raises OracleResponseError and the
    caller decides how to degrade.

    API Documentation: https://platform.openai.com/docs/api-reference/chat
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4o-mini",
        base_url: str = DEFAULT_BASE_URL,
        temperature: float = 0.3,
        timeout: float = 60,
    ):
        """Initialize the client.

        Args:
            api_key: Bearer credential; may be None, in which case every call
                     raises MissingCredentialError
            model: Chat model name
            base_url: API root, without the /chat/completions suffix
            temperature: Sampling temperature
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.model = model
        self.completions_url = f"{base_url.rstrip('/')}/chat/completions"
        self.temperature = temperature
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @classmethod
    def from_env(cls, environment: Environment) -> "OpenAIClient":
        """Build a client from environment configuration."""
        return cls(
            api_key=environment.openai_api_key(),
            model=environment.openai_model(),
            base_url=environment.openai_base_url(),
            temperature=environment.openai_temperature(),
            timeout=environment.openai_timeout(),
        )

    def complete(self, prompt: str) -> str:
        """Send a prompt and return the model's reply.

        Raises:
            MissingCredentialError: If no API key is configured
            OracleResponseError: If the request fails or the reply is malformed
        """
        if not self.api_key:
            raise MissingCredentialError("OPENAI_API_KEY environment variable not set")

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }

        try:
            logger.debug(f"Requesting completion from {self.model} ({len(prompt)} chars)")
            response = self.session.post(
                self.completions_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise OracleResponseError(f"Oracle request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise OracleResponseError(f"Oracle API error: {e}") from e
        except ValueError as e:
            raise OracleResponseError("Oracle returned a non-JSON response") from e

        return self._extract_content(data)

    def _extract_content(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise OracleResponseError("Oracle response has no message content") from e
        if not isinstance(content, str):
            raise OracleResponseError("Oracle message content is not text")
        return content
