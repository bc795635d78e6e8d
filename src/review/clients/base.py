"""Abstract base class for oracle clients."""

from abc import ABC, abstractmethod


class OracleClient(ABC):
    """Base class for text-completion services used for ranking and adjudication.

    Implementations send a single prompt and return the model's reply text.
    """

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Send a prompt and return the reply.

        Args:
            prompt: Full prompt text

        Returns:
            Reply text exactly as produced by the model

        Raises:
            OracleError: If the request fails or the reply is unusable
            MissingCredentialError: If no credential is configured
        """
        pass


class OracleError(Exception):
    """Base exception for per-call oracle failures."""

    pass


class OracleResponseError(OracleError):
    """Oracle request failed or returned an unusable response."""

    pass


class MissingCredentialError(Exception):
    """No API credential is configured.

    Not an OracleError: it is a setup problem that must abort the run rather
    than degrade a single call.
    """

    pass
