"""Clients for the external text-understanding service."""

from .base import MissingCredentialError, OracleClient, OracleError, OracleResponseError
from .openai_client import OpenAIClient

__all__ = [
    "MissingCredentialError",
    "OpenAIClient",
    "OracleClient",
    "OracleError",
    "OracleResponseError",
]
