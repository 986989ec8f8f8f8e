"""Contract for the AI transform client used by the orchestrator.

The orchestrator only needs ``submit(prompt) -> text``. The process-wide
client is installed during application start-up with
``configure_transform_client``; until then every submit fails with
:class:`ConfigurationError` so a missing credential shows up as an error in
the UI instead of crashing the service.
"""
from __future__ import annotations

from typing import Protocol


class TransformError(RuntimeError):
    """Base class for failures while obtaining generated text."""


class ConfigurationError(TransformError):
    """Raised when the client has no credential to authenticate with."""


class TransportError(TransformError):
    """Raised when the HTTP call fails or the endpoint answers with an error status."""


class MalformedResponseError(TransformError):
    """Raised when the response lacks the candidate/content/part structure."""


class TransformClient(Protocol):
    """Anything able to turn a prompt into generated text."""

    async def submit(self, prompt: str) -> str:
        """Send ``prompt`` and return the first generated text candidate."""


class UnconfiguredTransformClient:
    """Fallback used when no API key was supplied."""

    async def submit(self, prompt: str) -> str:
        raise ConfigurationError("GEMINI_API_KEY is not configured")


_client: TransformClient = UnconfiguredTransformClient()


def configure_transform_client(client: TransformClient) -> None:
    """Install the transform client used by the orchestrator."""

    global _client
    _client = client


def get_transform_client() -> TransformClient:
    """Return the currently configured transform client."""

    return _client


def reset_transform_client() -> None:
    configure_transform_client(UnconfiguredTransformClient())
