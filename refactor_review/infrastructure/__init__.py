"""Infrastructure layer exports."""

from .gemini import GeminiTransformClient
from .transform import (
    ConfigurationError,
    MalformedResponseError,
    TransformClient,
    TransformError,
    TransportError,
    configure_transform_client,
    get_transform_client,
    reset_transform_client,
)

__all__ = [
    "ConfigurationError",
    "GeminiTransformClient",
    "MalformedResponseError",
    "TransformClient",
    "TransformError",
    "TransportError",
    "configure_transform_client",
    "get_transform_client",
    "reset_transform_client",
]
