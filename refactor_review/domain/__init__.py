"""Domain layer definitions."""

from .session import DEFAULT_CODE, SessionState

__all__ = [
    "DEFAULT_CODE",
    "SessionState",
]
