"""Application services."""

from .orchestrator import ERROR_PLACEHOLDER, ReviewOrchestrator, get_orchestrator, reset_orchestrator

__all__ = [
    "ERROR_PLACEHOLDER",
    "ReviewOrchestrator",
    "get_orchestrator",
    "reset_orchestrator",
]
