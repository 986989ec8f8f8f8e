"""Application service driving review, refactor and test generation requests."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable

from refactor_review.core.languages import Language
from refactor_review.core.prompts import OperationKind, PromptRequest
from refactor_review.domain import SessionState
from refactor_review.infrastructure import TransformClient, TransformError, get_transform_client

logger = logging.getLogger(__name__)

ERROR_PLACEHOLDER = "An error occurred while contacting the AI service."

Subscriber = Callable[[SessionState], None]


class ReviewOrchestrator:
    """Owns the session state and turns user intents into transform calls.

    Only one action runs at a time. While busy, further triggers are ignored
    and no calls are issued. Calls started by the same action run as
    independent tasks: each writes its own result slot as soon as it
    finishes, and a failure in one never touches the others.
    """

    def __init__(self, client: TransformClient | None = None, *, state: SessionState | None = None) -> None:
        self._client = client
        self._state = state or SessionState()
        self._subscribers: list[Subscriber] = []

    @property
    def client(self) -> TransformClient:
        return self._client if self._client is not None else get_transform_client()

    @property
    def state(self) -> SessionState:
        return self._state.copy()

    @property
    def busy(self) -> bool:
        return self._state.busy

    def snapshot(self) -> dict[str, object]:
        return self._state.to_dict()

    # ------------------------------------------------------------------
    # observers
    # ------------------------------------------------------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for state changes and return an unsubscribe function."""

        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self._state.copy()
        for callback in list(self._subscribers):
            callback(snapshot)

    # ------------------------------------------------------------------
    # user intents
    # ------------------------------------------------------------------
    def on_code_changed(self, text: str) -> None:
        self._state.code = text
        self._notify()

    def on_language_changed(self, language: Language | str) -> None:
        self._state.language = Language.parse(language)
        self._notify()

    async def request_review_refactor(self) -> bool:
        return await self._run((OperationKind.REVIEW, OperationKind.REFACTOR))

    async def request_test_generation(self) -> bool:
        return await self._run((OperationKind.GENERATE_TESTS,))

    # ------------------------------------------------------------------
    # execution
    # ------------------------------------------------------------------
    async def _run(self, operations: Iterable[OperationKind]) -> bool:
        if self._state.busy:
            logger.info("ignoring request while a previous action is still running")
            return False

        self._state.busy = True
        requests = [
            PromptRequest(operation=operation, language=self._state.language, source_text=self._state.code)
            for operation in operations
        ]
        try:
            self._notify()
            tasks = [asyncio.create_task(self._execute(request)) for request in requests]
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            self._state.busy = False
            self._notify()

        for outcome in outcomes:
            if isinstance(outcome, Exception):
                raise outcome
        return True

    async def _execute(self, request: PromptRequest) -> None:
        operation = request.operation.value
        client = self.client
        logger.info("requesting %s for %s code", operation, request.language.display_name)
        try:
            text = await client.submit(request.render())
        except TransformError as exc:
            logger.error("%s request failed: %s", operation, exc)
            self._state.set_result(request.operation, ERROR_PLACEHOLDER)
            self._notify()
            return
        except Exception:
            logger.exception("unexpected failure during %s request", operation)
            self._state.set_result(request.operation, ERROR_PLACEHOLDER)
            self._notify()
            raise

        self._state.set_result(request.operation, text)
        logger.info("%s completed (%d characters)", operation, len(text))
        self._notify()


_orchestrator = ReviewOrchestrator()


def get_orchestrator() -> ReviewOrchestrator:
    """Return the singleton orchestrator for the process."""

    return _orchestrator


def reset_orchestrator(client: TransformClient | None = None) -> None:
    """Replace the orchestrator with a fresh one (used in tests)."""

    global _orchestrator
    _orchestrator = ReviewOrchestrator(client)
