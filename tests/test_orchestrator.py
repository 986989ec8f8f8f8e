from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from refactor_review.application import ERROR_PLACEHOLDER, ReviewOrchestrator
from refactor_review.core.languages import Language
from refactor_review.infrastructure import (
    ConfigurationError,
    MalformedResponseError,
    TransportError,
    reset_transform_client,
)


@pytest.fixture(autouse=True)
def unconfigured_transform_client():
    reset_transform_client()
    yield
    reset_transform_client()


def _kind(prompt: str) -> str:
    if "unit-test suite" in prompt:
        return "tests"
    if prompt.startswith("As a senior engineer, refactor"):
        return "refactor"
    return "review"


class ScriptedClient:
    """Answers each prompt kind with a fixed text or exception."""

    def __init__(self, **answers: object) -> None:
        self.answers = answers
        self.prompts: list[str] = []

    async def submit(self, prompt: str) -> str:
        self.prompts.append(prompt)
        answer = self.answers[_kind(prompt)]
        if isinstance(answer, BaseException):
            raise answer
        return str(answer)


class GatedClient:
    """Holds each call until the test releases its gate."""

    def __init__(self) -> None:
        self.prompts: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.answers: dict[str, str] = {}

    async def submit(self, prompt: str) -> str:
        self.prompts.append(prompt)
        kind = _kind(prompt)
        gate = self.gates.setdefault(kind, asyncio.Event())
        await gate.wait()
        return self.answers.get(kind, f"{kind} done")

    def release(self, kind: str, answer: str | None = None) -> None:
        if answer is not None:
            self.answers[kind] = answer
        self.gates.setdefault(kind, asyncio.Event()).set()


async def _settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


def test_review_refactor_scenario_updates_both_slots():
    client = ScriptedClient(review="Looks fine", refactor="def f():\n    return None")
    orchestrator = ReviewOrchestrator(client)
    orchestrator.on_code_changed("def f(): pass")
    orchestrator.on_language_changed("python")

    accepted = asyncio.run(orchestrator.request_review_refactor())

    assert accepted is True
    assert len(client.prompts) == 2
    for prompt in client.prompts:
        assert "Python" in prompt
        assert "def f(): pass" in prompt

    state = orchestrator.snapshot()
    assert state["reviewText"] == "Looks fine"
    assert state["refactorText"] == "def f():\n    return None"
    assert state["busy"] is False
    assert state["testText"] == ""


def test_failed_review_does_not_affect_refactor():
    client = ScriptedClient(review=TransportError("connection reset"), refactor="cleaned up")
    orchestrator = ReviewOrchestrator(client)

    asyncio.run(orchestrator.request_review_refactor())

    state = orchestrator.state
    assert state.review_text == ERROR_PLACEHOLDER
    assert state.refactor_text == "cleaned up"
    assert state.busy is False


def test_every_failure_kind_writes_placeholder_and_clears_busy():
    client = ScriptedClient(review=ConfigurationError("no key"), refactor=MalformedResponseError("empty"))
    orchestrator = ReviewOrchestrator(client)

    asyncio.run(orchestrator.request_review_refactor())

    state = orchestrator.state
    assert state.review_text == ERROR_PLACEHOLDER
    assert state.refactor_text == ERROR_PLACEHOLDER
    assert state.busy is False


def test_missing_credential_fills_every_triggered_slot():
    # no client injected: falls back to the process-wide unconfigured client
    orchestrator = ReviewOrchestrator()

    asyncio.run(orchestrator.request_review_refactor())
    asyncio.run(orchestrator.request_test_generation())

    state = orchestrator.state
    assert state.review_text == ERROR_PLACEHOLDER
    assert state.refactor_text == ERROR_PLACEHOLDER
    assert state.test_text == ERROR_PLACEHOLDER
    assert state.busy is False


def test_trigger_while_busy_is_a_no_op():
    client = GatedClient()
    orchestrator = ReviewOrchestrator(client)

    async def scenario() -> None:
        first = asyncio.create_task(orchestrator.request_review_refactor())
        await _settle()
        assert orchestrator.busy is True
        assert len(client.prompts) == 2

        assert await orchestrator.request_review_refactor() is False
        assert await orchestrator.request_test_generation() is False
        assert len(client.prompts) == 2
        assert orchestrator.busy is True

        client.release("review")
        client.release("refactor")
        assert await first is True

    asyncio.run(scenario())
    assert orchestrator.busy is False


def test_slots_update_independently_as_calls_complete():
    client = GatedClient()
    orchestrator = ReviewOrchestrator(client)

    async def scenario() -> None:
        action = asyncio.create_task(orchestrator.request_review_refactor())
        await _settle()

        client.release("refactor", "refactored first")
        await _settle()
        state = orchestrator.state
        assert state.refactor_text == "refactored first"
        assert state.review_text == ""
        assert state.busy is True

        client.release("review", "reviewed later")
        await action

    asyncio.run(scenario())
    state = orchestrator.state
    assert state.review_text == "reviewed later"
    assert state.busy is False


def test_in_flight_prompts_use_code_captured_at_trigger():
    client = GatedClient()
    orchestrator = ReviewOrchestrator(client)
    orchestrator.on_code_changed("print('before')")
    orchestrator.on_language_changed(Language.PYTHON)

    async def scenario() -> None:
        action = asyncio.create_task(orchestrator.request_review_refactor())
        await asyncio.sleep(0)
        orchestrator.on_code_changed("print('after')")
        orchestrator.on_language_changed(Language.GO)
        await _settle()
        client.release("review")
        client.release("refactor")
        await action

    asyncio.run(scenario())

    assert len(client.prompts) == 2
    for prompt in client.prompts:
        assert "print('before')" in prompt
        assert "print('after')" not in prompt
        assert "```python" in prompt
    assert orchestrator.state.code == "print('after')"


def test_generate_tests_is_idempotent_for_identical_inputs():
    client = ScriptedClient(tests="def test_f():\n    assert f() is None")
    orchestrator = ReviewOrchestrator(client)
    orchestrator.on_code_changed("def f(): pass")
    orchestrator.on_language_changed("python")

    asyncio.run(orchestrator.request_test_generation())
    first = orchestrator.state.test_text
    asyncio.run(orchestrator.request_test_generation())

    assert orchestrator.state.test_text == first == "def test_f():\n    assert f() is None"
    assert len(client.prompts) == 2
    assert client.prompts[0] == client.prompts[1]
    assert "pytest" in client.prompts[0]


def test_new_result_overwrites_previous_slot_value():
    client = ScriptedClient(review="first", refactor="first")
    orchestrator = ReviewOrchestrator(client)
    asyncio.run(orchestrator.request_review_refactor())

    client.answers.update(review=TransportError("down"), refactor="second")
    asyncio.run(orchestrator.request_review_refactor())

    state = orchestrator.state
    assert state.review_text == ERROR_PLACEHOLDER
    assert state.refactor_text == "second"


def test_subscribers_observe_busy_transitions_and_results():
    client = ScriptedClient(tests="generated")
    orchestrator = ReviewOrchestrator(client)
    seen = []
    unsubscribe = orchestrator.subscribe(seen.append)

    asyncio.run(orchestrator.request_test_generation())

    assert [state.busy for state in seen] == [True, True, False]
    assert seen[1].test_text == "generated"
    assert seen[-1].test_text == "generated"

    unsubscribe()
    orchestrator.on_code_changed("changed")
    assert len(seen) == 3


def test_unknown_language_is_rejected_and_keeps_selection():
    orchestrator = ReviewOrchestrator(ScriptedClient())

    with pytest.raises(ValueError):
        orchestrator.on_language_changed("cobol")

    assert orchestrator.state.language is Language.JAVASCRIPT


def test_unexpected_error_still_clears_busy_and_propagates():
    client = ScriptedClient(review=ZeroDivisionError("bug"), refactor="ok")
    orchestrator = ReviewOrchestrator(client)

    with pytest.raises(ZeroDivisionError):
        asyncio.run(orchestrator.request_review_refactor())

    state = orchestrator.state
    assert state.review_text == ERROR_PLACEHOLDER
    assert state.refactor_text == "ok"
    assert state.busy is False
