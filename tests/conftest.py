"""Shared pytest fixtures for retryflow tests."""

from collections.abc import Callable
from typing import Any

import pytest

from retryflow.application.workflow import Workflow
from retryflow.domain.context import RunContext
from retryflow.domain.models import RunState
from retryflow.infrastructure.persistence.workflow_events import (
    InMemoryWorkflowEventStore,
)


class Flaky:
    """Async step body failing a fixed number of times before succeeding."""

    def __init__(self, failures: int, value: Any = "ok", error: type = RuntimeError):
        self.failures = failures
        self.value = value
        self.error = error
        self.calls = 0
        self.attempts_seen: list[int] = []

    async def __call__(self, context: RunContext) -> Any:
        self.calls += 1
        self.attempts_seen.append(context.attempt)
        if self.calls <= self.failures:
            raise self.error(f"failure {self.calls}")
        return self.value


class Recorder:
    """Async hook recording every call's arguments."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    async def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def flaky() -> Callable[..., Flaky]:
    """Factory for step bodies that fail N times, then return a value."""
    return Flaky


@pytest.fixture
def recorder() -> Callable[[], Recorder]:
    """Factory for hooks that record their calls."""
    return Recorder


@pytest.fixture
def event_store() -> InMemoryWorkflowEventStore:
    """Create an in-memory workflow event store."""
    return InMemoryWorkflowEventStore()


@pytest.fixture
def workflow() -> Workflow:
    """Single-attempt workflow with no steps."""
    return Workflow(workflow_id="wf-test")


@pytest.fixture
def run_context(workflow: Workflow) -> RunContext:
    """A RunContext bound to the default workflow fixture."""
    return RunContext(workflow, RunState())
