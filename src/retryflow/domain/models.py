"""
Domain models for the step-orchestration engine.

Results are kept in a dual-indexed store: every write is preserved by
position, while lookups by name see the last write.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from retryflow.domain.exceptions import BreakSignal, WorkflowConfigError

# =============================================================================
# RESULT STORE
# =============================================================================


class ResultStore:
    """Ordered ``(name, value)`` pairs plus a name -> last value index."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, Any]] = []
        self._by_name: dict[str, Any] = {}

    def add(self, name: str, value: Any) -> None:
        self._entries.append((name, value))
        self._by_name[name] = value

    def get(self, name: str) -> Any:
        if name not in self._by_name:
            raise KeyError(f'No result available with name "{name}"')
        return self._by_name[name]

    def has(self, name: str) -> bool:
        return name in self._by_name

    def last(self) -> Any:
        if not self._entries:
            raise LookupError("No results available")
        return self._entries[-1][1]

    @property
    def values(self) -> list[Any]:
        return [value for _, value in self._entries]

    @property
    def by_name(self) -> dict[str, Any]:
        return dict(self._by_name)

    @property
    def entries(self) -> list[tuple[str, Any]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# WORKFLOW STATUS
# =============================================================================


class WorkflowStatus(Enum):
    """Lifecycle of a workflow run."""

    IDLE = "idle"  # Never run
    RUNNING = "running"
    SUCCEEDED = "succeeded"  # All steps completed
    BROKEN = "broken"  # break_() was called; terminal, never retried
    FAILED = "failed"  # Sequence attempts exhausted


@dataclass
class RunState:
    """Mutable break/status record scoped to a single ``run()`` call."""

    status: WorkflowStatus = WorkflowStatus.IDLE
    broken: bool = False
    break_reason: Any = None

    def record_break(self, reason: Any) -> None:
        self.broken = True
        self.break_reason = reason


# =============================================================================
# HOOK / ATTEMPT OUTCOME
# =============================================================================


class OutcomeKind(Enum):
    """Tag of an invocation outcome."""

    OK = "ok"
    RETRYABLE = "retryable"  # Ordinary error, subject to retry policy
    BREAK = "break"  # Abort the run, never retried


@dataclass(frozen=True)
class Outcome:
    """Tagged result of invoking a step body or a hook."""

    kind: OutcomeKind
    value: Any = None  # Return value for OK
    error: BaseException | None = None  # Raised error (or break signal)
    reason: Any = None  # Break reason for BREAK

    @classmethod
    def ok(cls, value: Any = None) -> "Outcome":
        return cls(OutcomeKind.OK, value=value)

    @classmethod
    def retryable(cls, error: BaseException) -> "Outcome":
        return cls(OutcomeKind.RETRYABLE, error=error)

    @classmethod
    def broken(cls, reason: Any, signal: BaseException | None = None) -> "Outcome":
        return cls(OutcomeKind.BREAK, error=signal, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @property
    def is_break(self) -> bool:
        return self.kind is OutcomeKind.BREAK

    def raised(self) -> BaseException:
        """
        The error to propagate for a RETRYABLE or BREAK outcome.

        A break recorded without a signal (a failed hook) gets a fresh one.

        Raises:
            ValueError: For an OK outcome, which carries no error
        """
        if self.error is not None:
            return self.error
        if self.kind is OutcomeKind.BREAK:
            return BreakSignal(self.reason)
        raise ValueError(f"{self.kind.value} outcome carries no error")


# =============================================================================
# RETRY POLICY
# =============================================================================


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and inter-attempt delay (seconds) for one retry loop."""

    attempts: int = 1
    delay: float = 0.0  # < 0 skips waiting, 0 yields to the event loop

    def __post_init__(self) -> None:
        if isinstance(self.attempts, bool) or not isinstance(self.attempts, int):
            raise WorkflowConfigError(
                f"attempts must be an integer, got {type(self.attempts).__name__}"
            )
        if self.attempts < 1:
            raise WorkflowConfigError(f"attempts must be >= 1, got {self.attempts}")


# =============================================================================
# WORKFLOW RESULT
# =============================================================================


def reasons_equal(first: Any, second: Any) -> bool:
    """Compare failure reasons: exceptions by message, strings by value."""
    if isinstance(first, BaseException) and isinstance(second, BaseException):
        return str(first) == str(second)
    if isinstance(first, str) and isinstance(second, str):
        return first == second
    try:
        return json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)
    except (TypeError, ValueError):
        return str(first) == str(second)


class WorkflowResult:
    """
    Results of the sequence iteration that succeeded.

    Rebuilt from empty on every sequence-level attempt, so results written
    during failed attempts are not visible here (they remain visible on the
    RunContext).

    The failure ledger is API surface only: the engine does not populate it.
    """

    def __init__(self, attempt: int = 1) -> None:
        """
        Args:
            attempt: Sequence-level attempt that produced these results
        """
        self.attempt = attempt
        self._store = ResultStore()
        self._failures: dict[str, dict[int, Any]] = {}

    def __repr__(self) -> str:
        return f"WorkflowResult(attempt={self.attempt}, results={self._store.by_name!r})"

    # -- results -------------------------------------------------------------

    def add_result(self, name: str, result: Any) -> None:
        self._store.add(name, result)

    def get_result(self, name: str) -> Any:
        """
        Raises:
            KeyError: If no step with this name produced a result
        """
        return self._store.get(name)

    def get_last_result(self) -> Any:
        """
        Raises:
            LookupError: If no step produced a result
        """
        return self._store.last()

    @property
    def results(self) -> list[Any]:
        return self._store.values

    @property
    def results_by_name(self) -> dict[str, Any]:
        return self._store.by_name

    @property
    def result_count(self) -> int:
        return len(self._store)

    # -- failure ledger ------------------------------------------------------

    def add_failure(self, name: str, attempt: int, reason: Any) -> None:
        self._failures.setdefault(name, {})[attempt] = reason

    def get_failures(self, name: str) -> dict[int, Any]:
        return dict(self._failures.get(name, {}))

    def get_all_failures(self) -> dict[str, dict[int, Any]]:
        return {name: dict(by_attempt) for name, by_attempt in self._failures.items()}

    def has_failure(self, name: str, attempt: int) -> bool:
        return attempt in self._failures.get(name, {})

    def get_failure(self, name: str, attempt: int) -> Any:
        return self._failures.get(name, {}).get(attempt)

    def get_failure_attempts(self, name: str) -> list[int]:
        return list(self._failures.get(name, {}))

    def get_failed_steps(self) -> list[str]:
        return list(self._failures)

    def get_steps_failed_with_reason(self, reason: Any) -> list[str]:
        """Names of steps with at least one failure equal to ``reason``."""
        return [
            name
            for name, by_attempt in self._failures.items()
            if any(reasons_equal(failure, reason) for failure in by_attempt.values())
        ]


# =============================================================================
# ADAPTER RESULT
# =============================================================================


@dataclass(frozen=True)
class FunctionReturn:
    """Value handed back to the agent host by an adapter function."""

    success: bool
    data: str
