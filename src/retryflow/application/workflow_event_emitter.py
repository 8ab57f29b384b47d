"""Workflow event emission service."""

import uuid
from datetime import datetime, timezone
from typing import Any

from retryflow.domain.interfaces import WorkflowEventStoreInterface
from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType

SUMMARY_LIMIT = 500


def describe(value: Any) -> str:
    """Short human-readable form of an error or break reason."""
    if isinstance(value, BaseException):
        text = f"{type(value).__name__}: {value}"
    else:
        text = str(value)
    return text[:SUMMARY_LIMIT]


class WorkflowEventEmitter:
    """Emits workflow events to a store.

    Provides convenience methods for emitting common workflow events
    during execution, handling ID generation and timestamps.
    """

    def __init__(
        self, event_store: WorkflowEventStoreInterface, workflow_id: str
    ) -> None:
        self._store = event_store
        self._workflow_id = workflow_id

    @property
    def workflow_id(self) -> str:
        return self._workflow_id

    def _emit(
        self,
        event_type: WorkflowEventType,
        step_name: str | None = None,
        attempt: int | None = None,
        summary: str = "",
    ) -> str:
        return self._store.store_event(
            WorkflowEvent(
                event_id=str(uuid.uuid4()),
                event_type=event_type,
                workflow_id=self._workflow_id,
                step_name=step_name,
                attempt=attempt,
                summary=summary,
                created_at=self._now(),
            )
        )

    def _now(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def run_start(self, step_count: int) -> None:
        """Emit RUN_START event when a run begins."""
        self._emit(WorkflowEventType.RUN_START, summary=f"{step_count} steps")

    def step_start(self, step_name: str, attempt: int) -> None:
        """Emit STEP_START event before each step attempt."""
        self._emit(WorkflowEventType.STEP_START, step_name, attempt)

    def step_pass(self, step_name: str, attempt: int) -> None:
        """Emit STEP_PASS event when a step attempt succeeds."""
        self._emit(WorkflowEventType.STEP_PASS, step_name, attempt)

    def step_retry(self, step_name: str, attempt: int, error: BaseException) -> None:
        """Emit STEP_RETRY event when a failed step attempt will be retried."""
        self._emit(WorkflowEventType.STEP_RETRY, step_name, attempt, describe(error))

    def step_fail(self, step_name: str, attempt: int, error: BaseException) -> None:
        """Emit STEP_FAIL event when a step exhausts its attempts."""
        self._emit(WorkflowEventType.STEP_FAIL, step_name, attempt, describe(error))

    def sequence_retry(self, attempt: int, error: BaseException) -> None:
        """Emit SEQUENCE_RETRY event when the whole sequence will be re-run."""
        self._emit(
            WorkflowEventType.SEQUENCE_RETRY, attempt=attempt, summary=describe(error)
        )

    def broken(self, step_name: str | None, reason: Any) -> None:
        """Emit BREAK event when the run is aborted."""
        self._emit(WorkflowEventType.BREAK, step_name, summary=describe(reason))

    def run_success(self, attempt: int) -> None:
        """Emit RUN_SUCCESS event when every step completed."""
        self._emit(WorkflowEventType.RUN_SUCCESS, attempt=attempt)

    def run_fail(self, attempt: int, error: BaseException) -> None:
        """Emit RUN_FAIL event when the sequence exhausts its attempts."""
        self._emit(WorkflowEventType.RUN_FAIL, attempt=attempt, summary=describe(error))
