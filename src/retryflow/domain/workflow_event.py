"""Workflow execution trace models."""

from dataclasses import dataclass
from enum import Enum


class WorkflowEventType(str, Enum):
    """Types of workflow execution events."""

    RUN_START = "RUN_START"
    STEP_START = "STEP_START"
    STEP_PASS = "STEP_PASS"
    STEP_RETRY = "STEP_RETRY"
    STEP_FAIL = "STEP_FAIL"
    SEQUENCE_RETRY = "SEQUENCE_RETRY"
    BREAK = "BREAK"
    RUN_SUCCESS = "RUN_SUCCESS"
    RUN_FAIL = "RUN_FAIL"


@dataclass(frozen=True)
class WorkflowEvent:
    """Single workflow state transition.

    Represents an atomic event in the workflow execution trace,
    capturing state changes for observability and debugging.
    """

    event_id: str
    event_type: WorkflowEventType
    workflow_id: str
    step_name: str | None = None  # None for run-level events
    attempt: int | None = None
    summary: str = ""
    created_at: str = ""  # ISO 8601
