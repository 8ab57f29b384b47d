"""
Domain layer for the step-orchestration engine.

Contains core models and rules with no external dependencies.
"""

from retryflow.domain.context import RunContext
from retryflow.domain.exceptions import (
    BreakSignal,
    RetryflowError,
    WorkflowConfigError,
    WorkflowInterrupted,
)
from retryflow.domain.interfaces import (
    WorkflowEventStoreInterface,
    WorkflowInterface,
)
from retryflow.domain.models import (
    FunctionReturn,
    Outcome,
    OutcomeKind,
    ResultStore,
    RetryPolicy,
    RunState,
    WorkflowResult,
    WorkflowStatus,
)
from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType

__all__ = [
    # Models
    "FunctionReturn",
    "Outcome",
    "OutcomeKind",
    "ResultStore",
    "RetryPolicy",
    "RunContext",
    "RunState",
    "WorkflowResult",
    "WorkflowStatus",
    # Events
    "WorkflowEvent",
    "WorkflowEventType",
    # Interfaces
    "WorkflowInterface",
    "WorkflowEventStoreInterface",
    # Exceptions
    "BreakSignal",
    "RetryflowError",
    "WorkflowConfigError",
    "WorkflowInterrupted",
]
