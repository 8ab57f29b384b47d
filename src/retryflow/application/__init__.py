"""
Application layer for the step-orchestration engine.

Contains the retry loops and orchestration logic that coordinate domain objects.
"""

from retryflow.application.action import WorkflowAction
from retryflow.application.adapter import run_to_result, to_result
from retryflow.application.config import WorkflowConfig
from retryflow.application.messages import MessagesReleaser, TryStepsExecutor
from retryflow.application.retry import retry, sleep, wait
from retryflow.application.workflow import Workflow
from retryflow.application.workflow_event_emitter import WorkflowEventEmitter

__all__ = [
    "MessagesReleaser",
    "TryStepsExecutor",
    "Workflow",
    "WorkflowAction",
    "WorkflowConfig",
    "WorkflowEventEmitter",
    "retry",
    "run_to_result",
    "sleep",
    "to_result",
    "wait",
]
