"""
retryflow: step orchestration for adapter SDKs.

Runs an ordered sequence of named, independently retryable async steps
against a shared context, with a sequence-level retry layer, a break signal
that outruns both retry loops, and lifecycle hooks at both levels.

Example:
    from retryflow import Workflow

    async def quote(context):
        return await client.get_quote()

    async def submit(context):
        quote = context.get_result("quote")
        if quote.expired:
            context.workflow.break_("Quote expired")
        return await client.submit(quote)

    workflow = Workflow(attempts=2)
    workflow.add_step("quote", quote, attempts=3, delay=1.0)
    workflow.add_step("submit", submit)
    result = await workflow.run()
    tx = result.get_result("submit")
"""

# Application layer (orchestration)
from retryflow.application.action import WorkflowAction
from retryflow.application.adapter import run_to_result, to_result
from retryflow.application.config import WorkflowConfig
from retryflow.application.messages import MessagesReleaser, TryStepsExecutor
from retryflow.application.retry import retry, sleep, wait
from retryflow.application.workflow import Workflow

# Domain models
from retryflow.domain.context import RunContext

# Domain exceptions
from retryflow.domain.exceptions import (
    BreakSignal,
    RetryflowError,
    WorkflowConfigError,
    WorkflowInterrupted,
)

# Domain interfaces (for type hints and custom implementations)
from retryflow.domain.interfaces import (
    WorkflowEventStoreInterface,
    WorkflowInterface,
)
from retryflow.domain.models import (
    FunctionReturn,
    RetryPolicy,
    WorkflowResult,
    WorkflowStatus,
)
from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType

# Infrastructure (explicit import encouraged for dependency injection)
from retryflow.infrastructure import (
    InMemoryWorkflowEventStore,
    configure_logging,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "FunctionReturn",
    "RetryPolicy",
    "RunContext",
    "WorkflowResult",
    "WorkflowStatus",
    "WorkflowEvent",
    "WorkflowEventType",
    # Domain interfaces
    "WorkflowInterface",
    "WorkflowEventStoreInterface",
    # Domain exceptions
    "BreakSignal",
    "RetryflowError",
    "WorkflowConfigError",
    "WorkflowInterrupted",
    # Application layer
    "Workflow",
    "WorkflowAction",
    "WorkflowConfig",
    "MessagesReleaser",
    "TryStepsExecutor",
    "retry",
    "run_to_result",
    "sleep",
    "to_result",
    "wait",
    # Infrastructure
    "InMemoryWorkflowEventStore",
    "configure_logging",
]
