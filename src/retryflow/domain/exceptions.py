"""
Domain exceptions for the step-orchestration engine.

BreakSignal is control flow, not a failure: it derives from BaseException so
that a step body catching ``Exception`` cannot consume it.
"""

from typing import Any

INTERRUPTED_MESSAGE = "Workflow execution was interrupted"


class BreakSignal(BaseException):
    """
    Raised by ``Workflow.break_()`` to abort every retry loop immediately.

    Never retried. The reason is also recorded on the run, which is what the
    workflow ultimately surfaces.
    """

    def __init__(self, reason: Any = None):
        """
        Args:
            reason: Why the run was broken (string, exception or any value)
        """
        super().__init__(INTERRUPTED_MESSAGE)
        self.reason = reason


class RetryflowError(Exception):
    """Base class for errors raised by the library itself."""


class WorkflowInterrupted(RetryflowError):
    """
    Raised by ``Workflow.run()`` when a break reason is not an exception.

    Exception reasons are raised as-is instead.
    """

    def __init__(self, reason: Any = None):
        super().__init__(INTERRUPTED_MESSAGE)
        self.reason = reason


class WorkflowConfigError(RetryflowError, ValueError):
    """Invalid workflow, step or retry policy configuration."""
