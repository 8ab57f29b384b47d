"""
Domain interfaces (Ports) for the step-orchestration engine.

These abstract base classes define the contracts that implementations must satisfy.
They have no external dependencies and represent the core domain boundaries.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, NoReturn

if TYPE_CHECKING:
    from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType


class WorkflowInterface(ABC):
    """
    Port for the owner of a run, as seen from a RunContext.

    Step bodies and hooks reach the workflow through ``context.workflow`` to
    abort the whole run.
    """

    @abstractmethod
    def break_(self, reason: Any = None) -> NoReturn:
        """
        Record ``reason`` as the break reason and raise BreakSignal.

        Never returns. A later call overwrites the recorded reason.
        """

    @abstractmethod
    def was_broken(self) -> bool:
        """Whether the most recent run was aborted with ``break_``."""

    @abstractmethod
    def get_break_reason(self) -> Any:
        """The last recorded break reason of the most recent run."""


class WorkflowEventStoreInterface(ABC):
    """
    Port for workflow event storage.

    Implementations keep the lifecycle trace of workflow runs.
    """

    @abstractmethod
    def store_event(self, event: "WorkflowEvent") -> str:
        """
        Store an event.

        Args:
            event: The event to store

        Returns:
            The event_id
        """

    @abstractmethod
    def get_events(
        self,
        workflow_id: str,
        event_type: "WorkflowEventType | None" = None,
        step_name: str | None = None,
    ) -> list["WorkflowEvent"]:
        """
        Retrieve the events of a workflow in emission order.

        Args:
            workflow_id: Workflow whose events to return
            event_type: Only return events of this type
            step_name: Only return events of this step

        Returns:
            Matching events, oldest first
        """
