"""Workflow event store implementations."""

from retryflow.domain.interfaces import WorkflowEventStoreInterface
from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType


class InMemoryWorkflowEventStore(WorkflowEventStoreInterface):
    """In-memory implementation; events are kept in emission order."""

    def __init__(self) -> None:
        self._events: list[WorkflowEvent] = []

    def store_event(self, event: WorkflowEvent) -> str:
        self._events.append(event)
        return event.event_id

    def get_events(
        self,
        workflow_id: str,
        event_type: WorkflowEventType | None = None,
        step_name: str | None = None,
    ) -> list[WorkflowEvent]:
        return [
            e
            for e in self._events
            if e.workflow_id == workflow_id
            and (event_type is None or e.event_type == event_type)
            and (step_name is None or e.step_name == step_name)
        ]

    def get_break_events(self, workflow_id: str) -> list[WorkflowEvent]:
        return self.get_events(workflow_id, WorkflowEventType.BREAK)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
