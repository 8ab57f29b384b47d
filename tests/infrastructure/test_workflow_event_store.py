"""Tests for workflow event store implementations."""

from retryflow.domain.interfaces import WorkflowEventStoreInterface
from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType
from retryflow.infrastructure.persistence.workflow_events import (
    InMemoryWorkflowEventStore,
)


def make_event(
    workflow_id: str = "wf-1",
    event_type: WorkflowEventType = WorkflowEventType.STEP_START,
    step_name: str | None = "step1",
    event_id: str = "evt-1",
    **kwargs,
) -> WorkflowEvent:
    """Create a test workflow event."""
    return WorkflowEvent(
        event_id=event_id,
        event_type=event_type,
        workflow_id=workflow_id,
        step_name=step_name,
        created_at="2024-01-01T00:00:00+00:00",
        **kwargs,
    )


class TestInMemoryWorkflowEventStore:
    """Tests for InMemoryWorkflowEventStore."""

    def test_implements_interface(self):
        assert isinstance(InMemoryWorkflowEventStore(), WorkflowEventStoreInterface)

    def test_store_and_retrieve_event(self):
        """Store and retrieve events."""
        store = InMemoryWorkflowEventStore()
        event = make_event()

        event_id = store.store_event(event)

        assert event_id == event.event_id
        assert store.get_events("wf-1") == [event]
        assert len(store) == 1

    def test_get_events_filters_by_workflow_id(self):
        """get_events filters by workflow_id."""
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event(workflow_id="wf-1"))
        store.store_event(make_event(workflow_id="wf-2"))

        events = store.get_events("wf-1")

        assert len(events) == 1
        assert events[0].workflow_id == "wf-1"

    def test_get_events_filters_by_type_and_step(self):
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event(event_id="1", step_name="a"))
        store.store_event(
            make_event(
                event_id="2", step_name="a", event_type=WorkflowEventType.STEP_PASS
            )
        )
        store.store_event(make_event(event_id="3", step_name="b"))

        by_type = store.get_events("wf-1", event_type=WorkflowEventType.STEP_START)
        by_step = store.get_events("wf-1", step_name="a")
        both = store.get_events(
            "wf-1", event_type=WorkflowEventType.STEP_START, step_name="a"
        )

        assert [e.event_id for e in by_type] == ["1", "3"]
        assert [e.event_id for e in by_step] == ["1", "2"]
        assert [e.event_id for e in both] == ["1"]

    def test_events_keep_emission_order(self):
        """Identical timestamps do not reorder events."""
        store = InMemoryWorkflowEventStore()
        for i in range(5):
            store.store_event(make_event(event_id=str(i)))

        assert [e.event_id for e in store.get_events("wf-1")] == list("01234")

    def test_get_break_events(self):
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event(event_id="1"))
        store.store_event(
            make_event(event_id="2", event_type=WorkflowEventType.BREAK, summary="x")
        )

        events = store.get_break_events("wf-1")

        assert [e.event_id for e in events] == ["2"]

    def test_clear(self):
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event())

        store.clear()

        assert len(store) == 0
        assert store.get_events("wf-1") == []
