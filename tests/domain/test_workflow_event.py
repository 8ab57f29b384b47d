"""Tests for workflow event models."""

from dataclasses import FrozenInstanceError

import pytest

from retryflow.domain.workflow_event import WorkflowEvent, WorkflowEventType


class TestWorkflowEventType:
    """Tests for WorkflowEventType enum."""

    def test_event_type_values(self):
        """Event types have correct string values."""
        assert WorkflowEventType.RUN_START.value == "RUN_START"
        assert WorkflowEventType.STEP_RETRY.value == "STEP_RETRY"
        assert WorkflowEventType.SEQUENCE_RETRY.value == "SEQUENCE_RETRY"
        assert WorkflowEventType.BREAK.value == "BREAK"
        assert WorkflowEventType.RUN_FAIL.value == "RUN_FAIL"

    def test_event_type_is_str_enum(self):
        """WorkflowEventType is a string enum."""
        assert isinstance(WorkflowEventType.STEP_START, str)
        assert WorkflowEventType.STEP_START == "STEP_START"

    def test_all_types_accounted(self):
        assert len(WorkflowEventType) == 9


class TestWorkflowEvent:
    """Tests for WorkflowEvent dataclass."""

    def test_defaults(self):
        event = WorkflowEvent(
            event_id="evt-1",
            event_type=WorkflowEventType.RUN_START,
            workflow_id="wf-1",
        )

        assert event.step_name is None
        assert event.attempt is None
        assert event.summary == ""
        assert event.created_at == ""

    def test_event_is_immutable(self):
        event = WorkflowEvent(
            event_id="evt-1",
            event_type=WorkflowEventType.STEP_START,
            workflow_id="wf-1",
            step_name="fetch",
            attempt=1,
        )

        with pytest.raises(FrozenInstanceError):
            event.attempt = 2  # type: ignore[misc]
