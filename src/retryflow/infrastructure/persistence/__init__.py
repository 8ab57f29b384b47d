"""
Persistence adapters for the workflow event trace.
"""

from retryflow.infrastructure.persistence.workflow_events import (
    InMemoryWorkflowEventStore,
)

__all__ = [
    "InMemoryWorkflowEventStore",
]
