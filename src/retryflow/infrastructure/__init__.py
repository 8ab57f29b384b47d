"""
Infrastructure layer for the step-orchestration engine.

Contains adapters for external concerns (event storage, console logging).
"""

from retryflow.infrastructure.console import configure_logging
from retryflow.infrastructure.persistence import InMemoryWorkflowEventStore

__all__ = [
    # Persistence
    "InMemoryWorkflowEventStore",
    # Console
    "configure_logging",
]
