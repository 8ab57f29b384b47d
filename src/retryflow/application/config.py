"""
Workflow configuration loading.

Configs are typed, frozen dataclasses: unknown fields are rejected at
construction time, and JSON input is validated against the packaged schema.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

from retryflow.domain.exceptions import WorkflowConfigError
from retryflow.domain.models import RetryPolicy
from retryflow.schemas import validate_workflow


@dataclass(frozen=True)
class WorkflowConfig:
    """Sequence retry policy plus default step policies keyed by step name."""

    attempts: int = 1
    delay: float = 0.0
    steps: Mapping[str, RetryPolicy] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Reuses RetryPolicy validation for the sequence-level budget
        RetryPolicy(attempts=self.attempts, delay=self.delay)

    @property
    def policy(self) -> RetryPolicy:
        return RetryPolicy(attempts=self.attempts, delay=self.delay)

    def policy_for(self, step_name: str) -> RetryPolicy:
        """Default policy for a step (single attempt, no delay if unset)."""
        return self.steps.get(step_name, RetryPolicy())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowConfig":
        """
        Build a config from a JSON-compatible mapping.

        Raises:
            WorkflowConfigError: If the data violates workflow.schema.json
        """
        raw = dict(data)
        try:
            validate_workflow(raw)
        except jsonschema.ValidationError as e:
            path = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise WorkflowConfigError(
                f"Invalid workflow config at {path}: {e.message}"
            ) from e

        steps = {
            name: RetryPolicy(**policy) for name, policy in raw.get("steps", {}).items()
        }
        return cls(
            attempts=raw.get("attempts", 1),
            delay=raw.get("delay", 0.0),
            steps=steps,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "WorkflowConfig":
        """
        Load a config from a JSON file.

        Raises:
            WorkflowConfigError: If the file is missing, not JSON, or invalid
        """
        path = Path(path)
        if not path.exists():
            raise WorkflowConfigError(f"Workflow config not found: {path}")

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise WorkflowConfigError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(raw, dict):
            raise WorkflowConfigError(
                f"Workflow config must be a JSON object, got {type(raw).__name__}"
            )
        return cls.from_dict(raw)

    def to_dict(self) -> dict[str, Any]:
        return {
            "attempts": self.attempts,
            "delay": self.delay,
            "steps": {
                name: {"attempts": p.attempts, "delay": p.delay}
                for name, p in self.steps.items()
            },
        }
