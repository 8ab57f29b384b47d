"""retryflow JSON Schema definitions and validation utilities.

Schemas:
    - workflow.schema.json: Workflow configuration (sequence retry policy,
      default step retry policies)

Usage:
    from retryflow.schemas import validate_workflow

    with open("workflow.json") as f:
        data = json.load(f)
    validate_workflow(data)  # Raises jsonschema.ValidationError if invalid
"""

from __future__ import annotations

import json
from importlib.resources import files
from typing import Any

import jsonschema


def _load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas package.

    Args:
        name: Schema filename (e.g., 'workflow.schema.json')

    Returns:
        Parsed JSON schema as a dictionary
    """
    schema_text = files("retryflow.schemas").joinpath(name).read_text()
    result: dict[str, Any] = json.loads(schema_text)
    return result


def get_workflow_schema() -> dict[str, Any]:
    """Get the workflow.json schema.

    Returns:
        JSON Schema for workflow configuration
    """
    return _load_schema("workflow.schema.json")


def validate_workflow(data: dict[str, Any]) -> None:
    """Validate a workflow configuration against the schema.

    Args:
        data: Workflow configuration dictionary

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_workflow_schema())


__all__ = [
    "get_workflow_schema",
    "validate_workflow",
]
