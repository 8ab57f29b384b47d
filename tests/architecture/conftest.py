"""Shared fixtures for architecture tests."""

from pathlib import Path

import pytest
from pytestarch import (
    EvaluableArchitecture,
    LayeredArchitecture,
    get_evaluable_architecture,
)

SRC_DIR = Path(__file__).resolve().parents[2] / "src"
PACKAGE_DIR = SRC_DIR / "retryflow"

# Layer name -> package under src/retryflow
LAYERS = {
    "domain": "domain",
    "application": "application",
    "infrastructure": "infrastructure",
    "schemas": "schemas",
}


@pytest.fixture(scope="session")
def evaluable() -> EvaluableArchitecture:
    """Import graph of src/retryflow."""
    return get_evaluable_architecture(str(SRC_DIR), str(PACKAGE_DIR))


@pytest.fixture(scope="session")
def layers() -> LayeredArchitecture:
    """Layers keyed by LAYERS.

    Module names are resolved relative to the source root, hence the
    'src.retryflow.' prefix.
    """
    architecture = LayeredArchitecture()
    for name, package in LAYERS.items():
        architecture = architecture.layer(name).containing_modules(
            [f"src.retryflow.{package}"]
        )
    return architecture
