"""
Dependency direction between the retryflow layers.

domain <- application <- infrastructure, with the packaged schemas usable
from application code only. Checked on the import graph with PyTestArch, and
on the domain's import statements for third-party packages.
"""

import ast
import sys
from pathlib import Path

import pytest
from pytestarch import LayerRule

pytestmark = pytest.mark.architecture

PACKAGE_DIR = Path(__file__).resolve().parents[2] / "src" / "retryflow"

FORBIDDEN_ACCESS = [
    ("domain", "application"),
    ("domain", "infrastructure"),
    ("domain", "schemas"),
    ("application", "infrastructure"),
    ("schemas", "application"),
    ("schemas", "domain"),
]


@pytest.mark.parametrize(("source", "target"), FORBIDDEN_ACCESS)
def test_layer_does_not_access(evaluable, layers, source, target):
    rule = (
        LayerRule()
        .based_on(layers)
        .layers_that()
        .are_named(source)
        .should_not()
        .access_layers_that()
        .are_named(target)
    )
    rule.assert_applies(evaluable)


def test_domain_uses_only_stdlib():
    """Third-party libraries stay out of the domain layer."""
    violations = []

    for py_file in (PACKAGE_DIR / "domain").rglob("*.py"):
        for node in ast.walk(ast.parse(py_file.read_text())):
            if isinstance(node, ast.Import):
                modules = [alias.name for alias in node.names]
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                modules = [node.module]
            else:
                continue
            for module in modules:
                top = module.split(".")[0]
                if top != "retryflow" and top not in sys.stdlib_module_names:
                    violations.append(f"{py_file.name}:{node.lineno}: {module}")

    assert not violations, f"Non-stdlib imports in domain: {violations}"
