"""Global pytest configuration.

Registers the fixture plugin `tests.algorithms.sample_graphs` when it is
importable, and restores the global solver configuration after every test.
"""

from __future__ import annotations

from dataclasses import fields, replace
from importlib.util import find_spec

import pytest

from resflow.config import SOLVER_CONFIG

# Register plugin if available without importing it here. Pytest will import it
# with assertion rewriting enabled, avoiding PytestAssertRewriteWarning.
pytest_plugins: list[str] = []
if find_spec("tests.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.algorithms.sample_graphs"]


@pytest.fixture(autouse=True)
def _restore_solver_config():
    """Undo any change a test makes to the global solver configuration."""
    saved = replace(SOLVER_CONFIG)
    yield
    for f in fields(saved):
        setattr(SOLVER_CONFIG, f.name, getattr(saved, f.name))
