"""Tests for the resflow logger hierarchy and level control."""

import importlib
import logging
from io import StringIO

import pytest

from resflow import logging as resflow_logging
from resflow.algorithms.augmenting_path import edmonds_karp
from resflow.algorithms.dinic import dinic
from resflow.logging import get_logger, set_global_log_level, setup_root_logger
from resflow.testbed import compare_algorithms
from tests.algorithms.sample_graphs import clrs, four_node

ENGINE_LOGGERS = [
    "resflow.algorithms.augmenting_path",
    "resflow.algorithms.dinic",
    "resflow.algorithms.push_relabel",
    "resflow.algorithms.max_flow",
    "resflow.testbed",
]


@pytest.fixture(autouse=True)
def _restore_resflow_logger():
    """Put the resflow logger's level and handlers back after each test."""
    root = logging.getLogger("resflow")
    level = root.level
    handlers = list(root.handlers)
    handler_levels = [h.level for h in handlers]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for handler, handler_level in zip(handlers, handler_levels):
        handler.setLevel(handler_level)


def _messages(caplog, logger_name, level):
    return [
        r.getMessage()
        for r in caplog.records
        if r.name == logger_name and r.levelno == level
    ]


@pytest.mark.parametrize("name", ENGINE_LOGGERS)
def test_module_loggers_inherit_from_resflow(name):
    """Module loggers carry no level or handler of their own."""
    importlib.import_module(name)
    logger = logging.getLogger(name)
    assert logger.level == logging.NOTSET
    assert logger.handlers == []

    set_global_log_level(logging.ERROR)
    assert logger.getEffectiveLevel() == logging.ERROR


def test_engine_debug_lines_hidden_at_info(caplog):
    """Engine summaries stay silent at the default INFO level."""
    set_global_log_level(logging.INFO)
    case = clrs()
    dinic(case.network, case.src, case.dst)
    assert _messages(caplog, "resflow.algorithms.dinic", logging.DEBUG) == []


def test_engine_debug_lines_follow_global_level(caplog):
    """Lowering the resflow level to DEBUG exposes the per-run summaries."""
    set_global_log_level(logging.DEBUG)
    case = clrs()
    dinic(case.network, case.src, case.dst)
    edmonds_karp(four_node().network, 0, 3)

    dinic_lines = _messages(caplog, "resflow.algorithms.dinic", logging.DEBUG)
    ek_lines = _messages(caplog, "resflow.algorithms.augmenting_path", logging.DEBUG)
    assert any(m.startswith("dinic finished: flow=23") for m in dinic_lines)
    assert any(m.startswith("find_path_bfs finished: flow=5") for m in ek_lines)


def test_testbed_warnings_survive_warning_level(caplog):
    """Engine failures are still reported when only warnings are enabled."""
    set_global_log_level(logging.WARNING)
    compare_algorithms(four_node().network, 0, 9, algorithms=["dinic"])

    warnings = _messages(caplog, "resflow.testbed", logging.WARNING)
    assert any(m.startswith("Dinic failed: InvalidArgumentError") for m in warnings)
    assert any(m.startswith("Engines disagree") for m in warnings)


def test_setup_is_idempotent():
    """Repeated setup keeps the single handler and the level already set."""
    root = logging.getLogger("resflow")
    set_global_log_level(logging.ERROR)
    handlers = list(root.handlers)

    setup_root_logger(level=logging.DEBUG)
    get_logger("resflow.extra")

    assert root.handlers == handlers
    assert len(root.handlers) == 1
    assert root.level == logging.ERROR


def test_custom_handler_and_format(monkeypatch):
    """A fresh setup installs the given handler and format on resflow."""
    monkeypatch.setattr(resflow_logging, "_ROOT_LOGGER_CONFIGURED", False)
    capture = StringIO()
    setup_root_logger(
        level=logging.DEBUG,
        format_string="%(levelname)s|%(name)s|%(message)s",
        handler=logging.StreamHandler(capture),
    )

    case = four_node()
    dinic(case.network, 0, 3)

    assert "DEBUG|resflow.algorithms.dinic|dinic finished: flow=5" in capture.getvalue()
