"""resflow: maximum s-t flow on residual networks, with certified results.

Four engines share one in-place residual-network model:
    ford_fulkerson() - depth-first augmenting paths
    edmonds_karp() - breadth-first (shortest) augmenting paths
    dinic() - level graphs and blocking flows
    goldberg_tarjan() - FIFO preflow-push

Validators certify a solved network:
    capacity_constraints(), flow_conservation(), saturated_cut_exists()

Example:
    from resflow import ResidualNetwork, dinic, saturated_cut_exists

    net = ResidualNetwork(4)
    for u, v, c in [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)]:
        net.add_edge(u, v, c)

    work = net.copy()
    assert dinic(work, 0, 3) == 5
    assert saturated_cut_exists(work, 0, 3)
"""

from __future__ import annotations

from resflow import logging
from resflow._version import __version__
from resflow.algorithms.augmenting_path import edmonds_karp, ford_fulkerson
from resflow.algorithms.base import INF, MaxFlowAlgorithm
from resflow.algorithms.dinic import dinic
from resflow.algorithms.max_flow import MaxFlowSolver, calc_max_flow, get_solver
from resflow.algorithms.push_relabel import goldberg_tarjan
from resflow.algorithms.types import (
    CutCertificate,
    EventSink,
    FlowSummary,
    LevelsSnapshot,
    PathFound,
    PushApplied,
    Relabeled,
    TraceEvent,
    TraceRecorder,
)
from resflow.config import SOLVER_CONFIG, SolverConfig
from resflow.exceptions import FlowInvariantError, InvalidArgumentError, ResflowError
from resflow.graph import ResidualEdge, ResidualNetwork
from resflow.validators import (
    FlowCheck,
    capacity_constraints,
    flow_conservation,
    saturated_cut_exists,
    validate_flow,
)

__all__ = [
    # Version
    "__version__",
    # Model
    "ResidualEdge",
    "ResidualNetwork",
    # Engines
    "ford_fulkerson",
    "edmonds_karp",
    "dinic",
    "goldberg_tarjan",
    "calc_max_flow",
    "get_solver",
    "MaxFlowAlgorithm",
    "MaxFlowSolver",
    "INF",
    # Trace
    "TraceEvent",
    "EventSink",
    "TraceRecorder",
    "LevelsSnapshot",
    "PathFound",
    "PushApplied",
    "Relabeled",
    "CutCertificate",
    "FlowSummary",
    # Validators
    "FlowCheck",
    "capacity_constraints",
    "flow_conservation",
    "saturated_cut_exists",
    "validate_flow",
    # Errors
    "ResflowError",
    "InvalidArgumentError",
    "FlowInvariantError",
    # Configuration
    "SolverConfig",
    "SOLVER_CONFIG",
    # Utilities
    "logging",
]
