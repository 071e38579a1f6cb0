"""Cross-check harness: run every engine on clones of one instance.

Instances come from the caller. The harness solves each one with all engines
on independent copies and validates every result. It also corrupts solved
copies on purpose to confirm the validators catch the damage.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from resflow.algorithms.base import MaxFlowAlgorithm
from resflow.algorithms.max_flow import get_solver, resolve_algorithm
from resflow.exceptions import ResflowError
from resflow.graph import NodeID, ResidualNetwork
from resflow.logging import get_logger
from resflow.validators import (
    capacity_constraints,
    residual_reachable,
    saturated_cut_exists,
    validate_flow,
)

_logger = get_logger(__name__)


@dataclass
class AlgorithmReport:
    """Outcome of one engine on one instance."""

    name: str
    max_flow: Optional[int] = None
    capacity_ok: bool = False
    conservation_ok: bool = False
    saturated_cut_ok: bool = False
    ran_ok: bool = False
    error: Optional[str] = None
    elapsed: float = 0.0

    @property
    def valid(self) -> bool:
        return (
            self.ran_ok
            and self.capacity_ok
            and self.conservation_ok
            and self.saturated_cut_ok
        )


@dataclass
class ComparisonReport:
    """All engines' reports for one instance."""

    src_node: NodeID
    dst_node: NodeID
    reports: List[AlgorithmReport] = field(default_factory=list)

    @property
    def agree(self) -> bool:
        """True when every engine ran and all returned the same value."""
        if not self.reports or not all(r.ran_ok for r in self.reports):
            return False
        return len({r.max_flow for r in self.reports}) == 1

    @property
    def flow_value(self) -> Optional[int]:
        """The agreed flow value, or None when the engines disagree."""
        return self.reports[0].max_flow if self.agree else None

    @property
    def all_valid(self) -> bool:
        return bool(self.reports) and all(r.valid for r in self.reports)


def run_and_validate(
    algorithm: Union[MaxFlowAlgorithm, str, int],
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
) -> AlgorithmReport:
    """
    Solve a copy of ``network`` with one engine and validate the result.

    Errors raised by the engine are recorded in the report instead of
    propagating.

    Returns:
        AlgorithmReport: Flow value, validator verdicts and timing.
    """
    resolved = resolve_algorithm(algorithm)
    report = AlgorithmReport(name=resolved.display_name)
    solved = network.copy()
    start = time.perf_counter()
    try:
        report.max_flow = get_solver(resolved)(solved, src_node, dst_node)
    except ResflowError as exc:
        report.error = f"{type(exc).__name__}: {exc}"
        _logger.warning("%s failed: %s", report.name, report.error)
        return report
    finally:
        report.elapsed = time.perf_counter() - start

    check = validate_flow(solved, src_node, dst_node)
    report.ran_ok = True
    report.capacity_ok = check.capacity_ok
    report.conservation_ok = check.conservation_ok
    report.saturated_cut_ok = check.saturated_cut_ok
    return report


def compare_algorithms(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    algorithms: Optional[Iterable[Union[MaxFlowAlgorithm, str, int]]] = None,
) -> ComparisonReport:
    """
    Run several engines on independent copies of ``network``.

    Args:
        network: Instance to solve; never modified.
        src_node: Source vertex.
        dst_node: Sink vertex.
        algorithms: Engines to run; all of them by default.

    Returns:
        ComparisonReport: One AlgorithmReport per engine, in the given order.
    """
    if algorithms is None:
        algorithms = list(MaxFlowAlgorithm)
    comparison = ComparisonReport(src_node=src_node, dst_node=dst_node)
    for algorithm in algorithms:
        comparison.reports.append(
            run_and_validate(algorithm, network, src_node, dst_node)
        )

    if not comparison.agree:
        _logger.warning(
            "Engines disagree on %r (%s -> %s): %s",
            network,
            src_node,
            dst_node,
            ", ".join(f"{r.name}={r.max_flow}" for r in comparison.reports),
        )
    return comparison


def sanity_flow_overflow(
    network: ResidualNetwork, src_node: NodeID, dst_node: NodeID, excess: int = 123
) -> bool:
    """
    Push one real edge's flow above its capacity on a solved copy.

    Returns:
        bool: True if the capacity validator rejects the corrupted copy. False
            also when the instance has no real edge to corrupt.
    """
    corrupted = network.copy()
    get_solver(MaxFlowAlgorithm.EDMONDS_KARP)(corrupted, src_node, dst_node)
    for _, e in corrupted.forward_edges():
        e.flow = e.orig_cap + excess
        return not capacity_constraints(corrupted)
    return False


def sanity_break_saturated_cut(
    network: ResidualNetwork, src_node: NodeID, dst_node: NodeID
) -> bool:
    """
    Reopen one saturated edge crossing the final min cut on a solved copy.

    Returns:
        bool: True if the cut validator rejects the corrupted copy. False also
            when no real edge crosses the cut.
    """
    corrupted = network.copy()
    get_solver(MaxFlowAlgorithm.EDMONDS_KARP)(corrupted, src_node, dst_node)
    in_s = residual_reachable(corrupted, src_node)
    for u, e in corrupted.forward_edges():
        if in_s[u] and not in_s[e.head]:
            e.cap += 1
            return not saturated_cut_exists(corrupted, src_node, dst_node)
    return False


def _verdict(ok: bool) -> str:
    return "OK" if ok else "FAIL"


def format_report(comparison: ComparisonReport) -> str:
    """Render a ComparisonReport as plain text, one block per engine."""
    flows = "/".join(
        str(r.max_flow) if r.ran_ok else "X" for r in comparison.reports
    )
    names = "/".join(r.name for r in comparison.reports)
    lines = [
        f"maxFlow {names} = {flows} "
        f"[{'OK' if comparison.agree else 'MISMATCH'}]"
    ]
    for r in comparison.reports:
        header = f"  {r.name}:" if r.ran_ok else f"  {r.name} [FAILED]: {r.error}"
        lines.append(f"{header} ({r.elapsed * 1000:.2f} ms)")
        lines.append(f"    capacity constraints: {_verdict(r.capacity_ok)}")
        lines.append(f"    flow conservation:    {_verdict(r.conservation_ok)}")
        lines.append(f"    saturated cut exists: {_verdict(r.saturated_cut_ok)}")
    return "\n".join(lines)
