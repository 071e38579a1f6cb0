from __future__ import annotations

from typing import Dict, Literal, Optional, Protocol, Tuple, Union, overload

from resflow.algorithms.augmenting_path import edmonds_karp, ford_fulkerson
from resflow.algorithms.base import MaxFlowAlgorithm
from resflow.algorithms.dinic import dinic
from resflow.algorithms.push_relabel import goldberg_tarjan
from resflow.algorithms.types import EventSink, FlowSummary
from resflow.config import SOLVER_CONFIG
from resflow.exceptions import InvalidArgumentError
from resflow.graph import NodeID, ResidualNetwork
from resflow.logging import get_logger
from resflow.validators import min_cut_edges, reachable_set

_logger = get_logger(__name__)


class MaxFlowSolver(Protocol):
    """Call contract shared by every max-flow engine."""

    def __call__(
        self,
        network: ResidualNetwork,
        src_node: NodeID,
        dst_node: NodeID,
        event_sink: Optional[EventSink] = None,
    ) -> int: ...


_SOLVERS: Dict[MaxFlowAlgorithm, MaxFlowSolver] = {
    MaxFlowAlgorithm.FORD_FULKERSON: ford_fulkerson,
    MaxFlowAlgorithm.EDMONDS_KARP: edmonds_karp,
    MaxFlowAlgorithm.DINIC: dinic,
    MaxFlowAlgorithm.GOLDBERG_TARJAN: goldberg_tarjan,
}


def resolve_algorithm(algorithm: Union[MaxFlowAlgorithm, str, int]) -> MaxFlowAlgorithm:
    """
    Normalize an algorithm given as enum member, enum value or name.

    Names are matched case-insensitively with ``-``, ``_`` and spaces treated
    alike, so ``"edmonds-karp"`` and ``"EDMONDS_KARP"`` both work.

    Raises:
        InvalidArgumentError: If the algorithm is unknown.
    """
    if isinstance(algorithm, MaxFlowAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        key = algorithm.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return MaxFlowAlgorithm[key]
        except KeyError:
            pass
    elif isinstance(algorithm, int) and not isinstance(algorithm, bool):
        try:
            return MaxFlowAlgorithm(algorithm)
        except ValueError:
            pass
    known = ", ".join(a.name for a in MaxFlowAlgorithm)
    raise InvalidArgumentError(
        f"Unknown max-flow algorithm {algorithm!r}; expected one of: {known}."
    )


def get_solver(algorithm: Union[MaxFlowAlgorithm, str, int]) -> MaxFlowSolver:
    """Return the engine function for ``algorithm``."""
    return _SOLVERS[resolve_algorithm(algorithm)]


@overload
def calc_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, int, None] = None,
    event_sink: Optional[EventSink] = None,
    copy_graph: bool = False,
    return_summary: Literal[False] = False,
) -> int: ...


@overload
def calc_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, int, None] = None,
    event_sink: Optional[EventSink] = None,
    copy_graph: bool = False,
    return_summary: Literal[True],
) -> Tuple[int, FlowSummary]: ...


def calc_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    algorithm: Union[MaxFlowAlgorithm, str, int, None] = None,
    event_sink: Optional[EventSink] = None,
    copy_graph: bool = False,
    return_summary: bool = False,
) -> Union[int, Tuple[int, FlowSummary]]:
    """Compute the maximum flow from ``src_node`` to ``dst_node``.

    Args:
        network (ResidualNetwork):
            The residual network. Mutated in place unless ``copy_graph`` is set.
        src_node (NodeID):
            The source vertex.
        dst_node (NodeID):
            The sink vertex. Equal to ``src_node`` gives a flow of 0.
        algorithm (MaxFlowAlgorithm | str | int | None):
            Engine to run. Defaults to ``SOLVER_CONFIG.default_algorithm``.
        event_sink (EventSink | None):
            Optional receiver of trace events. Tracing never changes the
            result or the final network state.
        copy_graph (bool):
            If True, solve a copy so the caller's network stays untouched.
            The solved copy is reachable through the summary.
        return_summary (bool):
            If True, also return a FlowSummary of the solved network.

    Returns:
        Union[int, Tuple[int, FlowSummary]]:
            - If return_summary is False: the flow value.
            - Otherwise: ``(flow, summary)``.

    Raises:
        InvalidArgumentError: If an endpoint is out of range or the algorithm
            is unknown.

    Examples:
        >>> net = ResidualNetwork(4)
        >>> for u, v, c in [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)]:
        ...     _ = net.add_edge(u, v, c)
        >>> calc_max_flow(net, 0, 3, algorithm="edmonds-karp", copy_graph=True)
        5
        >>> flow, summary = calc_max_flow(net, 0, 3, return_summary=True)
        >>> summary.cut_capacity == flow
        True
    """
    if algorithm is None:
        algorithm = SOLVER_CONFIG.default_algorithm
    resolved = resolve_algorithm(algorithm)
    solver = _SOLVERS[resolved]

    flow_network = network.copy() if copy_graph else network
    _logger.debug(
        "Running %s on %r from %s to %s",
        resolved.display_name,
        flow_network,
        src_node,
        dst_node,
    )
    flow = solver(flow_network, src_node, dst_node, event_sink=event_sink)

    if not return_summary:
        return flow
    return flow, _build_flow_summary(flow, flow_network, src_node)


def _build_flow_summary(
    total_flow: int, network: ResidualNetwork, src_node: NodeID
) -> FlowSummary:
    """Build a FlowSummary from the solved network."""
    edge_flow = {}
    residual_cap = {}
    for u, i, e in network.edges():
        if e.orig_cap > 0:
            edge_flow[(u, e.head, i)] = e.flow
            residual_cap[(u, e.head, i)] = e.cap

    return FlowSummary(
        total_flow=total_flow,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable_set(network, src_node),
        min_cut=min_cut_edges(network, src_node),
        network=network,
    )
