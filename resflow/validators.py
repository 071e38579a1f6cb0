"""Read-only correctness checks over a solved residual network.

Each check is independent, never raises on corrupt state and never mutates
the network, so the same check run twice on an unchanged network gives the
same answer.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from resflow.algorithms.types import Edge
from resflow.graph import NodeID, ResidualNetwork


@dataclass(frozen=True)
class FlowCheck:
    """Outcome of running all three validators on one network."""

    capacity_ok: bool
    conservation_ok: bool
    saturated_cut_ok: bool

    @property
    def ok(self) -> bool:
        return self.capacity_ok and self.conservation_ok and self.saturated_cut_ok


def _is_vertex(v: NodeID, n: int) -> bool:
    return not isinstance(v, bool) and isinstance(v, int) and 0 <= v < n


def residual_reachable(network: ResidualNetwork, src_node: NodeID) -> List[bool]:
    """
    Mark the vertices reachable from ``src_node`` over positive-residual arcs.

    Args:
        network: The residual network.
        src_node: Start vertex.

    Returns:
        List[bool]: ``visited[v]`` is True when ``v`` is reachable.
    """
    n = network.size()
    visited = [False] * n
    if not _is_vertex(src_node, n):
        return visited
    visited[src_node] = True
    queue: Deque[NodeID] = deque([src_node])
    while queue:
        node = queue.popleft()
        for e in network.adj(node):
            if e.cap > 0 and _is_vertex(e.head, n) and not visited[e.head]:
                visited[e.head] = True
                queue.append(e.head)
    return visited


def reachable_set(network: ResidualNetwork, src_node: NodeID) -> frozenset:
    """Return the reachable side of the residual cut as a frozenset."""
    return frozenset(
        v for v, seen in enumerate(residual_reachable(network, src_node)) if seen
    )


def capacity_constraints(
    network: ResidualNetwork,
    src_node: Optional[NodeID] = None,
    dst_node: Optional[NodeID] = None,
) -> bool:
    """
    Check ``0 <= flow <= capacity`` on every real edge.

    ``src_node`` and ``dst_node`` are accepted so all validators share one
    signature; they do not affect the result.
    """
    for _, e in network.forward_edges():
        if e.flow < 0 or e.flow > e.orig_cap:
            return False
    return True


def flow_conservation(
    network: ResidualNetwork, src_node: NodeID, dst_node: NodeID
) -> bool:
    """
    Check that inflow equals outflow at every vertex except source and sink.

    Only real edges contribute; reverse records mirror them and would double
    count.
    """
    n = network.size()
    net = [0] * n
    for u, e in network.forward_edges():
        if not _is_vertex(e.head, n):
            return False
        net[u] -= e.flow
        net[e.head] += e.flow
    return all(net[v] == 0 for v in range(n) if v != src_node and v != dst_node)


def saturated_cut_exists(
    network: ResidualNetwork, src_node: NodeID, dst_node: NodeID
) -> bool:
    """
    Check the max-flow/min-cut optimality certificate.

    With S the set of vertices reachable from the source over
    positive-residual arcs, the sink must lie outside S and every real edge
    leaving S must have zero residual capacity.
    """
    n = network.size()
    if not (_is_vertex(src_node, n) and _is_vertex(dst_node, n)):
        return False
    in_s = residual_reachable(network, src_node)
    if in_s[dst_node]:
        return False
    for u, e in network.forward_edges():
        if in_s[u] and _is_vertex(e.head, n) and not in_s[e.head] and e.cap > 0:
            return False
    return True


def min_cut_edges(network: ResidualNetwork, src_node: NodeID) -> List[Edge]:
    """
    List the real edges crossing from the source side of the residual cut.

    Returns:
        List[Edge]: ``(tail, head, index)`` tuples in adjacency order.
    """
    in_s = residual_reachable(network, src_node)
    return [
        (u, e.head, i)
        for u, i, e in network.edges()
        if e.orig_cap > 0 and in_s[u] and not in_s[e.head]
    ]


def validate_flow(
    network: ResidualNetwork, src_node: NodeID, dst_node: NodeID
) -> FlowCheck:
    """Run all three validators and bundle their verdicts."""
    return FlowCheck(
        capacity_ok=capacity_constraints(network),
        conservation_ok=flow_conservation(network, src_node, dst_node),
        saturated_cut_ok=saturated_cut_exists(network, src_node, dst_node),
    )
