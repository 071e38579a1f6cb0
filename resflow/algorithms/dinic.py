"""Blocking-flow max flow (Dinic).

Each phase builds a BFS level graph from the source over positive-residual
arcs, then saturates it with a blocking flow found by a cursor-driven DFS.
A vertex whose cursor runs out is pruned (its level set to -1) for the rest
of the phase. Together with cursors that only move forward this bounds the
work per phase by ``O(VE)``.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from resflow.algorithms.base import INF, UNREACHED
from resflow.algorithms.common import check_endpoints, emit_cut
from resflow.algorithms.types import EventSink, LevelsSnapshot, PathFound, PushApplied
from resflow.config import SOLVER_CONFIG
from resflow.graph import NodeID, ResidualNetwork
from resflow.logging import get_logger

_logger = get_logger(__name__)


def build_levels(
    network: ResidualNetwork, src_node: NodeID, dst_node: NodeID, level: List[int]
) -> bool:
    """
    Assign BFS levels from ``src_node`` over positive-residual arcs.

    Args:
        network: Residual network.
        src_node: Source vertex (level 0).
        dst_node: Sink vertex.
        level: Output array, overwritten; unreachable vertices get -1.

    Returns:
        bool: True if the sink received a level.
    """
    for v in range(len(level)):
        level[v] = UNREACHED
    level[src_node] = 0
    queue: Deque[NodeID] = deque([src_node])
    while queue:
        node = queue.popleft()
        for e in network.adj(node):
            if e.cap > 0 and level[e.head] == UNREACHED:
                level[e.head] = level[node] + 1
                queue.append(e.head)
    return level[dst_node] != UNREACHED


def _find_blocking_path(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    level: List[int],
    ptr: List[int],
) -> Optional[List[NodeID]]:
    """
    Walk admissible arcs from the source to the sink, advancing cursors.

    On success the returned vertices, except the sink, have ``ptr[v]``
    pointing at the arc the path leaves them by. Dead ends are pruned.

    Returns:
        The source-to-sink vertex sequence, or None when the phase is blocked.
    """
    path: List[NodeID] = []
    node = src_node
    while node != dst_node:
        adj = network.adj(node)
        next_level = level[node] + 1
        while ptr[node] < len(adj):
            e = adj[ptr[node]]
            if e.cap > 0 and level[e.head] == next_level:
                break
            ptr[node] += 1
        else:
            # Dead end: drop the vertex from this phase and retreat
            level[node] = UNREACHED
            if not path:
                return None
            node = path.pop()
            ptr[node] += 1
            continue
        path.append(node)
        node = adj[ptr[node]].head

    path.append(dst_node)
    return path


def dinic(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    event_sink: Optional[EventSink] = None,
) -> int:
    """
    Maximum flow by repeated level-graph blocking flows.

    Args:
        network: Residual network, mutated in place.
        src_node: Source vertex.
        dst_node: Sink vertex.
        event_sink: Optional receiver of trace events: one LevelsSnapshot per
            phase, PathFound plus one PushApplied per arc for every
            augmentation, and a closing CutCertificate.

    Returns:
        int: The maximum flow value.

    Raises:
        InvalidArgumentError: If an endpoint is out of range.
    """
    check_endpoints(network, src_node, dst_node)
    if src_node == dst_node:
        return 0

    n = network.size()
    level = [UNREACHED] * n
    ptr = [0] * n

    flow = 0
    phases = 0
    while build_levels(network, src_node, dst_node, level):
        phases += 1
        if event_sink is not None:
            event_sink(LevelsSnapshot(tuple(level)))
        for v in range(n):
            ptr[v] = 0

        while True:
            path = _find_blocking_path(network, src_node, dst_node, level, ptr)
            if path is None:
                break

            arcs = [network.adj(u)[ptr[u]] for u in path[:-1]]
            bottleneck = INF
            for e in arcs:
                if e.cap < bottleneck:
                    bottleneck = e.cap

            if event_sink is not None:
                event_sink(PathFound(tuple(path)))
            for u, e in zip(path, arcs):
                network.push(e, bottleneck)
                if event_sink is not None:
                    event_sink(PushApplied(u, e.head, bottleneck))
            flow += bottleneck

        if SOLVER_CONFIG.should_log_progress(phases):
            _logger.debug("Phase %d complete: flow so far %d", phases, flow)

    emit_cut(network, src_node, event_sink)
    _logger.debug("dinic finished: flow=%d after %d phases", flow, phases)
    return flow
