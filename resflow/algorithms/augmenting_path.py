"""Augmenting-path max flow: Ford-Fulkerson (DFS) and Edmonds-Karp (BFS).

Both engines share one loop: find a single source-to-sink path over arcs
with positive residual capacity, push its bottleneck, repeat until the sink
is unreachable. They differ only in the search order, which changes the
number of iterations (pseudo-polynomial for DFS, ``O(VE)`` augmentations
for BFS) but not the result.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, List, Optional

from resflow.algorithms.common import augment_along, check_endpoints, emit_cut
from resflow.algorithms.types import EventSink
from resflow.config import SOLVER_CONFIG
from resflow.graph import NodeID, ResidualNetwork
from resflow.logging import get_logger

_logger = get_logger(__name__)

#: Fills ``prev_node``/``prev_edge`` and returns True when the sink was reached.
PathSearch = Callable[[ResidualNetwork, NodeID, NodeID, List[int], List[int]], bool]


def find_path_dfs(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    prev_node: List[int],
    prev_edge: List[int],
) -> bool:
    """
    Depth-first search for one augmenting path.

    Uses an explicit stack and a cursor per vertex, so every arc is looked at
    once per search and neighbours are tried in adjacency order.
    """
    n = network.size()
    for v in range(n):
        prev_node[v] = -1
        prev_edge[v] = -1
    cursor = [0] * n

    prev_node[src_node] = src_node  # mark source as discovered
    stack = [src_node]
    while stack:
        node = stack[-1]
        if node == dst_node:
            return True

        adj = network.adj(node)
        advanced = False
        while cursor[node] < len(adj):
            i = cursor[node]
            cursor[node] = i + 1
            e = adj[i]
            if e.cap <= 0 or prev_node[e.head] != -1:
                continue
            prev_node[e.head] = node
            prev_edge[e.head] = i
            stack.append(e.head)
            advanced = True
            break

        if not advanced:
            stack.pop()
    return False


def find_path_bfs(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    prev_node: List[int],
    prev_edge: List[int],
) -> bool:
    """
    Breadth-first search for a shortest (by edge count) augmenting path.
    """
    for v in range(network.size()):
        prev_node[v] = -1
        prev_edge[v] = -1

    prev_node[src_node] = src_node
    queue: Deque[NodeID] = deque([src_node])
    while queue:
        node = queue.popleft()
        for i, e in enumerate(network.adj(node)):
            if e.cap <= 0 or prev_node[e.head] != -1:
                continue
            prev_node[e.head] = node
            prev_edge[e.head] = i
            if e.head == dst_node:
                return True
            queue.append(e.head)
    return False


def augmenting_path_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    find_path: PathSearch,
    event_sink: Optional[EventSink] = None,
) -> int:
    """
    Run the generic augmenting-path loop with the given path search.

    Args:
        network: Residual network, mutated in place.
        src_node: Source vertex.
        dst_node: Sink vertex.
        find_path: Path search policy (``find_path_dfs`` or ``find_path_bfs``).
        event_sink: Optional receiver of trace events.

    Returns:
        int: The maximum flow value.

    Raises:
        InvalidArgumentError: If an endpoint is out of range.
    """
    check_endpoints(network, src_node, dst_node)
    if src_node == dst_node:
        return 0

    n = network.size()
    prev_node = [-1] * n
    prev_edge = [-1] * n

    flow = 0
    iterations = 0
    while find_path(network, src_node, dst_node, prev_node, prev_edge):
        flow += augment_along(
            network, src_node, dst_node, prev_node, prev_edge, event_sink
        )
        iterations += 1
        if SOLVER_CONFIG.should_log_progress(iterations):
            _logger.debug("Augmentation %d: flow so far %d", iterations, flow)

    emit_cut(network, src_node, event_sink)
    _logger.debug(
        "%s finished: flow=%d after %d augmentations",
        find_path.__name__,
        flow,
        iterations,
    )
    return flow


def ford_fulkerson(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    event_sink: Optional[EventSink] = None,
) -> int:
    """
    Maximum flow by depth-first augmenting paths.

    Examples:
        >>> net = ResidualNetwork(3)
        >>> _ = net.add_edge(0, 1, 4)
        >>> _ = net.add_edge(1, 2, 3)
        >>> ford_fulkerson(net, 0, 2)
        3
    """
    return augmenting_path_max_flow(
        network, src_node, dst_node, find_path_dfs, event_sink
    )


def edmonds_karp(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    event_sink: Optional[EventSink] = None,
) -> int:
    """Maximum flow by breadth-first (shortest) augmenting paths."""
    return augmenting_path_max_flow(
        network, src_node, dst_node, find_path_bfs, event_sink
    )
