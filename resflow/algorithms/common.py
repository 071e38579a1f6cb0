"""Helpers shared by the max-flow engines."""

from __future__ import annotations

from typing import List, Optional, Tuple

from resflow.algorithms.base import INF
from resflow.algorithms.types import CutCertificate, EventSink, PathFound, PushApplied
from resflow.graph import NodeID, ResidualNetwork
from resflow.validators import reachable_set


def check_endpoints(network: ResidualNetwork, src_node: NodeID, dst_node: NodeID) -> None:
    """Raise InvalidArgumentError unless both endpoints are valid vertices."""
    network.check_vertex(src_node, "Source node")
    network.check_vertex(dst_node, "Destination node")


def emit_cut(
    network: ResidualNetwork, src_node: NodeID, event_sink: Optional[EventSink]
) -> None:
    """Send the residual-reachability cut to ``event_sink`` if there is one."""
    if event_sink is not None:
        event_sink(CutCertificate(reachable_set(network, src_node)))


def path_nodes(src_node: NodeID, dst_node: NodeID, prev_node: List[int]) -> List[NodeID]:
    """Rebuild the source-to-sink vertex sequence from predecessor links."""
    nodes = [dst_node]
    node = dst_node
    while node != src_node:
        node = prev_node[node]
        nodes.append(node)
    nodes.reverse()
    return nodes


def augment_along(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    prev_node: List[int],
    prev_edge: List[int],
    event_sink: Optional[EventSink] = None,
) -> int:
    """
    Push the bottleneck amount along the path encoded in the predecessor links.

    ``prev_node[v]`` is the vertex before ``v`` on the path and
    ``prev_edge[v]`` the index of the arc ``prev_node[v] -> v`` within
    ``adj(prev_node[v])``.

    Returns:
        int: The bottleneck that was pushed.
    """
    nodes = path_nodes(src_node, dst_node, prev_node)
    arcs: List[Tuple[NodeID, NodeID]] = list(zip(nodes, nodes[1:]))

    bottleneck = INF
    for u, v in arcs:
        e = network.adj(u)[prev_edge[v]]
        if e.cap < bottleneck:
            bottleneck = e.cap

    if event_sink is not None:
        event_sink(PathFound(tuple(nodes)))

    for u, v in arcs:
        network.push(network.adj(u)[prev_edge[v]], bottleneck)
        if event_sink is not None:
            event_sink(PushApplied(u, v, bottleneck))

    return bottleneck
