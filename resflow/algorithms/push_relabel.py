"""FIFO preflow-push max flow (Goldberg-Tarjan).

The engine keeps a height label and an excess per vertex. Initialization
lifts the source to height ``n`` and saturates every arc leaving it. Active
vertices (positive excess, not source or sink) wait in a FIFO queue; each is
discharged by pushing over admissible arcs (``height[u] == height[v] + 1``)
in current-arc order, and relabeled to one above its lowest residual
neighbour whenever its cursor runs out. When the queue empties the preflow
is a valid flow and the sink's excess is its value.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from resflow.algorithms.common import check_endpoints, emit_cut
from resflow.algorithms.types import EventSink, LevelsSnapshot, PushApplied, Relabeled
from resflow.exceptions import FlowInvariantError
from resflow.graph import NodeID, ResidualEdge, ResidualNetwork
from resflow.logging import get_logger

_logger = get_logger(__name__)


class _PreflowState:
    """Labels, excesses, active queue and cursors for one run."""

    def __init__(
        self,
        network: ResidualNetwork,
        src_node: NodeID,
        dst_node: NodeID,
        event_sink: Optional[EventSink],
    ) -> None:
        n = network.size()
        self.network = network
        self.src_node = src_node
        self.dst_node = dst_node
        self.event_sink = event_sink
        self.height: List[int] = [0] * n
        self.excess: List[int] = [0] * n
        self.active: Deque[NodeID] = deque()
        self.in_queue: List[bool] = [False] * n
        self.current: List[int] = [0] * n
        self.pushes = 0
        self.relabels = 0

    def activate(self, v: NodeID) -> None:
        if (
            v != self.src_node
            and v != self.dst_node
            and not self.in_queue[v]
            and self.excess[v] > 0
        ):
            self.active.append(v)
            self.in_queue[v] = True

    def push(self, u: NodeID, e: ResidualEdge, amount: int) -> None:
        self.network.push(e, amount)
        self.excess[u] -= amount
        self.excess[e.head] += amount
        self.pushes += 1
        if self.event_sink is not None:
            self.event_sink(PushApplied(u, e.head, amount))
        self.activate(e.head)

    def relabel(self, u: NodeID) -> bool:
        """
        Lift ``u`` to one above its lowest residual neighbour.

        Returns:
            bool: False if ``u`` has no residual arc; its height is then unchanged.
        """
        min_height = None
        for e in self.network.adj(u):
            if e.cap > 0 and (min_height is None or self.height[e.head] < min_height):
                min_height = self.height[e.head]
        if min_height is None:
            return False

        old_height = self.height[u]
        self.height[u] = min_height + 1
        self.relabels += 1
        if self.event_sink is not None:
            self.event_sink(Relabeled(u, old_height, self.height[u]))
            self.event_sink(LevelsSnapshot(tuple(self.height)))
        return True

    def discharge(self, u: NodeID) -> None:
        """Push excess out of ``u`` until it is zero, relabeling as needed."""
        adj = self.network.adj(u)
        while self.excess[u] > 0:
            if self.current[u] >= len(adj):
                if not self.relabel(u):
                    raise FlowInvariantError(
                        f"Vertex {u} holds excess {self.excess[u]} "
                        "but has no residual outgoing arc."
                    )
                self.current[u] = 0
                continue

            e = adj[self.current[u]]
            if e.cap > 0 and self.height[u] == self.height[e.head] + 1:
                self.push(u, e, min(self.excess[u], e.cap))
            else:
                self.current[u] += 1


def goldberg_tarjan(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    event_sink: Optional[EventSink] = None,
) -> int:
    """
    Maximum flow by FIFO preflow-push with height labels.

    Args:
        network: Residual network, mutated in place.
        src_node: Source vertex.
        dst_node: Sink vertex.
        event_sink: Optional receiver of trace events: a LevelsSnapshot after
            initialization and after every relabel, Relabeled per relabel,
            PushApplied per push (including the initial saturating pushes),
            and a closing CutCertificate.

    Returns:
        int: The maximum flow value (the sink's excess at termination).

    Raises:
        InvalidArgumentError: If an endpoint is out of range.
        FlowInvariantError: If an active vertex is left with no residual arc.
    """
    check_endpoints(network, src_node, dst_node)
    if src_node == dst_node:
        return 0

    state = _PreflowState(network, src_node, dst_node, event_sink)
    state.height[src_node] = network.size()
    if event_sink is not None:
        event_sink(LevelsSnapshot(tuple(state.height)))

    for e in network.adj(src_node):
        if e.cap > 0:
            state.push(src_node, e, e.cap)

    while state.active:
        u = state.active.popleft()
        state.in_queue[u] = False
        state.discharge(u)
        # Re-enqueue if excess remains
        state.activate(u)

    emit_cut(network, src_node, event_sink)
    _logger.debug(
        "goldberg_tarjan finished: flow=%d, %d pushes, %d relabels",
        state.excess[dst_node],
        state.pushes,
        state.relabels,
    )
    return state.excess[dst_node]
