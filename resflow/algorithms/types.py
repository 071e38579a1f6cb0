"""Trace events and result types shared by the max-flow engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, List, Optional, Tuple, Type, TypeVar, Union

if TYPE_CHECKING:
    from resflow.graph import ResidualNetwork

# Real edge identifier: (tail, head, index of the forward record in adj(tail))
Edge = Tuple[int, int, int]


@dataclass(frozen=True)
class LevelsSnapshot:
    """Per-vertex labels: BFS levels (Dinic) or heights (Goldberg-Tarjan)."""

    levels: Tuple[int, ...]


@dataclass(frozen=True)
class PathFound:
    """An augmenting path, vertices in source-to-sink order."""

    nodes: Tuple[int, ...]


@dataclass(frozen=True)
class PushApplied:
    """``amount`` units moved over the residual arc ``u -> v``."""

    u: int
    v: int
    amount: int


@dataclass(frozen=True)
class Relabeled:
    """Height change of one vertex during preflow-push."""

    vertex: int
    old_height: int
    new_height: int


@dataclass(frozen=True)
class CutCertificate:
    """Vertices reachable from the source over positive-residual arcs."""

    reachable: FrozenSet[int]


TraceEvent = Union[LevelsSnapshot, PathFound, PushApplied, Relabeled, CutCertificate]

#: Receives trace events synchronously, in algorithm order. Must not mutate
#: the network being solved.
EventSink = Callable[[TraceEvent], None]

_E = TypeVar("_E", LevelsSnapshot, PathFound, PushApplied, Relabeled, CutCertificate)


@dataclass
class TraceRecorder:
    """Event sink that keeps every event it receives.

    Example:
        >>> rec = TraceRecorder()
        >>> flow = edmonds_karp(net, 0, 3, event_sink=rec)
        >>> rec.last_cut().reachable
        frozenset({0})
    """

    events: List[TraceEvent] = field(default_factory=list)

    def __call__(self, event: TraceEvent) -> None:
        self.events.append(event)

    def __len__(self) -> int:
        return len(self.events)

    def of_type(self, event_type: Type[_E]) -> List[_E]:
        """Return recorded events of one type, in arrival order."""
        return [e for e in self.events if isinstance(e, event_type)]

    def last_cut(self) -> Optional[CutCertificate]:
        """Return the most recent cut event, or None when none was recorded."""
        for event in reversed(self.events):
            if isinstance(event, CutCertificate):
                return event
        return None


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: The maximum flow value achieved.
        edge_flow: Flow on each real edge, keyed by (tail, head, index).
        residual_cap: Remaining capacity on each real edge.
        reachable: Vertices reachable from the source in the final residual network.
        min_cut: Real edges crossing from ``reachable`` to its complement.
        network: The solved network the summary was read from.
    """

    total_flow: int
    edge_flow: Dict[Edge, int]
    residual_cap: Dict[Edge, int]
    reachable: FrozenSet[int]
    min_cut: List[Edge]
    network: "ResidualNetwork" = field(repr=False, compare=False)

    @property
    def cut_capacity(self) -> int:
        """Total original capacity of the min-cut edges."""
        return sum(self.edge_flow[e] + self.residual_cap[e] for e in self.min_cut)
