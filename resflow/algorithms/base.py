from __future__ import annotations

from enum import IntEnum

#: Stand-in for "unbounded" when taking bottleneck minimums, and the largest
#: capacity add_edge accepts. Kept well below the signed 64-bit maximum so sums
#: of a few such values stay in range.
INF = (2**63 - 1) // 4

#: Label of a vertex that is unreachable in the current level graph.
UNREACHED = -1


class MaxFlowAlgorithm(IntEnum):
    """
    Closed set of max-flow engines.
    """

    #: Augmenting paths found by depth-first search.
    FORD_FULKERSON = 1
    #: Augmenting paths found by breadth-first search (shortest by edge count).
    EDMONDS_KARP = 2
    #: Level graph plus blocking flow with current-arc pointers.
    DINIC = 3
    #: FIFO preflow-push with height labels.
    GOLDBERG_TARJAN = 4

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. ``Edmonds-Karp``."""
        return "-".join(part.capitalize() for part in self.name.split("_"))
