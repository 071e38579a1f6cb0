from __future__ import annotations

from pickle import dumps, loads
from typing import Iterator, List, Tuple

from resflow.algorithms.base import INF
from resflow.exceptions import FlowInvariantError, InvalidArgumentError

#: Vertices are dense integer indices ``0..n-1``.
NodeID = int


class ResidualEdge:
    """
    One directed arc ``u -> head`` of a residual network.

    Every real edge of the input is stored as two paired records: a forward
    record at ``u`` and a reverse record at ``head``. The pair is linked by
    position, not by reference: ``rev`` is the index of the partner record
    inside ``adj(head)``.

    Attributes:
        head (int): Destination vertex.
        rev (int): Index of the paired reverse edge within ``adj(head)``.
        cap (int): Current residual capacity (never negative).
        flow (int): Signed flow attributed to this direction.
        orig_cap (int): Capacity at creation; 0 marks a pure residual arc.
    """

    __slots__ = ("head", "rev", "cap", "flow", "orig_cap")

    def __init__(self, head: int, rev: int, cap: int, orig_cap: int) -> None:
        self.head = head
        self.rev = rev
        self.cap = cap
        self.flow = 0
        self.orig_cap = orig_cap

    @property
    def is_forward(self) -> bool:
        """True for records that stand for a real input edge."""
        return self.orig_cap > 0

    def __getstate__(self) -> Tuple[int, int, int, int, int]:
        return (self.head, self.rev, self.cap, self.flow, self.orig_cap)

    def __setstate__(self, state: Tuple[int, int, int, int, int]) -> None:
        self.head, self.rev, self.cap, self.flow, self.orig_cap = state

    def __repr__(self) -> str:
        return (
            f"ResidualEdge(head={self.head}, rev={self.rev}, cap={self.cap}, "
            f"flow={self.flow}, orig_cap={self.orig_cap})"
        )


class ResidualNetwork:
    """
    Adjacency-list residual network over vertices ``0..n-1``.

    This class enforces:
      - Capacities are non-negative integers.
      - Edges reference existing vertices only; vertices are fixed at
        construction.
      - Edges are only ever appended, so adjacency order is insertion order
        and the ``rev`` links stay valid for the lifetime of the network.
      - copy() performs a pickle-based deep copy that keeps the current
        residual state of every record.

    All max-flow engines mutate a network in place. Run each engine on its
    own copy when comparing results.
    """

    def __init__(self, n: int) -> None:
        """
        Initialize a network with ``n`` isolated vertices.

        Args:
            n (int): Number of vertices.

        Raises:
            InvalidArgumentError: If ``n`` is negative or not an integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidArgumentError(
                f"Vertex count must be a non-negative integer, got {n!r}."
            )
        self._n = n
        self._adj: List[List[ResidualEdge]] = [[] for _ in range(n)]
        self._num_edges = 0

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"ResidualNetwork(n={self._n}, edges={self._num_edges})"

    def size(self) -> int:
        """Return the number of vertices."""
        return self._n

    def num_edges(self) -> int:
        """Return the number of real (input) edges added so far."""
        return self._num_edges

    def check_vertex(self, u: NodeID, role: str = "Vertex") -> None:
        """
        Raise InvalidArgumentError unless ``u`` is a valid vertex index.

        Args:
            u (NodeID): Index to check.
            role (str): Name used in the error message (e.g. "Source").
        """
        if isinstance(u, bool) or not isinstance(u, int) or not 0 <= u < self._n:
            raise InvalidArgumentError(
                f"{role} '{u}' is out of range for a network of {self._n} vertices."
            )

    #
    # Construction
    #
    def add_edge(self, u: NodeID, v: NodeID, capacity: int) -> int:
        """
        Add a directed edge ``u -> v`` with the given capacity.

        Appends the forward record to ``adj(u)`` and its reverse record to
        ``adj(v)``. A self-loop puts both records into the same list.

        Args:
            u (NodeID): Tail vertex.
            v (NodeID): Head vertex.
            capacity (int): Non-negative integer capacity.

        Returns:
            int: Index of the forward record within ``adj(u)``.

        Raises:
            InvalidArgumentError: If either vertex is out of range or the
                capacity is not an integer in ``[0, INF]``.
        """
        self.check_vertex(u, "Source node")
        self.check_vertex(v, "Target node")
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidArgumentError(
                f"Capacity must be an integer, got {type(capacity).__name__}."
            )
        if capacity < 0:
            raise InvalidArgumentError(
                f"Capacity must be non-negative, got {capacity} on edge {u}->{v}."
            )
        if capacity > INF:
            raise InvalidArgumentError(
                f"Capacity {capacity} on edge {u}->{v} exceeds the maximum {INF}."
            )

        fwd_index = len(self._adj[u])
        # For a self-loop the reverse record lands right after the forward one
        rev_index = len(self._adj[v]) + (1 if u == v else 0)
        self._adj[u].append(ResidualEdge(v, rev_index, capacity, capacity))
        self._adj[v].append(ResidualEdge(u, fwd_index, 0, 0))
        self._num_edges += 1
        return fwd_index

    def copy(self) -> ResidualNetwork:
        """
        Create an independent deep copy, including current residual state.

        Returns:
            ResidualNetwork: A network whose records carry the same ``cap``
                and ``flow`` values as this one.
        """
        return loads(dumps(self))

    clone = copy

    def reset_flow(self) -> None:
        """Return every record to its construction state (no flow)."""
        for row in self._adj:
            for e in row:
                e.cap = e.orig_cap
                e.flow = 0

    #
    # Access
    #
    def adj(self, u: NodeID) -> List[ResidualEdge]:
        """
        Return the live, insertion-ordered list of edges leaving ``u``.

        Raises:
            InvalidArgumentError: If ``u`` is out of range.
        """
        self.check_vertex(u)
        return self._adj[u]

    def reverse(self, e: ResidualEdge) -> ResidualEdge:
        """Return the record paired with ``e``."""
        return self._adj[e.head][e.rev]

    def edges(self) -> Iterator[Tuple[NodeID, int, ResidualEdge]]:
        """Yield ``(tail, index, edge)`` for every record, forward and reverse."""
        for u, row in enumerate(self._adj):
            for i, e in enumerate(row):
                yield u, i, e

    def forward_edges(self) -> Iterator[Tuple[NodeID, ResidualEdge]]:
        """Yield ``(tail, edge)`` for records that stand for real input edges."""
        for u, row in enumerate(self._adj):
            for e in row:
                if e.orig_cap > 0:
                    yield u, e

    #
    # Mutation
    #
    def push(self, e: ResidualEdge, amount: int) -> None:
        """
        Send ``amount`` units along ``e`` and credit its reverse record.

        Raises:
            FlowInvariantError: If ``amount`` is negative or exceeds the
                residual capacity of ``e``.
        """
        if amount < 0 or amount > e.cap:
            raise FlowInvariantError(
                f"Cannot push {amount} units over an arc with residual capacity {e.cap}."
            )
        rev = self._adj[e.head][e.rev]
        e.cap -= amount
        rev.cap += amount
        e.flow += amount
        rev.flow -= amount

    #
    # Diagnostics
    #
    def check_invariants(self) -> None:
        """
        Verify pairing, capacity conservation, flow relation and non-negativity.

        Raises:
            FlowInvariantError: Describing the first violation found.
        """
        for u, i, e in self.edges():
            if e.cap < 0:
                raise FlowInvariantError(
                    f"Negative residual capacity {e.cap} on arc {u}->{e.head}."
                )
            if not 0 <= e.head < self._n or not 0 <= e.rev < len(self._adj[e.head]):
                raise FlowInvariantError(
                    f"Arc {u}->{e.head} has a dangling reverse index {e.rev}."
                )
            rev = self._adj[e.head][e.rev]
            if rev.head != u or rev.rev != i:
                raise FlowInvariantError(
                    f"Arc {u}->{e.head} and its reverse record are not mutually linked."
                )
            if e.orig_cap > 0:
                if e.cap + rev.cap != e.orig_cap:
                    raise FlowInvariantError(
                        f"Arc {u}->{e.head}: residual {e.cap} + reverse {rev.cap} "
                        f"!= capacity {e.orig_cap}."
                    )
                if e.flow != e.orig_cap - e.cap or rev.flow != -e.flow:
                    raise FlowInvariantError(
                        f"Arc {u}->{e.head}: flow {e.flow} does not match "
                        f"capacity {e.orig_cap} minus residual {e.cap}."
                    )
            elif rev.orig_cap == 0 and e.cap != 0:
                # Zero-capacity input edge: neither side can ever carry flow
                raise FlowInvariantError(
                    f"Arc {u}->{e.head} of a zero-capacity pair has residual {e.cap}."
                )
