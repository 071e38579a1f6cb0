"""NetworkX graph conversion utilities.

This module converts between NetworkX graphs and resflow's ResidualNetwork,
so instances can be built with NetworkX and flows read back onto it.

Example:
    >>> import networkx as nx
    >>> from resflow.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", capacity=10)
    >>> G.add_edge("B", "C", capacity=5)
    >>>
    >>> network, node_map, edge_map = from_networkx(G)
    >>> dinic(network, node_map.to_index["A"], node_map.to_index["C"])
    5
    >>>
    >>> G_out = to_networkx(network, node_map, edge_map)
    >>> G_out.edges["B", "C", 0]["flow"]
    5
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

from resflow.exceptions import InvalidArgumentError
from resflow.graph import ResidualNetwork

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex indices.

    Attributes:
        to_index: Maps original node names to vertex indices
        to_name: Maps vertex indices back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from a list of node names in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)


# Type alias for edge references: (source_node, target_node, edge_key)
EdgeRef = Tuple[Hashable, Hashable, Any]

# Position of a forward record: (tail vertex, index within adj(tail))
EdgeLocator = Tuple[int, int]


@dataclass
class EdgeMap:
    """Mapping between original NetworkX edges and forward records.

    Attributes:
        to_ref: Maps internal edge ID to original (source, target, key) tuple
        from_ref: Maps original (source, target, key) to internal edge IDs
            (a list because undirected input yields one ID per direction)
        locators: Maps internal edge ID to the forward record's position
    """

    to_ref: Dict[int, EdgeRef] = field(default_factory=dict)
    from_ref: Dict[EdgeRef, List[int]] = field(default_factory=dict)
    locators: Dict[int, EdgeLocator] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.to_ref)

    def edge_flow(self, network: ResidualNetwork, edge_id: int) -> int:
        """Return the flow on the forward record of ``edge_id``."""
        u, i = self.locators[edge_id]
        return network.adj(u)[i].flow


def _as_capacity(value: Any, edge_ref: EdgeRef) -> int:
    # Accept integral floats such as 5.0; reject anything fractional
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(
            f"Edge {edge_ref} has non-integer capacity {value!r}."
        )
    return int(value)


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: int = 1,
) -> Tuple[ResidualNetwork, NodeMap, EdgeMap]:
    """Convert a NetworkX graph to a ResidualNetwork.

    Node names are mapped to vertex indices in ``str``-sorted order.
    Undirected graphs get one directed edge per direction.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph)
        capacity_attr: Edge attribute name for capacity (default: "capacity")
        default_capacity: Capacity when the attribute is missing (default: 1)

    Returns:
        Tuple of (network, node_map, edge_map).

    Raises:
        TypeError: If G is not a NetworkX graph
        InvalidArgumentError: If a capacity is negative or not integral
    """
    import networkx as nx

    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    node_names = sorted(G.nodes(), key=str)
    node_map = NodeMap.from_names(node_names)
    network = ResidualNetwork(len(node_names))
    edge_map = EdgeMap()

    if G.is_multigraph():
        edges_iter = G.edges(keys=True, data=True)
    else:
        edges_iter = ((u, v, 0, d) for u, v, d in G.edges(data=True))

    directions = 1 if G.is_directed() else 2
    edge_id = 0
    for u, v, key, data in edges_iter:
        edge_ref: EdgeRef = (u, v, key)
        cap = _as_capacity(data.get(capacity_attr, default_capacity), edge_ref)
        ends = [(node_map.to_index[u], node_map.to_index[v])]
        if directions == 2:
            ends.append((ends[0][1], ends[0][0]))
        for tail, head in ends:
            index = network.add_edge(tail, head, cap)
            edge_map.to_ref[edge_id] = edge_ref
            edge_map.from_ref.setdefault(edge_ref, []).append(edge_id)
            edge_map.locators[edge_id] = (tail, index)
            edge_id += 1

    return network, node_map, edge_map


def to_networkx(
    network: ResidualNetwork,
    node_map: Optional[NodeMap] = None,
    edge_map: Optional[EdgeMap] = None,
    *,
    capacity_attr: str = "capacity",
    flow_attr: str = "flow",
) -> "nx.MultiDiGraph":
    """Convert a ResidualNetwork back to a NetworkX MultiDiGraph.

    Only real edges are exported, each with its capacity and current flow.
    With a NodeMap, original node names are restored; with an EdgeMap,
    original edge keys are reused (suffixed for the reverse direction of
    undirected input).

    Args:
        network: ResidualNetwork to convert
        node_map: Optional NodeMap to restore original node names
        edge_map: Optional EdgeMap to restore original edge keys
        capacity_attr: Edge attribute name for capacity (default: "capacity")
        flow_attr: Edge attribute name for flow (default: "flow")

    Returns:
        nx.MultiDiGraph with one edge per real edge of ``network``
    """
    import networkx as nx

    def name(idx: int) -> Hashable:
        return node_map.to_name.get(idx, idx) if node_map is not None else idx

    G = nx.MultiDiGraph()
    G.add_nodes_from(name(idx) for idx in range(network.size()))

    keys: Dict[EdgeLocator, Any] = {}
    if edge_map is not None:
        for edge_id, locator in edge_map.locators.items():
            ref = edge_map.to_ref[edge_id]
            if edge_map.from_ref[ref][0] == edge_id:
                keys[locator] = ref[2]
            else:
                keys[locator] = (ref[2], "reverse")

    for u, i, e in network.edges():
        if e.orig_cap <= 0:
            continue
        G.add_edge(
            name(u),
            name(e.head),
            key=keys.get((u, i)),
            **{capacity_attr: e.orig_cap, flow_attr: e.flow},
        )

    return G
