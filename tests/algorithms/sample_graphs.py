"""Sample flow instances shared by the engine, validator and testbed tests.

Every builder returns a fresh FlowCase so tests may mutate the network.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, List, NamedTuple, Tuple

import pytest

from resflow.graph import ResidualNetwork


class FlowCase(NamedTuple):
    network: ResidualNetwork
    src: int
    dst: int
    expected: int


def build(n: int, edges: List[Tuple[int, int, int]]) -> ResidualNetwork:
    net = ResidualNetwork(n)
    for u, v, c in edges:
        net.add_edge(u, v, c)
    return net


def four_node() -> FlowCase:
    #        [3]      [2]
    #    ┌───────►1───────┐
    #    │        │       ▼
    #    0     [1]│       3
    #    │        ▼       ▲
    #    └───────►2───────┘
    #        [2]      [3]
    return FlowCase(
        build(4, [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)]), 0, 3, 5
    )


def line() -> FlowCase:
    # 0 --[5]--> 1 --[3]--> 2
    return FlowCase(build(3, [(0, 1, 5), (1, 2, 3)]), 0, 2, 3)


def clrs() -> FlowCase:
    # Classic six-vertex instance with antiparallel 1<->2 edges
    return FlowCase(
        build(
            6,
            [
                (0, 1, 16),
                (0, 2, 13),
                (1, 2, 10),
                (2, 1, 4),
                (1, 3, 12),
                (3, 2, 9),
                (2, 4, 14),
                (4, 3, 7),
                (3, 5, 20),
                (4, 5, 4),
            ],
        ),
        0,
        5,
        23,
    )


def parallel_edges() -> FlowCase:
    return FlowCase(build(3, [(0, 1, 2), (0, 1, 3), (1, 2, 10)]), 0, 2, 5)


def antiparallel() -> FlowCase:
    return FlowCase(build(3, [(0, 1, 4), (1, 0, 4), (1, 2, 3)]), 0, 2, 3)


def self_loop() -> FlowCase:
    return FlowCase(build(3, [(0, 1, 2), (1, 1, 7), (1, 2, 2)]), 0, 2, 2)


def disconnected() -> FlowCase:
    return FlowCase(build(4, [(0, 1, 5), (2, 3, 5)]), 0, 3, 0)


def source_isolated() -> FlowCase:
    # Edges only point into the source
    return FlowCase(build(3, [(1, 0, 5), (2, 0, 5), (1, 2, 5)]), 0, 2, 0)


def zero_capacity() -> FlowCase:
    return FlowCase(build(3, [(0, 1, 0), (1, 2, 4)]), 0, 2, 0)


def sink_first() -> FlowCase:
    # Sink has a lower index than the source; flow must route back through 2
    return FlowCase(build(4, [(3, 2, 6), (2, 0, 4), (3, 1, 2), (1, 0, 5)]), 3, 0, 6)


def zigzag() -> FlowCase:
    # DFS order first picks 0-1-2-3, which the optimum has to undo
    return FlowCase(
        build(4, [(0, 1, 1000), (0, 2, 1000), (1, 2, 1), (1, 3, 1000), (2, 3, 1000)]),
        0,
        3,
        2000,
    )


def dead_end_branch() -> FlowCase:
    # Vertex 2 is in the level graph but leads nowhere; vertex 4 drains excess back
    return FlowCase(
        build(
            6,
            [(0, 1, 4), (0, 2, 5), (0, 4, 3), (1, 5, 4), (4, 2, 3), (2, 3, 10), (1, 3, 1)],
        ),
        0,
        5,
        4,
    )


def random_network(
    seed: int, n: int = 12, density: float = 0.3, max_cap: int = 20
) -> Tuple[ResidualNetwork, List[Tuple[int, int, int]]]:
    """Random directed network; returns the network and its edge list."""
    rng = random.Random(seed)
    edges = []
    for u in range(n):
        for v in range(n):
            if u != v and rng.random() < density:
                edges.append((u, v, rng.randint(0, max_cap)))
    return build(n, edges), edges


CASE_BUILDERS: Dict[str, Callable[[], FlowCase]] = {
    "four_node": four_node,
    "line": line,
    "clrs": clrs,
    "parallel_edges": parallel_edges,
    "antiparallel": antiparallel,
    "self_loop": self_loop,
    "disconnected": disconnected,
    "source_isolated": source_isolated,
    "zero_capacity": zero_capacity,
    "sink_first": sink_first,
    "zigzag": zigzag,
    "dead_end_branch": dead_end_branch,
}


@pytest.fixture(params=sorted(CASE_BUILDERS))
def flow_case(request) -> FlowCase:
    return CASE_BUILDERS[request.param]()


@pytest.fixture
def four_node_case() -> FlowCase:
    return four_node()


@pytest.fixture
def clrs_case() -> FlowCase:
    return clrs()
