"""Tests for the blocking-flow (Dinic) engine."""

import pytest

from resflow.algorithms.base import UNREACHED
from resflow.algorithms.dinic import build_levels, dinic
from resflow.algorithms.types import (
    CutCertificate,
    LevelsSnapshot,
    PathFound,
    PushApplied,
    TraceRecorder,
)
from resflow.exceptions import InvalidArgumentError
from tests.algorithms.sample_graphs import build, dead_end_branch, four_node


class TestBuildLevels:
    def test_levels_follow_bfs_distance(self):
        """Levels equal the BFS edge distance from the source."""
        case = four_node()
        level = [0] * 4
        assert build_levels(case.network, 0, 3, level)
        assert level == [0, 1, 1, 2]

    def test_unreachable_vertices(self):
        """Vertices the source cannot reach are labelled unreached."""
        net = build(4, [(0, 1, 1), (2, 3, 1)])
        level = [7] * 4
        assert not build_levels(net, 0, 3, level)
        assert level == [0, 1, UNREACHED, UNREACHED]

    def test_saturated_arcs_are_skipped(self):
        """A saturated arc does not extend the level graph."""
        net = build(3, [(0, 1, 2), (1, 2, 2)])
        net.push(net.adj(1)[1], 2)
        level = [0] * 3
        assert not build_levels(net, 0, 2, level)
        assert level[1] == 1


class TestDinic:
    def test_four_node_phases(self):
        """Two phases: a level snapshot each, then their augmenting paths."""
        case = four_node()
        rec = TraceRecorder()
        assert dinic(case.network, 0, 3, event_sink=rec) == 5

        assert [s.levels for s in rec.of_type(LevelsSnapshot)] == [
            (0, 1, 1, 2),
            (0, 1, 2, 3),
        ]
        assert [p.nodes for p in rec.of_type(PathFound)] == [
            (0, 1, 3),
            (0, 2, 3),
            (0, 1, 2, 3),
        ]
        assert isinstance(rec.events[0], LevelsSnapshot)
        assert isinstance(rec.events[-1], CutCertificate)
        assert rec.last_cut().reachable == frozenset({0})
        case.network.check_invariants()

    def test_push_events_match_paths(self):
        """Every arc of every path gets one push of the path bottleneck."""
        case = four_node()
        rec = TraceRecorder()
        dinic(case.network, 0, 3, event_sink=rec)
        pushes = [(p.u, p.v, p.amount) for p in rec.of_type(PushApplied)]
        assert pushes == [
            (0, 1, 2),
            (1, 3, 2),
            (0, 2, 2),
            (2, 3, 2),
            (0, 1, 1),
            (1, 2, 1),
            (2, 3, 1),
        ]

    def test_dead_end_is_pruned(self):
        """A level-graph branch that cannot reach the sink is abandoned."""
        case = dead_end_branch()
        assert dinic(case.network, case.src, case.dst) == case.expected
        case.network.check_invariants()

    def test_long_chain_does_not_recurse(self):
        """A path longer than the recursion limit is handled iteratively."""
        n = 5000
        net = build(n, [(i, i + 1, 3) for i in range(n - 1)])
        assert dinic(net, 0, n - 1) == 3

    def test_source_equals_sink(self):
        """Identical endpoints give zero flow and no trace events."""
        case = four_node()
        rec = TraceRecorder()
        assert dinic(case.network, 1, 1, event_sink=rec) == 0
        assert rec.events == []

    def test_out_of_range(self):
        """Endpoints outside the network are rejected."""
        with pytest.raises(InvalidArgumentError):
            dinic(four_node().network, 0, 9)

    def test_unreachable_sink_emits_only_cut(self):
        """With the sink unreachable the trace holds just the final cut."""
        net = build(3, [(0, 1, 4)])
        rec = TraceRecorder()
        assert dinic(net, 0, 2, event_sink=rec) == 0
        assert rec.events == [CutCertificate(frozenset({0, 1}))]
