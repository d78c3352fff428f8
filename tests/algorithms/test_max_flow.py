import copy
import random

import networkx as nx
import pytest
from pytest import approx

from graphopt.algorithms.max_flow import edmonds_karp, ford_fulkerson, max_flow
from graphopt.algorithms.types import FlowResult, PathStrategy
from graphopt.graph.weighted_digraph import WeightedDiGraph


def assert_valid_flow(graph, result, source, sink):
    """Check capacity bounds and conservation of ``result`` on ``graph``."""
    inflow = {}
    outflow = {}
    for u, neighbors in graph.items():
        for v, capacity in neighbors.items():
            f = result.edge_flow[u][v]
            assert 0 <= f <= capacity
            outflow[u] = outflow.get(u, 0) + f
            inflow[v] = inflow.get(v, 0) + f
    nodes = set(inflow) | set(outflow)
    for node in nodes - {source, sink}:
        assert inflow.get(node, 0) == approx(outflow.get(node, 0))
    net_out = outflow.get(source, 0) - inflow.get(source, 0)
    assert net_out == approx(result.total_flow)


def random_network(seed, n=8, p=0.35, max_capacity=20):
    rng = random.Random(seed)
    nodes = list(range(n))
    graph = {u: {} for u in nodes}
    for u in nodes:
        for v in nodes:
            if u != v and rng.random() < p:
                graph[u][v] = rng.randint(1, max_capacity)
    return graph


class TestMaxFlowBasic:
    def test_two_paths(self, two_paths):
        result = max_flow(two_paths, "s", "t")
        assert isinstance(result, FlowResult)
        assert result.total_flow == 4
        assert result.edge_flow["s"] == {"a": 2, "b": 2}

    def test_funnel_bottleneck(self, funnel):
        result = max_flow(funnel, "s", "t")
        assert result.total_flow == 2
        assert result.edge_flow["c"]["t"] == 2

    def test_chain(self, chain):
        assert edmonds_karp(chain, "s", "t").total_flow == 3
        assert ford_fulkerson(chain, "s", "t").total_flow == 3

    def test_sink_only_referenced_as_neighbor(self):
        result = max_flow({"s": {"a": 3}, "a": {"t": 2}}, "s", "t")
        assert result.total_flow == 2
        assert result.edge_flow == {"s": {"a": 2}, "a": {"t": 2}, "t": {}}

    def test_disconnected_terminals(self):
        result = max_flow({"s": {"a": 1}, "b": {"t": 1}}, "s", "t")
        assert result.total_flow == 0
        assert result.min_cut is not None
        assert result.min_cut.partition1 == frozenset({"s", "a"})

    def test_accepts_networkx_graph(self, two_paths):
        G = nx.DiGraph()
        for u, neighbors in two_paths.items():
            for v, w in neighbors.items():
                G.add_edge(u, v, weight=w)
        assert max_flow(G, "s", "t").total_flow == 4

    def test_accepts_weighted_digraph(self, funnel):
        graph = WeightedDiGraph.from_dict(funnel)
        assert max_flow(graph, "s", "t").total_flow == 2


class TestMaxFlowStrategies:
    @pytest.mark.parametrize(
        "fixture_name",
        ["two_paths", "funnel", "cross", "cross_bidirectional", "chain"],
    )
    def test_ford_fulkerson_matches_edmonds_karp(self, request, fixture_name):
        graph = request.getfixturevalue(fixture_name)
        ff = ford_fulkerson(graph, "s", "t")
        ek = edmonds_karp(graph, "s", "t")
        assert ff.total_flow == ek.total_flow

    @pytest.mark.parametrize("seed", range(10))
    @pytest.mark.parametrize("strategy", [PathStrategy.DFS, PathStrategy.BFS])
    def test_matches_networkx(self, seed, strategy):
        graph = random_network(seed)
        G = nx.DiGraph()
        G.add_nodes_from(graph)
        for u, neighbors in graph.items():
            for v, w in neighbors.items():
                G.add_edge(u, v, weight=w)
        expected = nx.maximum_flow_value(G, 0, 7, capacity="weight")

        result = max_flow(graph, 0, 7, strategy)
        assert result.total_flow == expected
        assert_valid_flow(graph, result, 0, 7)


class TestFlowAssignment:
    @pytest.mark.parametrize("strategy", [PathStrategy.DFS, PathStrategy.BFS])
    def test_conservation_and_capacity(self, funnel, strategy):
        result = max_flow(funnel, "s", "t", strategy)
        assert_valid_flow(funnel, result, "s", "t")

    def test_dfs_cancels_flow(self, cross):
        # DFS pushes s->a->b->t first, then s->b->a->t undoes a->b.
        result = ford_fulkerson(cross, "s", "t")
        assert result.total_flow == 2
        assert result.edge_flow["a"]["b"] == 0
        assert_valid_flow(cross, result, "s", "t")

    def test_cancellation_with_both_directions(self, cross_bidirectional):
        result = ford_fulkerson(cross_bidirectional, "s", "t")
        assert result.total_flow == 2
        assert result.edge_flow["a"]["b"] == 0
        assert result.edge_flow["b"]["a"] == 0
        assert_valid_flow(cross_bidirectional, result, "s", "t")

    def test_undirected_network(self):
        graph = {"s": {"a": 2}, "a": {"s": 2, "t": 1}, "t": {"a": 1}}
        result = edmonds_karp(graph, "s", "t")
        assert result.total_flow == 1
        assert result.edge_flow["a"]["s"] == 0
        assert result.edge_flow["t"]["a"] == 0
        assert_valid_flow(graph, result, "s", "t")

    def test_zero_capacity_edge_carries_no_flow(self):
        graph = {"s": {"a": 0, "b": 4}, "a": {"t": 4}, "b": {"t": 1}}
        result = max_flow(graph, "s", "t")
        assert result.total_flow == 1
        assert result.edge_flow["s"]["a"] == 0


class TestNumerics:
    def test_large_integer_capacities_are_exact(self):
        big = 10**15
        graph = {"s": {"a": big + 1, "b": big}, "a": {"t": big}, "b": {"t": big + 7}}
        result = max_flow(graph, "s", "t")
        assert result.total_flow == 2 * big

    def test_fractional_capacities(self):
        graph = {"s": {"a": 0.1, "b": 0.2}, "a": {"t": 0.3}, "b": {"t": 0.3}}
        result = max_flow(graph, "s", "t")
        assert result.total_flow == approx(0.3)
        assert_valid_flow(graph, result, "s", "t")

    def test_min_cut_value_equals_flow(self, funnel):
        result = max_flow(funnel, "s", "t")
        assert sum(edge.weight for edge in result.min_cut.cut_edges) == result.total_flow


class TestEdgeCases:
    def test_missing_source(self, funnel):
        result = max_flow(funnel, "z", "t")
        assert result.total_flow == 0
        assert result.edge_flow == {}
        assert result.min_cut is None

    def test_missing_sink(self, funnel):
        result = edmonds_karp(funnel, "s", "z")
        assert result.total_flow == 0
        assert result.edge_flow == {}

    def test_source_equals_sink(self, funnel):
        result = max_flow(funnel, "s", "s")
        assert result.total_flow == 0
        assert result.edge_flow["s"] == {"a": 0, "b": 0}
        assert result.min_cut is None

    def test_empty_graph(self):
        assert max_flow({}, "s", "t").total_flow == 0

    @pytest.mark.parametrize("strategy", [PathStrategy.DFS, PathStrategy.BFS])
    def test_input_not_modified(self, cross_bidirectional, strategy):
        snapshot = copy.deepcopy(cross_bidirectional)
        max_flow(cross_bidirectional, "s", "t", strategy)
        assert cross_bidirectional == snapshot

    def test_weighted_digraph_input_not_modified(self, funnel):
        graph = WeightedDiGraph.from_dict(funnel)
        before = graph.to_dict()
        max_flow(graph, "s", "t")
        assert graph.to_dict() == before

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            max_flow({"s": {"t": -1}}, "s", "t")

    def test_self_loop_rejected(self):
        with pytest.raises(ValueError):
            max_flow({"s": {"s": 1, "t": 1}}, "s", "t")
