"""Bipartite matching via unit-capacity max flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from graphopt.algorithms.max_flow import edmonds_karp
from graphopt.algorithms.types import BipartiteMatching
from graphopt.graph.weighted_digraph import NodeID, WeightedDiGraph

SOURCE = "__source__"
SINK = "__sink__"


@dataclass(frozen=True)
class BipartiteFlowNetwork:
    """A flow network built from two node sets.

    Attributes:
        graph: Network with unit capacities ``source -> left``,
            ``left -> right`` and ``right -> sink``.
        source: Id of the synthetic source node.
        sink: Id of the synthetic sink node.
    """

    graph: WeightedDiGraph
    source: NodeID = SOURCE
    sink: NodeID = SINK


def create_bipartite_flow_network(
    left: Sequence[NodeID],
    right: Sequence[NodeID],
    edges: Iterable[Tuple[NodeID, NodeID]],
) -> BipartiteFlowNetwork:
    """Build a unit-capacity flow network for bipartite matching.

    Args:
        left: Nodes of the left side.
        right: Nodes of the right side.
        edges: Compatible ``(left, right)`` pairs.

    Returns:
        BipartiteFlowNetwork whose max flow equals the maximum matching size.

    Raises:
        ValueError: If a node id collides with the synthetic terminal ids, is
            listed twice on one side or appears on both sides, or if an edge
            endpoint is not on the expected side.
    """
    left_set = set(left)
    right_set = set(right)
    for side, nodes, node_set in (("left", left, left_set), ("right", right, right_set)):
        if len(node_set) != len(nodes):
            raise ValueError(f"Duplicate node ids on the {side} side.")
    overlap = left_set & right_set
    if overlap:
        raise ValueError(
            f"Nodes on both sides of the bipartition: {sorted(map(repr, overlap))}"
        )
    for node in left_set | right_set:
        if node in (SOURCE, SINK):
            raise ValueError(f"Node id {node!r} is reserved for the flow terminals.")

    graph = WeightedDiGraph()
    graph.add_node(SOURCE)
    for node in left:
        graph.add_edge(SOURCE, node, 1)
    for u, v in edges:
        if u not in left_set:
            raise ValueError(f"Edge ({u!r}, {v!r}) starts outside the left node set.")
        if v not in right_set:
            raise ValueError(f"Edge ({u!r}, {v!r}) ends outside the right node set.")
        graph.add_edge(u, v, 1)
    for node in right:
        graph.add_edge(node, SINK, 1)
    graph.add_node(SINK)
    return BipartiteFlowNetwork(graph=graph)


def maximum_bipartite_matching(
    left: Sequence[NodeID],
    right: Sequence[NodeID],
    edges: Iterable[Tuple[NodeID, NodeID]],
) -> BipartiteMatching:
    """Find a maximum matching between ``left`` and ``right``.

    Runs Edmonds-Karp on the network from ``create_bipartite_flow_network``;
    every left-to-right edge carrying unit flow is a matched pair.
    """
    network = create_bipartite_flow_network(left, right, edges)
    result = edmonds_karp(network.graph, network.source, network.sink)

    pairs = tuple(
        (u, v)
        for u in left
        for v, flow in result.edge_flow.get(u, {}).items()
        if v != network.sink and flow > 0
    )
    return BipartiteMatching(pairs=pairs)
