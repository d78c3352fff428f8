"""Conversion between caller graphs, NetworkX graphs and `WeightedDiGraph`.

Every algorithm entry point calls ``as_weighted_digraph`` on its graph
argument. The result is always a new object, so algorithms may mutate it
freely without touching the caller's graph.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Optional

import networkx as nx

from graphopt.graph.weighted_digraph import (
    WEIGHT_ATTR,
    GraphLike,
    NodeID,
    Weight,
    WeightedDiGraph,
)


def from_networkx(
    G: nx.Graph,
    *,
    weight_attr: str = "weight",
    default_weight: Weight = 1,
) -> WeightedDiGraph:
    """Convert any NetworkX graph to a `WeightedDiGraph`.

    Undirected graphs produce two directed edges per edge. Parallel edges of
    multigraphs are summed into one edge.

    Args:
        G: NetworkX Graph, DiGraph, MultiGraph or MultiDiGraph.
        weight_attr: Edge attribute holding the weight.
        default_weight: Weight used when the attribute is missing.

    Returns:
        A new WeightedDiGraph.

    Raises:
        ValueError: On invalid weights or self-loops.
    """
    graph = WeightedDiGraph()
    graph.add_nodes_from(G.nodes)

    directed = G.is_directed()
    for u, v, data in G.edges(data=True):
        w = data.get(weight_attr, default_weight)
        graph.add_weight(u, v, w)
        if not directed:
            graph.add_weight(v, u, w)
    return graph


def to_networkx(
    graph: GraphLike,
    communities: Optional[Dict[NodeID, int]] = None,
    *,
    community_attr: str = "community",
) -> nx.DiGraph:
    """Convert a graph to a plain NetworkX DiGraph for downstream consumers.

    Args:
        graph: Any graph accepted by the algorithms.
        communities: Optional node -> community mapping (e.g. from ``leiden``)
            stored as a node attribute.
        community_attr: Node attribute name used for community ids.

    Returns:
        A new networkx.DiGraph with ``weight`` edge attributes.
    """
    source = as_weighted_digraph(graph)
    nx_graph = nx.DiGraph()
    for node in source:
        if communities is not None and node in communities:
            nx_graph.add_node(node, **{community_attr: communities[node]})
        else:
            nx_graph.add_node(node)
    for u, v, w in source.edges(data=WEIGHT_ATTR):
        nx_graph.add_edge(u, v, weight=w)
    return nx_graph


def as_weighted_digraph(graph: GraphLike, *, weight_attr: str = "weight") -> WeightedDiGraph:
    """Return a private `WeightedDiGraph` copy of ``graph``.

    Args:
        graph: A ``{node: {neighbor: weight}}`` mapping, a WeightedDiGraph or
            any NetworkX graph.
        weight_attr: Edge attribute used for NetworkX inputs.

    Returns:
        A new WeightedDiGraph that shares no state with ``graph``.

    Raises:
        TypeError: If ``graph`` is of an unsupported type.
        ValueError: On invalid weights or self-loops.
    """
    if isinstance(graph, WeightedDiGraph):
        return graph.copy()
    if isinstance(graph, nx.Graph):
        return from_networkx(graph, weight_attr=weight_attr)
    if isinstance(graph, Mapping):
        return WeightedDiGraph.from_dict(graph)
    raise TypeError(
        "Graph must be a mapping of node -> {neighbor: weight} or a networkx "
        f"graph, got {type(graph).__name__}."
    )
