"""Weighted directed graph with validated, non-negative edge weights.

`WeightedDiGraph` extends `networkx.DiGraph` with a single numeric ``weight``
attribute per edge. Weights are checked on insertion so every algorithm in the
package can assume finite, non-negative numbers. Self-loops are rejected in
caller-supplied graphs; internal aggregation graphs opt in to them.
"""

from __future__ import annotations

import math
import numbers
from pickle import dumps, loads
from typing import Any, Dict, Hashable, Iterable, Mapping, Optional, Union

import networkx as nx

NodeID = Hashable
Weight = Union[int, float]
WeightMap = Dict[NodeID, Dict[NodeID, Weight]]

# Anything an algorithm accepts as its graph argument: a node -> neighbor ->
# weight mapping, or a networkx graph (including WeightedDiGraph).
GraphLike = Union[Mapping[NodeID, Mapping[NodeID, Weight]], nx.Graph]

WEIGHT_ATTR = "weight"


def check_weight(u: NodeID, v: NodeID, weight: Any) -> Weight:
    """Validate a single edge weight.

    Args:
        u: Source node of the edge (used in the error message).
        v: Target node of the edge (used in the error message).
        weight: Candidate weight.

    Returns:
        The weight unchanged.

    Raises:
        ValueError: If the weight is not a real number, is NaN or infinite,
            or is negative.
    """
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise ValueError(
            f"Edge ({u!r}, {v!r}) has non-numeric weight {weight!r}."
        )
    if not math.isfinite(weight):
        raise ValueError(f"Edge ({u!r}, {v!r}) has non-finite weight {weight!r}.")
    if weight < 0:
        raise ValueError(f"Edge ({u!r}, {v!r}) has negative weight {weight!r}.")
    return weight


class WeightedDiGraph(nx.DiGraph):
    """A directed graph whose edges carry one validated ``weight`` each.

    This class enforces:
      - Every edge weight is a finite real number ``>= 0``.
      - Self-loops raise ValueError unless ``allow_self_loops=True``.
      - ``copy()`` performs a pickle-based deep copy, so a copy never shares
        attribute dictionaries with the original.

    An undirected graph is represented by two directed edges of equal weight;
    see ``symmetrized()``.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, incoming_graph_data=None, allow_self_loops: bool = False, **attr) -> None:
        """Initialize a WeightedDiGraph.

        Args:
            incoming_graph_data: Forwarded to the DiGraph constructor.
            allow_self_loops: Accept edges ``(u, u)``. Used for aggregated
                graphs where a self-loop holds intra-community weight.
            **attr: Graph attributes forwarded to the DiGraph constructor.
        """
        self.allow_self_loops = allow_self_loops
        super().__init__(incoming_graph_data, **attr)

    def copy(self, as_view: bool = False) -> WeightedDiGraph:  # type: ignore[override]
        """Return an independent deep copy of this graph.

        Args:
            as_view: If True, return a read-only networkx view instead.

        Returns:
            WeightedDiGraph: A new instance (or view) of the graph.
        """
        if as_view:
            return super().copy(as_view=True)  # type: ignore[return-value]
        return loads(dumps(self))

    #
    # Edge management
    #
    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, u_of_edge: NodeID, v_of_edge: NodeID, weight: Weight = 1, **attr: Any
    ) -> None:
        """Add (or overwrite) the directed edge ``u -> v`` with ``weight``.

        Missing endpoints are added as nodes.

        Raises:
            ValueError: On an invalid weight, or a self-loop when self-loops
                are not allowed.
        """
        if u_of_edge == v_of_edge and not self.allow_self_loops:
            raise ValueError(f"Self-loop on node {u_of_edge!r} is not supported.")
        check_weight(u_of_edge, v_of_edge, weight)
        super().add_edge(u_of_edge, v_of_edge, **{WEIGHT_ATTR: weight}, **attr)

    def add_edges_from(self, ebunch_to_add: Iterable, **attr: Any) -> None:
        """Add edges given as ``(u, v)`` or ``(u, v, data_dict)`` tuples.

        Every edge goes through ``add_edge`` so weights are validated.
        """
        for edge in ebunch_to_add:
            if len(edge) == 3:
                u, v, data = edge
                data = {**attr, **data}
            elif len(edge) == 2:
                u, v = edge
                data = dict(attr)
            else:
                raise ValueError(f"Edge tuple {edge!r} must be a 2-tuple or 3-tuple.")
            weight = data.pop(WEIGHT_ATTR, 1)
            self.add_edge(u, v, weight, **data)

    def add_weight(self, u: NodeID, v: NodeID, amount: Weight) -> None:
        """Increase the weight of ``u -> v`` by ``amount``, creating the edge if absent."""
        edge_data = self._adj.get(u, {}).get(v)
        if edge_data is None:
            self.add_edge(u, v, amount)
        else:
            edge_data[WEIGHT_ATTR] += check_weight(u, v, amount)

    #
    # Convenience methods
    #
    def weight(self, u: NodeID, v: NodeID, default: Weight = 0) -> Weight:
        """Return the weight of ``u -> v``, or ``default`` if there is no such edge."""
        edge_data = self._adj.get(u, {}).get(v)
        if edge_data is None:
            return default
        return edge_data[WEIGHT_ATTR]

    def out_weights(self, u: NodeID) -> Dict[NodeID, Weight]:
        """Return a fresh ``{neighbor: weight}`` dict of the out-edges of ``u``."""
        return {v: d[WEIGHT_ATTR] for v, d in self._adj[u].items()}

    def total_weight(self) -> Weight:
        """Return the sum of all directed edge weights."""
        return sum(d[WEIGHT_ATTR] for _, _, d in self.edges(data=True))

    def is_symmetric(self) -> bool:
        """Return True if every edge ``u -> v`` has a reverse edge of equal weight."""
        for u, v, d in self.edges(data=True):
            reverse = self._adj[v].get(u)
            if reverse is None or reverse[WEIGHT_ATTR] != d[WEIGHT_ATTR]:
                return False
        return True

    def symmetrized(self) -> WeightedDiGraph:
        """Return an undirected interpretation of this graph as a new graph.

        For every edge ``(u, v, w)`` the edge ``(v, u, w)`` is added when it is
        absent. Existing reverse edges keep their own weight.
        """
        undirected = self.copy()
        for u, v, d in self.edges(data=True):
            if not undirected.has_edge(v, u):
                undirected.add_edge(v, u, d[WEIGHT_ATTR])
        return undirected

    def to_dict(self) -> WeightMap:
        """Convert the graph to a plain ``{node: {neighbor: weight}}`` mapping.

        Every node appears as a key, including nodes without out-edges.
        """
        return {u: self.out_weights(u) for u in self}

    @classmethod
    def from_dict(
        cls,
        mapping: Mapping[NodeID, Mapping[NodeID, Weight]],
        allow_self_loops: bool = False,
    ) -> WeightedDiGraph:
        """Build a graph from a ``{node: {neighbor: weight}}`` mapping.

        Neighbor-only nodes are added to the node set.

        Raises:
            TypeError: If a node's neighbors are not given as a mapping.
            ValueError: On an invalid weight or an unsupported self-loop.
        """
        graph = cls(allow_self_loops=allow_self_loops)
        for u in mapping:
            graph.add_node(u)
        for u, neighbors in mapping.items():
            if not isinstance(neighbors, Mapping):
                raise TypeError(
                    f"Neighbors of node {u!r} must be a mapping of neighbor to "
                    f"weight, got {type(neighbors).__name__}."
                )
            for v, w in neighbors.items():
                graph.add_edge(u, v, w)
        return graph

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple],
        nodes: Optional[Iterable[NodeID]] = None,
        undirected: bool = False,
    ) -> WeightedDiGraph:
        """Build a graph from ``(u, v, weight)`` triples.

        Args:
            edges: Iterable of ``(u, v, weight)``.
            nodes: Optional nodes to add first (for isolated nodes).
            undirected: If True, also add ``(v, u, weight)`` for every triple.
        """
        graph = cls()
        if nodes is not None:
            graph.add_nodes_from(nodes)
        for u, v, w in edges:
            graph.add_edge(u, v, w)
            if undirected:
                graph.add_edge(v, u, w)
        return graph
