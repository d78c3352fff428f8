"""Graph primitives and helpers.

This package provides the validated weighted graph type `WeightedDiGraph`
and conversion helpers (`convert`) used by every algorithm entry point.
"""

from graphopt.graph.convert import as_weighted_digraph, from_networkx, to_networkx
from graphopt.graph.weighted_digraph import (
    GraphLike,
    NodeID,
    Weight,
    WeightedDiGraph,
    WeightMap,
)

__all__ = [
    "GraphLike",
    "NodeID",
    "Weight",
    "WeightMap",
    "WeightedDiGraph",
    "as_weighted_digraph",
    "from_networkx",
    "to_networkx",
]
