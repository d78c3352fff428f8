"""graphopt: max-flow, min-cut and community detection for weighted graphs.

Every algorithm takes a weighted graph, given either as a mapping
``{node: {neighbor: weight}}`` or as a NetworkX graph, and returns an
immutable result record. Input graphs are never modified.

Primary API:
    ford_fulkerson(), edmonds_karp(), max_flow() - Maximum flow with min cut
    min_st_cut() - Minimum s-t cut
    stoer_wagner(), karger_min_cut() - Global minimum cut
    leiden() - Community detection by modularity optimization
    create_bipartite_flow_network(), maximum_bipartite_matching()

Example:
    from graphopt import edmonds_karp, leiden

    graph = {"s": {"a": 3, "b": 2}, "a": {"t": 2}, "b": {"t": 3}}
    flow = edmonds_karp(graph, "s", "t")
    flow.total_flow          # 4
    flow.min_cut.partition1  # frozenset({'s', ...})

    communities = leiden(graph, random_seed=42).communities
"""

from __future__ import annotations

from graphopt import logging
from graphopt._version import __version__
from graphopt.algorithms import (
    AugmentingPath,
    BipartiteFlowNetwork,
    BipartiteMatching,
    CommunityResult,
    CutEdge,
    FlowResult,
    MinCutResult,
    PathStrategy,
    create_bipartite_flow_network,
    edmonds_karp,
    ford_fulkerson,
    karger_min_cut,
    leiden,
    max_flow,
    maximum_bipartite_matching,
    min_st_cut,
    modularity,
    stoer_wagner,
)
from graphopt.graph import WeightedDiGraph, from_networkx, to_networkx
from graphopt.seed_manager import SeedManager

__all__ = [
    # Version
    "__version__",
    # Graph
    "WeightedDiGraph",
    "from_networkx",
    "to_networkx",
    # Flow
    "max_flow",
    "ford_fulkerson",
    "edmonds_karp",
    "PathStrategy",
    # Cuts
    "min_st_cut",
    "stoer_wagner",
    "karger_min_cut",
    # Communities
    "leiden",
    "modularity",
    # Matching
    "create_bipartite_flow_network",
    "maximum_bipartite_matching",
    "BipartiteFlowNetwork",
    # Results
    "AugmentingPath",
    "BipartiteMatching",
    "CommunityResult",
    "CutEdge",
    "FlowResult",
    "MinCutResult",
    # Utilities
    "SeedManager",
    "logging",
]
