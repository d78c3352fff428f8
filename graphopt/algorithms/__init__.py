"""Graph optimization algorithms: max flow, min cut, community detection."""

from graphopt.algorithms.leiden import leiden, modularity
from graphopt.algorithms.matching import (
    BipartiteFlowNetwork,
    create_bipartite_flow_network,
    maximum_bipartite_matching,
)
from graphopt.algorithms.max_flow import edmonds_karp, ford_fulkerson, max_flow
from graphopt.algorithms.min_cut import karger_min_cut, min_st_cut, stoer_wagner
from graphopt.algorithms.paths import (
    bfs_augmenting_path,
    dfs_augmenting_path,
    find_augmenting_path,
)
from graphopt.algorithms.types import (
    AugmentingPath,
    BipartiteMatching,
    CommunityResult,
    CutEdge,
    FlowResult,
    MinCutResult,
    PathStrategy,
)

__all__ = [
    "AugmentingPath",
    "BipartiteFlowNetwork",
    "BipartiteMatching",
    "CommunityResult",
    "CutEdge",
    "FlowResult",
    "MinCutResult",
    "PathStrategy",
    "bfs_augmenting_path",
    "create_bipartite_flow_network",
    "dfs_augmenting_path",
    "edmonds_karp",
    "find_augmenting_path",
    "ford_fulkerson",
    "karger_min_cut",
    "leiden",
    "max_flow",
    "maximum_bipartite_matching",
    "min_st_cut",
    "modularity",
    "stoer_wagner",
]
