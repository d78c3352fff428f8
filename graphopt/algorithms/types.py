"""Types and data structures for algorithm results.

Defines immutable result containers returned to callers and the enum that
selects the augmenting-path strategy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, FrozenSet, NamedTuple, Optional, Tuple

from graphopt.graph.weighted_digraph import NodeID, Weight


class PathStrategy(IntEnum):
    """
    Augmenting-path search strategy
    """

    # Depth-first (Ford-Fulkerson): first path found in neighbor order
    DFS = 1
    # Breadth-first (Edmonds-Karp): fewest-edge path, O(V * E) augmentations
    BFS = 2


@dataclass(frozen=True)
class AugmentingPath:
    """A source-to-sink path with positive residual capacity on every edge.

    Attributes:
        nodes: Node ids in order from source to sink.
        bottleneck: Minimum residual capacity along the path.
    """

    nodes: Tuple[NodeID, ...]
    bottleneck: Weight

    def edges(self) -> Tuple[Tuple[NodeID, NodeID], ...]:
        """Return consecutive ``(u, v)`` pairs of the path."""
        return tuple(zip(self.nodes, self.nodes[1:]))


class CutEdge(NamedTuple):
    """An edge crossing a cut, from partition 1 to partition 2."""

    source: NodeID
    target: NodeID
    weight: Weight


@dataclass(frozen=True)
class MinCutResult:
    """A two-way node partition and the weight of the edges crossing it.

    Attributes:
        cut_value: Total weight of the cut.
        partition1: Source side (s-t cuts) or one side of a global cut.
        partition2: The complementary node set.
        cut_edges: Edges from partition1 to partition2 with their weights.
    """

    cut_value: Weight
    partition1: FrozenSet[NodeID] = frozenset()
    partition2: FrozenSet[NodeID] = frozenset()
    cut_edges: Tuple[CutEdge, ...] = ()


@dataclass(frozen=True)
class FlowResult:
    """Result of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value achieved.
        edge_flow: Flow per original edge as ``{u: {v: flow}}``. Every value
            satisfies ``0 <= flow <= capacity``.
        min_cut: Minimum s-t cut derived from the final residual graph, or
            None when no flow computation took place.
    """

    total_flow: Weight
    edge_flow: Dict[NodeID, Dict[NodeID, Weight]] = field(default_factory=dict)
    min_cut: Optional[MinCutResult] = None


@dataclass(frozen=True)
class CommunityResult:
    """Result of community detection.

    Attributes:
        communities: Community id per node, renumbered to ``0..k-1``. Ids are
            not comparable across calls.
        modularity: Modularity of the returned partition.
        iterations: Outer iterations performed before convergence or cutoff.
    """

    communities: Dict[NodeID, int]
    modularity: float
    iterations: int

    @property
    def num_communities(self) -> int:
        """Number of distinct communities."""
        return len(set(self.communities.values()))

    def members(self) -> Dict[int, FrozenSet[NodeID]]:
        """Return community id -> member nodes."""
        groups: Dict[int, set] = {}
        for node, community in self.communities.items():
            groups.setdefault(community, set()).add(node)
        return {c: frozenset(nodes) for c, nodes in groups.items()}


@dataclass(frozen=True)
class BipartiteMatching:
    """A maximum matching between two node sets.

    Attributes:
        pairs: Matched ``(left, right)`` pairs.
    """

    pairs: Tuple[Tuple[NodeID, NodeID], ...]

    @property
    def size(self) -> int:
        """Number of matched pairs."""
        return len(self.pairs)
