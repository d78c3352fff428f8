"""Augmenting-path search over a residual graph.

Both strategies return an `AugmentingPath` (node sequence plus bottleneck
capacity) or None when the sink is unreachable through edges whose residual
capacity exceeds ``tolerance``. Neither search recurses, so path length is
not bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from graphopt.algorithms.types import AugmentingPath, PathStrategy
from graphopt.graph.weighted_digraph import WEIGHT_ATTR, NodeID, WeightedDiGraph


def find_augmenting_path(
    residual: WeightedDiGraph,
    source: NodeID,
    sink: NodeID,
    strategy: PathStrategy = PathStrategy.BFS,
    tolerance: float = 0.0,
) -> Optional[AugmentingPath]:
    """Dispatch to the depth-first or breadth-first search.

    Args:
        residual: Residual graph; edge weights are residual capacities.
        source: Start node.
        sink: Target node.
        strategy: ``PathStrategy.DFS`` or ``PathStrategy.BFS``.
        tolerance: Residual capacities at or below this are unusable.

    Returns:
        The path found, or None.

    Raises:
        ValueError: If ``strategy`` is not a known PathStrategy.
    """
    if strategy == PathStrategy.DFS:
        return dfs_augmenting_path(residual, source, sink, tolerance)
    if strategy == PathStrategy.BFS:
        return bfs_augmenting_path(residual, source, sink, tolerance)
    raise ValueError(f"Unknown path strategy: {strategy!r}")


def dfs_augmenting_path(
    residual: WeightedDiGraph,
    source: NodeID,
    sink: NodeID,
    tolerance: float = 0.0,
) -> Optional[AugmentingPath]:
    """Depth-first augmenting-path search.

    Neighbors are explored in adjacency iteration order. The stack holds
    ``(node, neighbor_iterator)`` frames so a frame resumes where it left off
    after a dead end is popped. Visited nodes stay visited for the whole
    search: a dead end cannot become reachable later in the same search.
    """
    if source not in residual or sink not in residual or source == sink:
        return None

    succ = residual.succ
    visited = {source}
    stack = [(source, iter(succ[source].items()))]
    while stack:
        _, neighbors = stack[-1]
        for neighbor, data in neighbors:
            if neighbor in visited or data[WEIGHT_ATTR] <= tolerance:
                continue
            if neighbor == sink:
                nodes = [frame[0] for frame in stack]
                nodes.append(sink)
                return _make_path(residual, nodes)
            visited.add(neighbor)
            stack.append((neighbor, iter(succ[neighbor].items())))
            break
        else:
            # neighbors exhausted: backtrack
            stack.pop()
    return None


def bfs_augmenting_path(
    residual: WeightedDiGraph,
    source: NodeID,
    sink: NodeID,
    tolerance: float = 0.0,
) -> Optional[AugmentingPath]:
    """Breadth-first augmenting-path search (Edmonds-Karp).

    Returns a path with the fewest edges among all augmenting paths.
    """
    if source not in residual or sink not in residual or source == sink:
        return None

    succ = residual.succ
    parent: Dict[NodeID, NodeID] = {}
    visited = {source}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for neighbor, data in succ[node].items():
            if neighbor in visited or data[WEIGHT_ATTR] <= tolerance:
                continue
            visited.add(neighbor)
            parent[neighbor] = node
            if neighbor == sink:
                nodes = [sink]
                while nodes[-1] != source:
                    nodes.append(parent[nodes[-1]])
                nodes.reverse()
                return _make_path(residual, nodes)
            queue.append(neighbor)
    return None


def _make_path(residual: WeightedDiGraph, nodes: List[NodeID]) -> AugmentingPath:
    """Build an AugmentingPath, computing the bottleneck by successive minimum."""
    succ = residual.succ
    bottleneck = succ[nodes[0]][nodes[1]][WEIGHT_ATTR]
    for u, v in zip(nodes[1:], nodes[2:]):
        capacity = succ[u][v][WEIGHT_ATTR]
        if capacity < bottleneck:
            bottleneck = capacity
    return AugmentingPath(nodes=tuple(nodes), bottleneck=bottleneck)
