"""Leiden community detection.

Each outer iteration runs three phases on the current level graph:

1. Local moving: nodes are visited in a seeded random order and moved to the
   neighboring community with the largest strictly positive modularity gain.
2. Refinement: every community is split into the connected components of
   its induced subgraph, so no returned community is internally disconnected.
3. Aggregation: each refined community becomes a super-node; edge weights
   between communities are summed and intra-community weight is kept as a
   self-loop, which preserves node degrees and the total weight.

The partition of the original nodes after each refinement is scored on the
original graph; the best one seen is returned.

Reference: Traag, V.A., Waltman, L. & van Eck, N.J. (2019),
"From Louvain to Leiden: guaranteeing well-connected communities".
"""

from __future__ import annotations

import random
from collections import deque
from typing import Dict, List, Mapping, Optional, Tuple

from graphopt.algorithms.types import CommunityResult
from graphopt.config import LEIDEN_CONFIG, LeidenConfig
from graphopt.graph.convert import as_weighted_digraph
from graphopt.graph.weighted_digraph import (
    WEIGHT_ATTR,
    GraphLike,
    NodeID,
    Weight,
    WeightedDiGraph,
)
from graphopt.logging import get_logger

logger = get_logger(__name__)


def leiden(
    graph: GraphLike,
    *,
    resolution: Optional[float] = None,
    random_seed: Optional[int] = None,
    max_iterations: Optional[int] = None,
    threshold: Optional[float] = None,
) -> CommunityResult:
    """Detect communities by modularity optimization with the Leiden algorithm.

    The graph is interpreted as undirected (missing reverse edges are added
    with the same weight). Unset options fall back to ``LEIDEN_CONFIG``.

    Args:
        graph: Weighted graph.
        resolution: Modularity resolution; larger values favor smaller
            communities.
        random_seed: Seed of the generator driving the node visiting order.
            The generator is owned by this call, so equal seeds give equal
            results even under concurrent calls.
        max_iterations: Upper bound on outer iterations.
        threshold: Minimum modularity improvement for a partition to replace
            the best one found so far.

    Returns:
        CommunityResult with dense 0-based community ids. An empty graph gives
        an empty mapping, modularity 0 and 0 iterations. A graph without
        positive edge weight puts every node in its own community with
        modularity 0.

    Raises:
        ValueError: If an option is out of range.
    """
    config = LeidenConfig(
        resolution=LEIDEN_CONFIG.resolution if resolution is None else resolution,
        random_seed=LEIDEN_CONFIG.random_seed if random_seed is None else random_seed,
        max_iterations=(
            LEIDEN_CONFIG.max_iterations if max_iterations is None else max_iterations
        ),
        threshold=LEIDEN_CONFIG.threshold if threshold is None else threshold,
    )
    config.validate()

    original = as_weighted_digraph(graph).symmetrized()
    nodes = list(original)
    if not nodes:
        return CommunityResult(communities={}, modularity=0.0, iterations=0)

    singletons = {node: i for i, node in enumerate(nodes)}
    total_weight = original.total_weight()
    if total_weight == 0:
        return CommunityResult(communities=singletons, modularity=0.0, iterations=0)

    rng = random.Random(config.random_seed)
    # Undirected edge weight: each edge is stored in both directions
    m = total_weight / 2

    level = original
    level_members: Dict[NodeID, List[NodeID]] = {node: [node] for node in nodes}
    best_assignment = singletons
    best_modularity = _modularity(original, best_assignment, config.resolution)
    iterations = 0

    while iterations < config.max_iterations:
        iterations += 1

        communities, moved = _move_nodes(level, rng, config.resolution, m)
        refined = _refine_partition(level, communities)

        assignment = {
            node: refined[super_node]
            for super_node, members in level_members.items()
            for node in members
        }
        quality = _modularity(original, assignment, config.resolution)
        logger.debug(
            f"Leiden iteration {iterations}: {level.number_of_nodes()} nodes, "
            f"{len(set(refined.values()))} refined communities, modularity {quality:.6f}"
        )
        if quality > best_modularity + config.threshold:
            best_modularity = quality
            best_assignment = assignment

        if not moved:
            break

        aggregated, level_members = _aggregate(level, refined, level_members)
        if aggregated.number_of_nodes() == level.number_of_nodes():
            break
        level = aggregated

    return CommunityResult(
        communities=_renumber(best_assignment, nodes),
        modularity=best_modularity,
        iterations=iterations,
    )


def modularity(
    graph: GraphLike,
    communities: Mapping[NodeID, int],
    resolution: float = 1.0,
) -> float:
    """Compute the modularity of a partition.

    ``Q = sum_c [ L_c / m - resolution * (K_c / 2m)^2 ]`` where ``L_c`` is the
    weight inside community ``c``, ``K_c`` the total degree of its nodes and
    ``m`` the total edge weight, all on the undirected interpretation of
    ``graph``.

    Args:
        graph: Weighted graph.
        communities: Community id for every node.
        resolution: Modularity resolution.

    Returns:
        Modularity score; 0.0 for graphs without positive edge weight.

    Raises:
        ValueError: If a node has no community.
    """
    undirected = as_weighted_digraph(graph).symmetrized()
    missing = [node for node in undirected if node not in communities]
    if missing:
        raise ValueError(f"Nodes without a community: {missing!r}")
    return _modularity(undirected, communities, resolution)


def _modularity(
    graph: WeightedDiGraph, communities: Mapping[NodeID, int], resolution: float
) -> float:
    """Modularity of a symmetric graph (each undirected edge stored twice)."""
    double_m = graph.total_weight()
    if double_m == 0:
        return 0.0

    internal: Weight = 0
    degree: Dict[int, Weight] = {}
    for u, v, w in graph.edges(data=WEIGHT_ATTR):
        community = communities[u]
        degree[community] = degree.get(community, 0) + w
        if community == communities[v]:
            internal += w

    expected = sum((d / double_m) ** 2 for d in degree.values())
    return internal / double_m - resolution * expected


def _move_nodes(
    level: WeightedDiGraph, rng: random.Random, resolution: float, m: float
) -> Tuple[Dict[NodeID, int], bool]:
    """One local-moving pass from singleton communities.

    Moving node ``i`` out of community ``D`` into community ``C`` changes
    modularity by
    ``(k_i,C - k_i,D) / m - resolution * k_i * (S_C - S_D) / (2 m^2)``,
    where ``k_i,X`` is the weight from ``i`` to ``X``, ``k_i`` the degree of
    ``i`` and ``S_X`` the total degree of ``X`` without ``i``.

    Returns:
        The community of every node, and whether any node moved.
    """
    degrees = {node: sum(level.out_weights(node).values()) for node in level}
    community = {node: i for i, node in enumerate(level)}
    community_degree = {community[node]: degrees[node] for node in level}

    order = list(level)
    rng.shuffle(order)

    moved = False
    estimated_gain = 0.0
    for node in order:
        current = community[node]
        k_i = degrees[node]

        links: Dict[int, Weight] = {}
        for neighbor, data in level.succ[node].items():
            if neighbor == node:
                continue
            c = community[neighbor]
            links[c] = links.get(c, 0) + data[WEIGHT_ATTR]

        current_links = links.get(current, 0)
        current_degree = community_degree[current] - k_i

        best_community = current
        best_gain = 0.0
        for c, k_ic in links.items():
            if c == current:
                continue
            gain = (k_ic - current_links) / m - resolution * k_i * (
                community_degree[c] - current_degree
            ) / (2 * m * m)
            if gain > best_gain:
                best_gain = gain
                best_community = c

        if best_community != current:
            community_degree[current] -= k_i
            community_degree[best_community] += k_i
            community[node] = best_community
            estimated_gain += best_gain
            moved = True

    logger.debug(f"Local moving: estimated modularity gain {estimated_gain:.6f}")
    return community, moved


def _refine_partition(
    level: WeightedDiGraph, communities: Mapping[NodeID, int]
) -> Dict[NodeID, int]:
    """Split each community into the connected components of its induced subgraph.

    Returns:
        Node -> refined community id, dense from 0 in node order.
    """
    groups: Dict[int, List[NodeID]] = {}
    for node in level:
        groups.setdefault(communities[node], []).append(node)

    refined: Dict[NodeID, int] = {}
    next_id = 0
    for members in groups.values():
        member_set = set(members)
        for start in members:
            if start in refined:
                continue
            refined[start] = next_id
            queue = deque([start])
            while queue:
                node = queue.popleft()
                for neighbor in level.succ[node]:
                    if neighbor in member_set and neighbor not in refined:
                        refined[neighbor] = next_id
                        queue.append(neighbor)
            next_id += 1
    return refined


def _aggregate(
    level: WeightedDiGraph,
    refined: Mapping[NodeID, int],
    level_members: Mapping[NodeID, List[NodeID]],
) -> Tuple[WeightedDiGraph, Dict[NodeID, List[NodeID]]]:
    """Collapse each refined community into one super-node.

    Returns:
        The aggregated graph (nodes are refined community ids) and, for each
        super-node, the original nodes it contains.
    """
    aggregated = WeightedDiGraph(allow_self_loops=True)
    aggregated.add_nodes_from(sorted(set(refined.values())))
    for u, v, w in level.edges(data=WEIGHT_ATTR):
        aggregated.add_weight(refined[u], refined[v], w)

    members: Dict[NodeID, List[NodeID]] = {c: [] for c in aggregated}
    for super_node, originals in level_members.items():
        members[refined[super_node]].extend(originals)
    return aggregated, members


def _renumber(assignment: Mapping[NodeID, int], nodes: List[NodeID]) -> Dict[NodeID, int]:
    """Renumber community ids densely from 0 in first-seen node order."""
    mapping: Dict[int, int] = {}
    result: Dict[NodeID, int] = {}
    for node in nodes:
        community = assignment[node]
        if community not in mapping:
            mapping[community] = len(mapping)
        result[node] = mapping[community]
    return result
