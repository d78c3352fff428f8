"""Maximum-flow computation via iterative augmenting paths.

Implements Ford-Fulkerson (depth-first path selection) and Edmonds-Karp
(breadth-first path selection) over a private residual graph, and derives the
minimum s-t cut from the final residual graph.
"""

from __future__ import annotations

from typing import Dict, Optional

from graphopt.algorithms.paths import find_augmenting_path
from graphopt.algorithms.types import (
    AugmentingPath,
    CutEdge,
    FlowResult,
    MinCutResult,
    PathStrategy,
)
from graphopt.config import FLOW_CONFIG
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

EdgeFlow = Dict[NodeID, Dict[NodeID, Weight]]


def max_flow(
    graph: GraphLike,
    source: NodeID,
    sink: NodeID,
    path_strategy: PathStrategy = PathStrategy.BFS,
    *,
    tolerance: Optional[float] = None,
) -> FlowResult:
    """Compute the maximum flow from ``source`` to ``sink``.

    The input graph is read once into a private copy; it is never modified.
    Edge weights are capacities.

    Steps:
      1. Build a residual graph holding every original capacity.
      2. Repeatedly find an augmenting path with ``path_strategy`` and push its
         bottleneck: forward residual decreases, reverse residual increases
         (the reverse edge is created on first use).
      3. When no augmenting path remains, derive the min cut from the nodes
         still reachable from ``source`` in the residual graph.

    Args:
        graph: Flow network as ``{u: {v: capacity}}`` or a networkx graph.
        source: Source node.
        sink: Sink node.
        path_strategy: ``PathStrategy.DFS`` (Ford-Fulkerson) or
            ``PathStrategy.BFS`` (Edmonds-Karp). Defaults to BFS.
        tolerance: Residual capacities at or below this value count as
            saturated. Defaults to ``FLOW_CONFIG.tolerance``.

    Returns:
        FlowResult: total flow, per-edge flow and the min cut. If ``source`` or
        ``sink`` is not in the graph, the result has zero flow, an empty flow
        assignment and no min cut. If ``source == sink`` the flow is zero.

    Examples:
        >>> result = max_flow({"s": {"a": 3}, "a": {"t": 2}}, "s", "t")
        >>> result.total_flow
        2
        >>> result.edge_flow["s"]["a"]
        2
    """
    if tolerance is None:
        tolerance = FLOW_CONFIG.tolerance

    network = as_weighted_digraph(graph)
    if source not in network or sink not in network:
        logger.debug(
            f"Terminal missing from graph (source={source!r}, sink={sink!r}); "
            "returning zero flow"
        )
        return FlowResult(total_flow=0)

    edge_flow: EdgeFlow = {u: {v: 0 for v in network.succ[u]} for u in network}

    # Degenerate case (s == t): conservation forces the net surplus at the
    # single terminal to zero, so the only feasible flow value is 0.
    if source == sink:
        return FlowResult(total_flow=0, edge_flow=edge_flow)

    residual = build_residual_graph(network)
    total_flow: Weight = 0
    augmentations = 0
    while True:
        path = find_augmenting_path(residual, source, sink, path_strategy, tolerance)
        if path is None:
            break
        _push_flow(residual, network, edge_flow, path)
        total_flow += path.bottleneck
        augmentations += 1

    logger.debug(
        f"Max flow {source!r} -> {sink!r}: {total_flow} after "
        f"{augmentations} augmentations ({path_strategy.name})"
    )

    min_cut = residual_min_cut(network, residual, source, total_flow, tolerance)
    return FlowResult(
        total_flow=total_flow,
        edge_flow=_clamp_flows(network, edge_flow),
        min_cut=min_cut,
    )


def ford_fulkerson(graph: GraphLike, source: NodeID, sink: NodeID) -> FlowResult:
    """Max flow with depth-first augmenting paths.

    Correct for any non-negative capacities, but the number of augmentations
    depends on the flow magnitude rather than the graph size alone.
    """
    return max_flow(graph, source, sink, PathStrategy.DFS)


def edmonds_karp(graph: GraphLike, source: NodeID, sink: NodeID) -> FlowResult:
    """Max flow with breadth-first (shortest) augmenting paths.

    Bounds the number of augmentations to O(V * E) regardless of capacities.
    """
    return max_flow(graph, source, sink, PathStrategy.BFS)


def build_residual_graph(network: WeightedDiGraph) -> WeightedDiGraph:
    """Return a residual graph for ``network``: all capacities, no reverse edges yet."""
    return network.copy()


def residual_min_cut(
    network: WeightedDiGraph,
    residual: WeightedDiGraph,
    source: NodeID,
    cut_value: Weight,
    tolerance: float,
) -> MinCutResult:
    """Derive the s-t min cut from a final residual graph.

    Partition 1 holds the nodes reachable from ``source`` through residual
    capacity above ``tolerance``; partition 2 holds every other node. Cut
    edges are original edges of positive weight from partition 1 to
    partition 2; at max flow all of them are saturated.

    Args:
        network: The original (unmodified) flow network.
        residual: The residual graph after the last augmentation.
        source: Source node.
        cut_value: Max-flow value, reported as the cut value.
        tolerance: Residual capacities at or below this count as saturated.
    """
    reachable = {source}
    stack = [source]
    while stack:
        node = stack.pop()
        for neighbor, data in residual.succ[node].items():
            if neighbor not in reachable and data[WEIGHT_ATTR] > tolerance:
                reachable.add(neighbor)
                stack.append(neighbor)

    cut_edges = tuple(
        CutEdge(u, v, w)
        for u, v, w in network.edges(data=WEIGHT_ATTR)
        if u in reachable and v not in reachable and w > 0
    )
    return MinCutResult(
        cut_value=cut_value,
        partition1=frozenset(reachable),
        partition2=frozenset(n for n in residual if n not in reachable),
        cut_edges=cut_edges,
    )


def _push_flow(
    residual: WeightedDiGraph,
    network: WeightedDiGraph,
    edge_flow: EdgeFlow,
    path: AugmentingPath,
) -> None:
    """Push ``path.bottleneck`` units along ``path``.

    On the flow assignment, a push along ``u -> v`` first cancels flow on the
    original edge ``v -> u`` (when it exists and carries flow) and adds only
    the remainder to ``u -> v``. Flow values therefore never go negative and
    never exceed capacity, even when both directions exist in the network.
    """
    amount = path.bottleneck
    succ = residual.succ
    for u, v in path.edges():
        succ[u][v][WEIGHT_ATTR] -= amount
        residual.add_weight(v, u, amount)

        remaining = amount
        if network.has_edge(v, u):
            cancelled = min(remaining, edge_flow[v][u])
            edge_flow[v][u] -= cancelled
            remaining -= cancelled
        if remaining > 0 and v in edge_flow[u]:
            edge_flow[u][v] += remaining


def _clamp_flows(network: WeightedDiGraph, edge_flow: EdgeFlow) -> EdgeFlow:
    """Clamp every flow value into ``[0, capacity]`` against floating-point drift."""
    clamped: EdgeFlow = {}
    for u, flows in edge_flow.items():
        clamped[u] = {
            v: min(max(f, 0), network.weight(u, v)) for v, f in flows.items()
        }
    return clamped
