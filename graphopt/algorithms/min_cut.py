"""Minimum cut algorithms.

- ``min_st_cut``: minimum s-t cut derived from a max-flow computation.
- ``stoer_wagner``: deterministic global minimum cut of an undirected graph.
- ``karger_min_cut``: randomized global minimum cut by repeated contraction.

Stoer-Wagner symmetrizes its input: for every edge ``(u, v, w)`` the edge
``(v, u, w)`` is added when absent. Karger takes the edges as given and
contracts any pair of nodes joined in either direction. Both contract nodes
on a private working copy and track which original nodes each super-node
stands for, so reported partitions contain real node ids.
"""

from __future__ import annotations

import random
from typing import Dict, FrozenSet, List, Optional, Tuple

from graphopt.algorithms.max_flow import max_flow
from graphopt.algorithms.types import CutEdge, MinCutResult, PathStrategy
from graphopt.config import KARGER_CONFIG
from graphopt.graph.convert import as_weighted_digraph
from graphopt.graph.weighted_digraph import (
    WEIGHT_ATTR,
    GraphLike,
    NodeID,
    Weight,
    WeightedDiGraph,
)
from graphopt.logging import get_logger
from graphopt.seed_manager import SeedManager

logger = get_logger(__name__)


def min_st_cut(
    graph: GraphLike,
    source: NodeID,
    sink: NodeID,
    path_strategy: PathStrategy = PathStrategy.BFS,
) -> MinCutResult:
    """Find the minimum cut separating ``source`` from ``sink``.

    Runs max flow, then takes as partition 1 the nodes reachable from
    ``source`` in the final residual graph. By the max-flow min-cut theorem the
    cut value equals the max-flow value.

    Args:
        graph: Directed graph with edge weights as capacities.
        source: Source node.
        sink: Sink node.
        path_strategy: Augmenting-path strategy for the underlying max flow.

    Returns:
        MinCutResult. If a terminal is missing from the graph (or
        ``source == sink``) the cut value is 0 and both partitions are empty.
    """
    result = max_flow(graph, source, sink, path_strategy)
    if result.min_cut is None:
        return MinCutResult(cut_value=0)
    return result.min_cut


def stoer_wagner(graph: GraphLike) -> MinCutResult:
    """Find a global minimum cut with the Stoer-Wagner algorithm.

    Each minimum-cut phase grows a maximum adjacency order from the first
    remaining node; the last node added, ``t``, is separated from the rest by
    a cut equal to its connectivity at the time it was added. The last two
    nodes are then contracted. After ``n - 1`` phases the smallest phase cut
    is a global minimum cut.

    Ties in the adjacency order go to the node that comes first in the
    graph's node iteration order, so results are deterministic for a given
    input order.

    Args:
        graph: Weighted graph, interpreted as undirected.

    Returns:
        MinCutResult. Partition 1 holds every node except the members of the
        best phase's ``t``; partition 2 holds those members. Graphs with fewer
        than two nodes yield a zero cut with all nodes in partition 1.
    """
    undirected = as_weighted_digraph(graph).symmetrized()
    if undirected.number_of_nodes() < 2:
        return MinCutResult(cut_value=0, partition1=frozenset(undirected))

    work = undirected.copy()
    members: Dict[NodeID, List[NodeID]] = {node: [node] for node in work}
    best_value: Optional[Weight] = None
    best_side: List[NodeID] = []
    phases = 0

    while work.number_of_nodes() > 1:
        s, t, phase_cut = _minimum_cut_phase(work)
        phases += 1
        if best_value is None or phase_cut < best_value:
            best_value = phase_cut
            best_side = list(members[t])
        members[s].extend(members.pop(t))
        _contract(work, s, t)

    assert best_value is not None
    partition2 = frozenset(best_side)
    partition1 = frozenset(node for node in undirected if node not in partition2)
    logger.debug(f"Stoer-Wagner: cut value {best_value} after {phases} phases")
    return MinCutResult(
        cut_value=best_value,
        partition1=partition1,
        partition2=partition2,
        cut_edges=_crossing_edges(undirected, partition1, partition2),
    )


def karger_min_cut(
    graph: GraphLike,
    trials: Optional[int] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> MinCutResult:
    """Find a global minimum cut with Karger's randomized contraction.

    One trial repeatedly picks a pair of adjacent super-nodes uniformly at
    random (weights do not bias the choice) and contracts it until two
    super-nodes remain. The trial's cut is the weight of the input edges from
    the first super-node to the second. Asymmetric input is contracted as
    given: no reverse edges are added. The best of ``trials`` independent
    trials is returned. A single trial has no
    correctness guarantee; more trials raise the probability of finding the
    true minimum.

    Args:
        graph: Weighted graph. Nodes joined by an edge in either direction
            are candidates for contraction.
        trials: Number of trials. Defaults to ``KARGER_CONFIG.trials``.
        seed: Master seed. Each trial draws from its own generator derived
            from ``seed`` and the trial index, so results are reproducible
            and trials share no random state.
        rng: Explicit generator used for every trial instead of derived
            ones. Takes precedence over ``seed``.

    Returns:
        MinCutResult for the best trial. Graphs with fewer than two nodes
        yield a zero cut with all nodes in partition 1.

    Raises:
        ValueError: If ``trials`` is not positive.
    """
    if trials is None:
        trials = KARGER_CONFIG.trials
    if trials <= 0:
        raise ValueError(f"trials must be a positive integer, got {trials}")

    network = as_weighted_digraph(graph)
    if network.number_of_nodes() < 2:
        return MinCutResult(cut_value=0, partition1=frozenset(network))

    seed_mgr = SeedManager(seed)
    best: Optional[Tuple[Weight, List[NodeID], List[NodeID]]] = None
    for trial in range(trials):
        trial_rng = rng
        if trial_rng is None:
            trial_rng = seed_mgr.create_random_state(KARGER_CONFIG.seed_component, trial)
        outcome = _karger_trial(network, trial_rng)
        if best is None or outcome[0] < best[0]:
            best = outcome

    assert best is not None
    cut_value, side1, side2 = best
    partition1 = frozenset(side1)
    partition2 = frozenset(side2)
    logger.debug(f"Karger: best cut value {cut_value} over {trials} trials")
    return MinCutResult(
        cut_value=cut_value,
        partition1=partition1,
        partition2=partition2,
        cut_edges=_crossing_edges(network, partition1, partition2),
    )


def _minimum_cut_phase(work: WeightedDiGraph) -> Tuple[NodeID, NodeID, Weight]:
    """Run one maximum-adjacency phase and return ``(s, t, cut_of_the_phase)``.

    ``t`` is the last node added and ``s`` the one before it. ``work`` must
    have at least two nodes.
    """
    nodes = iter(work)
    start = next(nodes)
    # connectivity of each not-yet-added node to the added set
    connectivity: Dict[NodeID, Weight] = {node: 0 for node in nodes}
    for neighbor, data in work.succ[start].items():
        connectivity[neighbor] += data[WEIGHT_ATTR]

    s, t = start, start
    cut_of_phase: Weight = 0
    while connectivity:
        best_node = None
        best_weight: Optional[Weight] = None
        for node, weight in connectivity.items():
            if best_weight is None or weight > best_weight:
                best_node, best_weight = node, weight
        assert best_weight is not None
        del connectivity[best_node]
        s, t, cut_of_phase = t, best_node, best_weight
        for neighbor, data in work.succ[best_node].items():
            if neighbor in connectivity:
                connectivity[neighbor] += data[WEIGHT_ATTR]
    return s, t, cut_of_phase


def _karger_trial(
    network: WeightedDiGraph, rng: random.Random
) -> Tuple[Weight, List[NodeID], List[NodeID]]:
    """Contract random node pairs of a copy of ``network`` down to two super-nodes."""
    work = network.copy()
    members: Dict[NodeID, List[NodeID]] = {node: [node] for node in work}

    while work.number_of_nodes() > 2:
        pairs = _adjacent_pairs(work)
        if not pairs:
            break
        u, v = rng.choice(pairs)
        members[u].extend(members.pop(v))
        _contract(work, u, v)

    nodes = list(work)
    if len(nodes) > 2:
        # Disconnected: no edge in either direction is left to contract, so
        # the first super-node is separated from the rest by a zero cut.
        rest = [node for other in nodes[1:] for node in members[other]]
        return 0, members[nodes[0]], rest

    a, b = nodes
    return work.weight(a, b), members[a], members[b]


def _adjacent_pairs(work: WeightedDiGraph) -> List[Tuple[NodeID, NodeID]]:
    """List each pair of nodes joined by an edge in either direction once.

    Pairs are ``(u, v)`` with ``u`` first in node order, in edge iteration order.
    """
    position = {node: i for i, node in enumerate(work)}
    pairs = dict.fromkeys(
        (u, v) if position[u] < position[v] else (v, u) for u, v in work.edges()
    )
    return list(pairs)


def _contract(work: WeightedDiGraph, keep: NodeID, drop: NodeID) -> None:
    """Merge ``drop`` into ``keep``: sum weights to shared neighbors, drop the self-loop."""
    for neighbor, weight in work.out_weights(drop).items():
        if neighbor != keep:
            work.add_weight(keep, neighbor, weight)
    for pred, data in list(work.pred[drop].items()):
        if pred != keep:
            work.add_weight(pred, keep, data[WEIGHT_ATTR])
    work.remove_node(drop)


def _crossing_edges(
    graph: WeightedDiGraph,
    partition1: FrozenSet[NodeID],
    partition2: FrozenSet[NodeID],
) -> Tuple[CutEdge, ...]:
    """Edges of ``graph`` going from ``partition1`` to ``partition2``."""
    return tuple(
        CutEdge(u, v, w)
        for u, v, w in graph.edges(data=WEIGHT_ATTR)
        if u in partition1 and v in partition2
    )
