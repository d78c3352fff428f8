import pytest


def _undirected(edges):
    graph = {}
    for u, v, w in edges:
        graph.setdefault(u, {})[v] = w
        graph.setdefault(v, {})[u] = w
    return graph


@pytest.fixture
def two_paths():
    # Capacity:
    #      [3]       [2]
    #   ┌──────►A────────┐
    #   │                ▼
    #   S                T
    #   │                ▲
    #   └──────►B────────┘
    #      [2]       [3]
    return {
        "s": {"a": 3, "b": 2},
        "a": {"t": 2},
        "b": {"t": 3},
        "t": {},
    }


@pytest.fixture
def funnel():
    # Capacity:
    #      [10]     [1]
    #   ┌──────►A──────┐
    #   │              ▼   [10]
    #   S              C──────►T
    #   │              ▲
    #   └──────►B──────┘
    #      [10]     [1]
    return {
        "s": {"a": 10, "b": 10},
        "a": {"c": 1},
        "b": {"c": 1},
        "c": {"t": 10},
        "t": {},
    }


@pytest.fixture
def cross():
    # A DFS that follows A->B first must later cancel that flow.
    # Capacity:
    #      [1]      [1]
    #   S──────►A──────►T
    #   │       │[1]    ▲
    #   │       ▼       │
    #   └──────►B───────┘
    #      [1]      [1]
    return {
        "s": {"a": 1, "b": 1},
        "a": {"b": 1, "t": 1},
        "b": {"t": 1},
        "t": {},
    }


@pytest.fixture
def cross_bidirectional():
    # Same as ``cross`` but A<->B carries capacity 1 in both directions.
    return {
        "s": {"a": 1, "b": 1},
        "a": {"b": 1, "t": 1},
        "b": {"a": 1, "t": 1},
        "t": {},
    }


@pytest.fixture
def chain():
    # S -[5]-> A -[3]-> B -[5]-> T
    return {"s": {"a": 5}, "a": {"b": 3}, "b": {"t": 5}, "t": {}}


@pytest.fixture
def complete4():
    # K4 with unit weights
    nodes = ["a", "b", "c", "d"]
    return {u: {v: 1 for v in nodes if v != u} for u in nodes}


@pytest.fixture
def complete5():
    nodes = [f"v{i}" for i in range(5)]
    return {u: {v: 1 for v in nodes if v != u} for u in nodes}


@pytest.fixture
def triangle():
    return _undirected([("a", "b", 1), ("b", "c", 1), ("a", "c", 1)])


@pytest.fixture
def square_with_chord():
    # Weights:
    #        [2]
    #    A───────B
    #    │ ╲     │
    # [3]│  ╲[1] │[3]
    #    │   ╲   │
    #    C───────D
    #        [1]
    # Min cut 4: {D} alone (3 + 1), or {A, C} | {B, D} (2 + 1 + 1).
    return _undirected(
        [("a", "b", 2), ("a", "c", 3), ("b", "c", 1), ("b", "d", 3), ("c", "d", 1)]
    )


@pytest.fixture
def weighted_cycle():
    # A -3- B -4- C -1- D -2- A ; min cut 3 separates {A, B} from {C, D}
    return _undirected([("a", "b", 3), ("b", "c", 4), ("c", "d", 1), ("d", "a", 2)])


@pytest.fixture
def path4():
    return _undirected([("a", "b", 1), ("b", "c", 1), ("c", "d", 1)])


@pytest.fixture
def two_cliques():
    # Two triangles joined by the bridge C-D:
    #
    #   A       E
    #   │╲     ╱│
    #   │ C───D │
    #   │╱     ╲│
    #   B       F
    return _undirected(
        [
            ("a", "b", 1),
            ("b", "c", 1),
            ("a", "c", 1),
            ("d", "e", 1),
            ("e", "f", 1),
            ("d", "f", 1),
            ("c", "d", 1),
        ]
    )


@pytest.fixture
def ring_of_cliques():
    # Four 4-cliques, consecutive cliques joined by one edge
    edges = []
    for k in range(4):
        members = [f"{k}-{i}" for i in range(4)]
        for i, u in enumerate(members):
            for v in members[i + 1 :]:
                edges.append((u, v, 1))
        edges.append((f"{k}-0", f"{(k + 1) % 4}-3", 1))
    return _undirected(edges)
