"""Sample capacity graphs shared by the algorithm tests.

Each fixture returns ``(graph, ids)`` where ``ids`` maps node names to node ids.
"""

from typing import Dict, Iterable, Tuple

import pytest

from ekflow.graph.strict_digraph import NodeID, StrictDiGraph

EdgeSpec = Tuple[str, str, float]


def build_graph(
    names: Iterable[str], edges: Iterable[EdgeSpec]
) -> Tuple[StrictDiGraph, Dict[str, NodeID]]:
    g = StrictDiGraph()
    ids = {name: g.add_payload_node(name) for name in names}
    for u, v, cap in edges:
        g.add_edge(ids[u], ids[v], cap)
    return g, ids


@pytest.fixture
def make_graph():
    return build_graph


@pytest.fixture
def diamond():
    # A -> B [7], A -> C [2], B -> C [2], B -> D [1], C -> D [5]
    #
    # Max flow A->D is 5, min cut source side is {A, B}: the crossing
    # edges A -> C, B -> C and B -> D are all saturated.
    return build_graph(
        "ABCD",
        [
            ("A", "B", 7),
            ("A", "C", 2),
            ("B", "C", 2),
            ("B", "D", 1),
            ("C", "D", 5),
        ],
    )


@pytest.fixture
def line1():
    #      [5]      [3]
    #  A ───────► B ───────► C
    return build_graph("ABC", [("A", "B", 5), ("B", "C", 3)])


@pytest.fixture
def clrs():
    # Flow network from CLRS (3rd ed.) figure 26.1: max flow s->t is 23 and
    # the minimum cut separates {s, v1, v2, v4} from {v3, t}.
    return build_graph(
        ["s", "v1", "v2", "v3", "v4", "t"],
        [
            ("s", "v1", 16),
            ("s", "v2", 13),
            ("v2", "v1", 4),
            ("v1", "v3", 12),
            ("v3", "v2", 9),
            ("v2", "v4", 14),
            ("v4", "v3", 7),
            ("v3", "t", 20),
            ("v4", "t", 4),
        ],
    )


@pytest.fixture
def square_cross():
    # A -> B, A -> C, B -> D, C -> D plus a cross edge B -> C. All capacity 1.
    # A path through the cross edge has to be undone by a backward edge.
    return build_graph(
        "ABCD",
        [
            ("A", "B", 1),
            ("B", "C", 1),
            ("A", "C", 1),
            ("B", "D", 1),
            ("C", "D", 1),
        ],
    )


@pytest.fixture
def disconnected():
    return build_graph("ABCD", [("A", "B", 4), ("C", "D", 4)])
