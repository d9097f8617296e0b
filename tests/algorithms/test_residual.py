import pytest

from ekflow.algorithms.errors import InvalidGraphError
from ekflow.algorithms.residual import residuals
from ekflow.graph.strict_digraph import StrictDiGraph


def test_residuals_pairs_every_edge(diamond):
    g, ids = diamond
    r = residuals(g)

    assert r.number_of_nodes() == g.number_of_nodes()
    assert r.number_of_edges() == 2 * g.number_of_edges()
    for e in g.edge_indices():
        u, v = g.edge_endpoints(e)
        fwd = r.find_edge(u, v)
        bwd = r.find_edge(v, u)
        assert fwd is not None and bwd is not None
        assert r.edge_weight(fwd) == g.edge_weight(e)
        assert r.edge_weight(bwd) == 0.0


def test_residuals_edge_id_layout(line1):
    """Capacity edge i maps to forward edge 2*i and backward edge 2*i + 1."""
    g, ids = line1
    r = residuals(g)
    for e in g.edge_indices():
        u, v = g.edge_endpoints(e)
        assert r.edge_endpoints(2 * e) == (u, v)
        assert r.edge_endpoints(2 * e + 1) == (v, u)


def test_residuals_clones_payloads():
    g = StrictDiGraph()
    a = g.add_payload_node({"name": "A"})
    b = g.add_payload_node({"name": "B"})
    g.add_edge(a, b, 1.0)

    r = residuals(g)
    assert list(r.node_indices()) == [a, b]
    assert r.payload(a) == {"name": "A"}
    assert r.payload(a) is not g.payload(a)


def test_residuals_leaves_input_untouched(diamond):
    g, _ = diamond
    before = {e: (g.edge_endpoints(e), g.edge_weight(e)) for e in g.edge_indices()}
    residuals(g)
    after = {e: (g.edge_endpoints(e), g.edge_weight(e)) for e in g.edge_indices()}
    assert before == after
    assert g.number_of_edges() == 5


def test_residuals_rejects_opposite_edges():
    g = StrictDiGraph()
    a = g.add_payload_node()
    b = g.add_payload_node()
    g.add_edge(a, b, 1.0)
    g.add_edge(b, a, 1.0)

    with pytest.raises(InvalidGraphError, match=r"opposite edges: \(0, 1\) and \(1, 0\)"):
        residuals(g)


def test_invalid_graph_error_is_value_error(make_graph):
    g, _ = make_graph("ABC", [("A", "B", 1), ("B", "C", 1), ("C", "B", 2)])
    with pytest.raises(ValueError):
        residuals(g)


def test_residuals_empty_graph():
    g = StrictDiGraph()
    g.add_payload_node("lonely")
    r = residuals(g)
    assert r.number_of_nodes() == 1
    assert r.number_of_edges() == 0


def test_residuals_logs_size(diamond, caplog):
    g, _ = diamond
    with caplog.at_level("DEBUG", logger="ekflow"):
        residuals(g)
    assert "Built residual graph: 4 nodes, 10 edges" in caplog.text
