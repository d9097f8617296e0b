"""Tests for `ekflow.config` defaults and their use by the algorithms."""

import pytest

from ekflow.algorithms.max_flow import calc_max_flow
from ekflow.config import FLOW_CONFIG, FlowConfig
from ekflow.graph.strict_digraph import StrictDiGraph


def test_defaults() -> None:
    config = FlowConfig()
    assert config.epsilon == 0.0
    assert config.weight_attr == "weight"
    assert config.payload_attr == "payload"


def test_global_epsilon_filters_small_residuals(monkeypatch) -> None:
    g = StrictDiGraph()
    a = g.add_payload_node("A")
    b = g.add_payload_node("B")
    c = g.add_payload_node("C")
    g.add_edge(a, b, 1e-9)
    g.add_edge(a, c, 1.0)
    g.add_edge(c, b, 2.0)

    assert calc_max_flow(g, a, b) == pytest.approx(1.0 + 1e-9)

    monkeypatch.setattr(FLOW_CONFIG, "epsilon", 1e-6)
    assert calc_max_flow(g, a, b) == 1.0


def test_graph_attr_names_follow_config(monkeypatch) -> None:
    monkeypatch.setattr(FLOW_CONFIG, "weight_attr", "capacity")
    monkeypatch.setattr(FLOW_CONFIG, "payload_attr", "label")

    g = StrictDiGraph()
    a = g.add_payload_node("A")
    b = g.add_payload_node("B")
    g.add_edge(a, b, 4.0)

    assert g.nodes[a] == {"label": "A"}
    assert g.edges[a, b] == {"capacity": 4.0}
    assert calc_max_flow(g, a, b) == 4.0
