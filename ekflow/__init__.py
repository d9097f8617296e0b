"""ekflow: Edmonds-Karp maximum flow and minimum cut.

Primary API:
    StrictDiGraph - Directed graph with indexed nodes, payloads and float weights
    residuals() - Build a residual graph from a capacity graph
    find_augmenting_path() - One BFS augmentation step on a residual graph
    flow_from_residuals() - Flow assignment from an exhausted residual graph
    cut_from_residual() - Source half of the cut from a residual graph
    min_cut() - Source half of a minimum cut
    calc_max_flow() - Max-flow value with optional summary and flow graph

Example:
    from ekflow import StrictDiGraph, calc_max_flow, min_cut

    g = StrictDiGraph()
    a = g.add_payload_node("A")
    b = g.add_payload_node("B")
    g.add_edge(a, b, 7.0)

    calc_max_flow(g, a, b)  # 7.0
    min_cut(g, a, b)  # ["A"]
"""

from __future__ import annotations

from ekflow import logging
from ekflow._version import __version__
from ekflow.algorithms.augment import find_augmenting_path
from ekflow.algorithms.errors import InvalidGraphError, ResidualMismatchError
from ekflow.algorithms.extract import (
    cut_from_residual,
    flow_from_residuals,
    reachable_nodes,
)
from ekflow.algorithms.max_flow import (
    calc_max_flow,
    flow_value,
    max_flow_graph,
    min_cut,
    min_cut_edges,
)
from ekflow.algorithms.residual import residuals
from ekflow.algorithms.types import FlowSummary
from ekflow.config import FLOW_CONFIG, FlowConfig
from ekflow.graph.convert import NodeMap, from_networkx, to_networkx
from ekflow.graph.strict_digraph import StrictDiGraph

__all__ = [
    # Version
    "__version__",
    # Graph model
    "StrictDiGraph",
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Algorithms
    "residuals",
    "find_augmenting_path",
    "flow_from_residuals",
    "cut_from_residual",
    "reachable_nodes",
    "min_cut",
    "min_cut_edges",
    "max_flow_graph",
    "flow_value",
    "calc_max_flow",
    # Types and errors
    "FlowSummary",
    "InvalidGraphError",
    "ResidualMismatchError",
    # Configuration
    "FlowConfig",
    "FLOW_CONFIG",
    # Utilities
    "logging",
]
