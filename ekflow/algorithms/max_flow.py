"""Maximum flow and minimum cut via Edmonds-Karp augmentation.

Builds a residual graph, pushes flow along BFS-shortest augmenting paths
until none remain, then reads the cut or the flow assignment off the
exhausted residual graph.
"""

from __future__ import annotations

from typing import Any, List, Literal, Tuple, Union, overload

from ekflow.algorithms.augment import find_augmenting_path
from ekflow.algorithms.extract import (
    cut_from_residual,
    flow_from_residuals,
    reachable_nodes,
)
from ekflow.algorithms.residual import residuals
from ekflow.algorithms.types import Edge, FlowSummary
from ekflow.graph.strict_digraph import NodeID, StrictDiGraph
from ekflow.logging import get_logger

logger = get_logger(__name__)


def saturate(residual: StrictDiGraph, src_node: NodeID, dst_node: NodeID) -> int:
    """Apply augmenting paths until none is left.

    Args:
        residual: Residual graph, mutated in place.
        src_node: Source node.
        dst_node: Destination node; must differ from ``src_node``.

    Returns:
        int: Number of augmenting paths applied.
    """
    count = 0
    while find_augmenting_path(residual, src_node, dst_node):
        count += 1
    logger.debug(
        "Residual graph saturated after %d augmenting paths (%s -> %s)",
        count,
        src_node,
        dst_node,
    )
    return count


def min_cut(graph: StrictDiGraph, src_node: NodeID, dst_node: NodeID) -> List[Any]:
    """Find a minimum cut and return the payloads of its source half.

    Example:
        >>> g = StrictDiGraph()
        >>> a, b, c = (g.add_payload_node(p) for p in "ABC")
        >>> _ = g.add_edge(a, b, 3.0)
        >>> _ = g.add_edge(b, c, 1.0)
        >>> min_cut(g, a, c)
        ['A', 'B']
    """
    residual = residuals(graph)
    saturate(residual, src_node, dst_node)
    return cut_from_residual(residual, src_node)


def max_flow_graph(
    graph: StrictDiGraph, src_node: NodeID, dst_node: NodeID
) -> StrictDiGraph:
    """Return a maximum flow as a graph isomorphic to ``graph``.

    Edge weights of the result are the flow carried by each capacity edge.
    """
    residual = residuals(graph)
    saturate(residual, src_node, dst_node)
    return flow_from_residuals(graph, residual)


def flow_value(flow_graph: StrictDiGraph, src_node: NodeID) -> float:
    """Return the net flow leaving ``src_node`` in a flow graph."""
    out_flow = sum(w for _, _, w in flow_graph.out_edges_weighted(src_node))
    in_flow = sum(
        d[flow_graph.weight_attr] for _, _, d in flow_graph.in_edges(src_node, data=True)
    )
    return float(out_flow - in_flow)


def min_cut_edges(
    graph: StrictDiGraph, src_node: NodeID, dst_node: NodeID
) -> List[Edge]:
    """Return the capacity edges crossing a minimum cut, source side first."""
    _, summary = calc_max_flow(graph, src_node, dst_node, return_summary=True)
    return summary.min_cut


@overload
def calc_max_flow(
    graph: StrictDiGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[False] = False,
    return_graph: Literal[False] = False,
) -> float: ...


@overload
def calc_max_flow(
    graph: StrictDiGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[True],
    return_graph: Literal[False] = False,
) -> Tuple[float, FlowSummary]: ...


@overload
def calc_max_flow(
    graph: StrictDiGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[False] = False,
    return_graph: Literal[True],
) -> Tuple[float, StrictDiGraph]: ...


@overload
def calc_max_flow(
    graph: StrictDiGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[True],
    return_graph: Literal[True],
) -> Tuple[float, FlowSummary, StrictDiGraph]: ...


def calc_max_flow(
    graph: StrictDiGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: bool = False,
    return_graph: bool = False,
) -> Union[float, tuple]:
    """Compute the max flow between two nodes of a capacity graph.

    The capacity graph is never modified; all work happens on a freshly
    built residual graph.

    Args:
        graph: Capacity graph without opposite edge pairs.
        src_node: Source node.
        dst_node: Destination node; must differ from ``src_node``.
        return_summary: If True, also return a ``FlowSummary``.
        return_graph: If True, also return the flow graph.

    Returns:
        Union[float, tuple]:
            - If neither flag: ``float`` total flow.
            - Otherwise a tuple ``(total_flow, summary?, flow_graph?)`` holding
              only the requested items, in that order.

    Raises:
        InvalidGraphError: If the capacity graph has opposite edges.
        ValueError: If a node is missing or ``src_node == dst_node``.

    Examples:
        >>> g = StrictDiGraph()
        >>> a, b, c = (g.add_payload_node(p) for p in "ABC")
        >>> _ = g.add_edge(a, b, 10.0)
        >>> _ = g.add_edge(b, c, 5.0)
        >>> calc_max_flow(g, a, c)
        5.0
        >>> flow, summary = calc_max_flow(g, a, c, return_summary=True)
        >>> summary.min_cut
        [(1, 2, 1)]
    """
    residual = residuals(graph)
    augmentations = saturate(residual, src_node, dst_node)
    flow_graph = flow_from_residuals(graph, residual)
    total_flow = flow_value(flow_graph, src_node)

    if not (return_summary or return_graph):
        return total_flow

    ret: list = [total_flow]
    if return_summary:
        ret.append(
            _build_flow_summary(
                total_flow, graph, flow_graph, residual, src_node, augmentations
            )
        )
    if return_graph:
        ret.append(flow_graph)
    return tuple(ret)


def _build_flow_summary(
    total_flow: float,
    graph: StrictDiGraph,
    flow_graph: StrictDiGraph,
    residual: StrictDiGraph,
    src_node: NodeID,
    augmentations: int,
) -> FlowSummary:
    """Construct a ``FlowSummary`` from the exhausted residual graph."""
    edge_flow = {}
    residual_cap = {}
    for e in graph.edge_indices():
        edge = (*graph.edge_endpoints(e), e)
        f = flow_graph.edge_weight(e)
        edge_flow[edge] = f
        residual_cap[edge] = graph.edge_weight(e) - f

    reachable = reachable_nodes(residual, src_node)
    cut = [
        (u, v, e)
        for (u, v, e) in edge_flow
        if u in reachable and v not in reachable
    ]

    return FlowSummary(
        total_flow=total_flow,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=cut,
        augmentations=augmentations,
    )
