"""Flow and cut extraction from an exhausted residual graph."""

from __future__ import annotations

from collections import deque
from copy import deepcopy
from typing import Any, List, Optional, Set

from ekflow.algorithms.errors import ResidualMismatchError
from ekflow.config import FLOW_CONFIG
from ekflow.graph.strict_digraph import NodeID, StrictDiGraph


def flow_from_residuals(graph: StrictDiGraph, residual: StrictDiGraph) -> StrictDiGraph:
    """Return a copy of ``graph`` whose edge weights are the flow carried.

    The flow on capacity edge ``(u, v)`` is the weight of residual edge
    ``(v, u)``, i.e. the capacity already pushed and refundable.

    Args:
        graph: Capacity graph.
        residual: Residual graph built from ``graph`` by ``residuals``.

    Returns:
        StrictDiGraph: Flow graph with the same node and edge ids as ``graph``.

    Raises:
        ResidualMismatchError: If ``residual`` lacks the reverse of some
            capacity edge, meaning the two graphs do not belong together.
    """
    flow = graph.copy()
    for e in flow.edge_indices():
        u, v = flow.edge_endpoints(e)
        reverse_id = residual.find_edge(v, u)
        if reverse_id is None:
            raise ResidualMismatchError(
                f"Residual graph has no reverse edge ({v}, {u}) for capacity edge {e}."
            )
        flow.set_edge_weight(e, residual.edge_weight(reverse_id))
    return flow


def reachable_nodes(
    residual: StrictDiGraph, src_node: NodeID, epsilon: Optional[float] = None
) -> Set[NodeID]:
    """Return the node ids reachable from ``src_node`` over positive residual edges.

    ``src_node`` itself is always included.
    """
    return set(_reachable_in_order(residual, src_node, epsilon))


def cut_from_residual(
    residual: StrictDiGraph, src_node: NodeID, epsilon: Optional[float] = None
) -> List[Any]:
    """Return the payloads of the source half of the cut.

    Payloads are cloned and listed in breadth-first discovery order starting
    with the source. On an exhausted residual graph this is the source side
    of a minimum cut.

    Args:
        residual: Residual graph.
        src_node: Source node.
        epsilon: Traversal threshold; defaults to ``FLOW_CONFIG.epsilon``.

    Returns:
        List[Any]: Cloned payloads of every reachable node.
    """
    return [
        deepcopy(residual.payload(n))
        for n in _reachable_in_order(residual, src_node, epsilon)
    ]


def _reachable_in_order(
    residual: StrictDiGraph, src_node: NodeID, epsilon: Optional[float]
) -> List[NodeID]:
    if epsilon is None:
        epsilon = FLOW_CONFIG.epsilon
    if src_node not in residual:
        raise ValueError(f"Source node '{src_node}' does not exist.")

    order = [src_node]
    visited = {src_node}
    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        for _, neighbor, weight in residual.out_edges_weighted(node):
            if weight > epsilon and neighbor not in visited:
                visited.add(neighbor)
                order.append(neighbor)
                queue.append(neighbor)
    return order
