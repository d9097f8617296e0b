"""Residual graph construction.

Edge weights in the input graph are capacities; edge weights in the output
graph are residual capacities. Every residual graph contains each capacity
edge and its reverse, even when the reverse has zero residual capacity.
"""

from __future__ import annotations

from ekflow.algorithms.errors import InvalidGraphError
from ekflow.graph.strict_digraph import StrictDiGraph
from ekflow.logging import get_logger

logger = get_logger(__name__)


def residuals(graph: StrictDiGraph) -> StrictDiGraph:
    """Build the residual graph of a capacity graph.

    The result has the same node ids with cloned payloads and, for every
    capacity edge ``(u, v, w)`` in edge-id order, a forward edge ``(u, v, w)``
    followed by a backward edge ``(v, u, 0.0)``. The input is not modified.

    Args:
        graph: Capacity graph.

    Returns:
        StrictDiGraph: A new residual graph.

    Raises:
        InvalidGraphError: If the capacity graph contains both ``(u, v)`` and
            ``(v, u)``. Nothing is returned in that case.
    """
    for e in graph.edge_indices():
        u, v = graph.edge_endpoints(e)
        if graph.find_edge(v, u) is not None:
            raise InvalidGraphError(
                f"Graph contains opposite edges: ({u}, {v}) and ({v}, {u})"
            )

    res = graph.clone_nodes()
    for e in graph.edge_indices():
        u, v = graph.edge_endpoints(e)
        res.add_edge(u, v, graph.edge_weight(e))
        res.add_edge(v, u, 0.0)

    logger.debug(
        "Built residual graph: %d nodes, %d edges",
        res.number_of_nodes(),
        res.number_of_edges(),
    )
    return res
