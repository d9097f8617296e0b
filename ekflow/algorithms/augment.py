"""Augmenting-path search and application on a residual graph.

One call of `find_augmenting_path` is one Edmonds-Karp iteration: a
breadth-first search restricted to edges with positive residual capacity,
followed by pushing the path's bottleneck through it.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Tuple

from ekflow.algorithms.errors import ResidualMismatchError
from ekflow.config import FLOW_CONFIG
from ekflow.graph.strict_digraph import EdgeID, NodeID, StrictDiGraph
from ekflow.logging import get_logger

logger = get_logger(__name__)

# Node -> (predecessor node, edge id from predecessor, edge weight at discovery)
PredDict = Dict[NodeID, Tuple[NodeID, EdgeID, float]]

# (source node, target node, edge id), ordered from the path source onwards
PathEdges = List[Tuple[NodeID, NodeID, EdgeID]]


def bfs_predecessors(
    residual: StrictDiGraph,
    src_node: NodeID,
    dst_node: Optional[NodeID] = None,
    epsilon: Optional[float] = None,
) -> PredDict:
    """Breadth-first search over edges with residual weight above ``epsilon``.

    Each node is marked visited on first discovery and never enqueued again,
    so its predecessor is the one on a shortest (fewest edges) path. Neighbors
    are explored in the graph's outgoing-edge order. The search stops as
    soon as ``dst_node`` is discovered, if given.

    Args:
        residual: Residual graph.
        src_node: Node to search from.
        dst_node: Optional node at which to stop.
        epsilon: Traversal threshold; defaults to ``FLOW_CONFIG.epsilon``.

    Returns:
        PredDict: Predecessor record for every discovered node except the
            source.
    """
    if epsilon is None:
        epsilon = FLOW_CONFIG.epsilon

    pred: PredDict = {}
    visited = {src_node}
    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        for edge_id, neighbor, weight in residual.out_edges_weighted(node):
            if weight <= epsilon or neighbor in visited:
                continue
            visited.add(neighbor)
            pred[neighbor] = (node, edge_id, weight)
            if neighbor == dst_node:
                return pred
            queue.append(neighbor)
    return pred


def resolve_path(
    pred: PredDict, src_node: NodeID, dst_node: NodeID
) -> Tuple[PathEdges, float]:
    """Walk predecessors back from ``dst_node`` and return ``(path, bottleneck)``.

    The bottleneck is the smallest residual weight recorded along the path.
    ``dst_node`` must be present in ``pred``.
    """
    path: PathEdges = []
    bottleneck = float("inf")
    current = dst_node
    while current != src_node:
        prev, edge_id, weight = pred[current]
        bottleneck = min(bottleneck, weight)
        path.append((prev, current, edge_id))
        current = prev
    path.reverse()
    return path, bottleneck


def augment_path(residual: StrictDiGraph, path: PathEdges, amount: float) -> None:
    """Push ``amount`` of flow along ``path``.

    Each forward edge loses ``amount`` of residual capacity and its paired
    reverse edge gains the same, so the pair's total stays constant.

    Raises:
        ResidualMismatchError: If an edge on the path has no reverse edge.
    """
    updates = []
    for u, v, edge_id in path:
        reverse_id = residual.find_edge(v, u)
        if reverse_id is None:
            raise ResidualMismatchError(
                f"Residual graph has no reverse edge for ({u}, {v})."
            )
        updates.append((edge_id, reverse_id))

    for edge_id, reverse_id in updates:
        residual.set_edge_weight(edge_id, residual.edge_weight(edge_id) - amount)
        residual.set_edge_weight(reverse_id, residual.edge_weight(reverse_id) + amount)


def find_augmenting_path(
    residual: StrictDiGraph,
    src_node: NodeID,
    dst_node: NodeID,
    epsilon: Optional[float] = None,
) -> bool:
    """Find one augmenting path and push its bottleneck flow through it.

    Args:
        residual: Residual graph; mutated in place when a path is found.
        src_node: Source node.
        dst_node: Destination node; must differ from ``src_node``.
        epsilon: Traversal threshold; defaults to ``FLOW_CONFIG.epsilon``.

    Returns:
        bool: True if flow was pushed, False if ``dst_node`` is unreachable.
            The graph is untouched when False is returned.

    Raises:
        ValueError: If either node is missing or ``src_node == dst_node``.
    """
    if src_node not in residual:
        raise ValueError(f"Source node '{src_node}' does not exist.")
    if dst_node not in residual:
        raise ValueError(f"Destination node '{dst_node}' does not exist.")
    if src_node == dst_node:
        raise ValueError(
            f"Source and destination must differ, both are '{src_node}'."
        )

    pred = bfs_predecessors(residual, src_node, dst_node, epsilon)
    if dst_node not in pred:
        return False

    path, bottleneck = resolve_path(pred, src_node, dst_node)
    augment_path(residual, path, bottleneck)
    logger.debug(
        "Augmented %s -> %s: %d edges, bottleneck %s",
        src_node,
        dst_node,
        len(path),
        bottleneck,
    )
    return True
