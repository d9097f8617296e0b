"""Types and data structures for max-flow results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from ekflow.graph.strict_digraph import EdgeID, NodeID

# Edge identifier tuple: (source_node, destination_node, edge_id)
Edge = Tuple[NodeID, NodeID, EdgeID]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value, the net flow leaving the source.
        edge_flow: Flow per capacity edge, indexed by ``(src, dst, edge_id)``.
        residual_cap: Remaining capacity per capacity edge.
        reachable: Source side of the minimum cut.
        min_cut: Capacity edges crossing from the source side to the sink side.
        augmentations: Number of augmenting paths applied.
    """

    total_flow: float
    edge_flow: Dict[Edge, float]
    residual_cap: Dict[Edge, float]
    reachable: Set[NodeID]
    min_cut: List[Edge]
    augmentations: int
