"""NetworkX graph conversion utilities.

Moves graphs between plain NetworkX digraphs and `StrictDiGraph`. The
export direction is also the hand-off for external renderers: a
`networkx.DiGraph` enumerates nodes, then edges with their weights.

Example:
    >>> import networkx as nx
    >>> from ekflow.graph.convert import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", capacity=7.0)
    >>> G.add_edge("B", "C", capacity=2.0)
    >>>
    >>> graph, node_map = from_networkx(G)
    >>> node_map.to_index["A"]
    0
    >>> G_out = to_networkx(graph, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx

from ekflow.graph.strict_digraph import NodeID, StrictDiGraph


@dataclass
class NodeMap:
    """Bidirectional mapping between external node names and node ids.

    Attributes:
        to_index: Maps original node names to node ids.
        to_name: Maps node ids back to original node names.
    """

    to_index: Dict[Hashable, NodeID] = field(default_factory=dict)
    to_name: Dict[NodeID, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from a list of node names in id order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        """Return the number of nodes in the mapping."""
        return len(self.to_index)


def from_networkx(
    G: nx.DiGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: Optional[float] = None,
) -> Tuple[StrictDiGraph, NodeMap]:
    """Convert a NetworkX digraph into a capacity `StrictDiGraph`.

    Node names become node payloads and are assigned ids in sorted (by
    ``str``) order for deterministic results. Edges are added in the order
    NetworkX enumerates them.

    Args:
        G: A ``networkx.DiGraph``. Multigraphs and undirected graphs are
            rejected since they cannot be expressed with one edge per
            ordered pair.
        capacity_attr: Edge attribute holding the capacity.
        default_capacity: Capacity for edges lacking ``capacity_attr``. If
            None, a missing attribute is an error.

    Returns:
        Tuple of (graph, node_map).

    Raises:
        TypeError: If G is not a simple NetworkX digraph.
        ValueError: If an edge has no capacity and no default was given, or
            the capacity is invalid.
    """
    if not isinstance(G, nx.DiGraph) or isinstance(G, nx.MultiDiGraph):
        raise TypeError(f"Expected networkx.DiGraph, got {type(G).__name__}")

    node_map = NodeMap.from_names(sorted(G.nodes(), key=str))

    graph = StrictDiGraph()
    for node_id, name in node_map.to_name.items():
        graph.add_node(node_id, **{graph.payload_attr: name})

    for u, v, data in G.edges(data=True):
        capacity = data.get(capacity_attr, default_capacity)
        if capacity is None:
            raise ValueError(f"Edge ({u!r}, {v!r}) has no '{capacity_attr}' attribute.")
        graph.add_edge(node_map.to_index[u], node_map.to_index[v], capacity)

    return graph, node_map


def to_networkx(
    graph: StrictDiGraph,
    node_map: Optional[NodeMap] = None,
    *,
    weight_attr: str = "weight",
) -> nx.DiGraph:
    """Convert a `StrictDiGraph` into a plain ``networkx.DiGraph``.

    Nodes are keyed by their original name when ``node_map`` is given and by
    node id otherwise; either way the payload is kept as the ``payload``
    node attribute. Each edge carries its weight under ``weight_attr`` and its
    id under ``edge_id``.

    Args:
        graph: Capacity, residual or flow graph.
        node_map: Optional mapping returned by ``from_networkx``.
        weight_attr: Edge attribute name to write weights to.

    Returns:
        A new ``networkx.DiGraph``.
    """

    def name(n: NodeID) -> Hashable:
        return node_map.to_name[n] if node_map is not None else n

    nx_graph = nx.DiGraph()
    for n in graph.node_indices():
        nx_graph.add_node(name(n), payload=graph.payload(n))
    for e in graph.edge_indices():
        u, v = graph.edge_endpoints(e)
        nx_graph.add_edge(name(u), name(v), edge_id=e, **{weight_attr: graph.edge_weight(e)})
    return nx_graph
