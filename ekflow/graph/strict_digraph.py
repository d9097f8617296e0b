"""Strict directed graph with indexed nodes and edges.

`StrictDiGraph` extends `networkx.DiGraph` to give nodes and edges dense
integer identifiers, store one float weight per edge and one opaque payload
per node, and fail loudly on structural misuse. It is the single graph type
used for capacity, residual and flow graphs.
"""

from __future__ import annotations

import math
from copy import deepcopy
from pickle import dumps, loads
from typing import Any, Dict, Iterator, Optional, Tuple

import networkx as nx

from ekflow.config import FLOW_CONFIG

NodeID = int
EdgeID = int
AttrDict = Dict[str, Any]
EdgeTuple = Tuple[NodeID, NodeID, EdgeID, AttrDict]


class StrictDiGraph(nx.DiGraph):
    """A directed graph with strict rules and stable integer identifiers.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raises ValueError on duplicates).
      - At most one edge per ordered node pair, and no self-loops.
      - Edge weights are finite and non-negative.
      - Lookups of unknown nodes or edge ids raise ValueError.

    Node ids are assigned by ``add_payload_node`` from a monotonically
    increasing counter; edge ids are assigned the same way by ``add_edge``.
    Neither is ever reused, and the graph offers no removal, so ids stay
    valid for the graph's lifetime.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize a StrictDiGraph.

        Args:
            *args: Positional arguments forwarded to the DiGraph constructor.
            **kwargs: Keyword arguments forwarded to the DiGraph constructor.

        Attributes:
            weight_attr: Edge attribute name holding the weight.
            payload_attr: Node attribute name holding the payload.
            _edges: Map edge id to ``(source_node, target_node, edge_id, attribute_dict)``.
            _pair_index: Map ``(source_node, target_node)`` to edge id.
        """
        self.weight_attr: str = FLOW_CONFIG.weight_attr
        self.payload_attr: str = FLOW_CONFIG.payload_attr
        self._edges: Dict[EdgeID, EdgeTuple] = {}
        self._pair_index: Dict[Tuple[NodeID, NodeID], EdgeID] = {}
        self._next_node_id: int = 0
        self._next_edge_id: int = 0
        super().__init__(*args, **kwargs)

    def copy(self, as_view: bool = False, pickle: bool = True) -> StrictDiGraph:
        """Create a copy of this graph.

        By default, use pickle-based deep copying, which also clones every
        payload. If ``pickle=False``, node and edge attribute dicts are copied
        shallowly, so payload objects are shared. Both keep node and edge ids.

        Args:
            as_view: If True, return a read-only ``networkx.DiGraph`` view
                instead of a copy; only used if ``pickle=False``. The view
                has no id bookkeeping.
            pickle: If True, perform a pickle-based deep copy.

        Returns:
            StrictDiGraph: A new graph, or a ``networkx.DiGraph`` view.
        """
        if pickle:
            return loads(dumps(self))
        if as_view:
            return nx.graphviews.generic_graph_view(self, nx.DiGraph)

        graph = self.__class__()
        graph.weight_attr = self.weight_attr
        graph.payload_attr = self.payload_attr
        graph.graph.update(self.graph)
        for n, attr in self._node.items():
            graph.add_node(n, **attr)
        for edge_id, (u, v, _, attr) in self._edges.items():
            data = dict(attr)
            weight = data.pop(self.weight_attr)
            graph.add_edge(u, v, weight, key=edge_id, **data)
        graph._next_node_id = self._next_node_id
        graph._next_edge_id = self._next_edge_id
        return graph

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Add a single node with an explicit id, disallowing duplicates.

        The automatic id counter is advanced past explicit integer ids so that
        ``add_payload_node`` never collides with them.

        Args:
            node_for_adding: The node id to add.
            **attr: Arbitrary attributes for this node.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")
        if isinstance(node_for_adding, int) and node_for_adding >= self._next_node_id:
            self._next_node_id = node_for_adding + 1
        super().add_node(node_for_adding, **attr)

    def add_nodes_from(self, nodes_for_adding, **attr: Any) -> None:
        """Add several nodes through ``add_node``.

        Each item is either a node id or a ``(node_id, attr_dict)`` tuple;
        ``attr`` applies to every node and is overridden by per-node data.

        Raises:
            ValueError: If any node already exists. Nodes added before the
                duplicate are kept.
        """
        for item in nodes_for_adding:
            if isinstance(item, tuple) and len(item) == 2:
                n, data = item
                self.add_node(n, **{**attr, **data})
            else:
                self.add_node(item, **attr)

    def add_payload_node(self, payload: Any = None) -> NodeID:
        """Add a node carrying ``payload`` and return its newly assigned id."""
        node_id = self._next_node_id
        self.add_node(node_id, **{self.payload_attr: payload})
        return node_id

    def payload(self, n: NodeID) -> Any:
        """Return the payload stored on node ``n``.

        Raises:
            ValueError: If the node does not exist.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        return self._node[n].get(self.payload_attr)

    def node_indices(self) -> Iterator[NodeID]:
        """Yield node ids in insertion order."""
        return iter(self._node)

    #
    # Edge management
    #
    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_of_edge: NodeID,
        v_of_edge: NodeID,
        weight: float,
        key: Optional[EdgeID] = None,
        **attr: Any,
    ) -> EdgeID:
        """Add a directed edge from u_of_edge to v_of_edge and return its id.

        Both nodes must already exist. Only one edge may exist per ordered
        pair; the opposite direction is a different pair and is allowed.
        When an explicit ``key`` is given, the automatic id counter is
        advanced past it to avoid collisions with later edges.

        Args:
            u_of_edge: The source node. Must exist in the graph.
            v_of_edge: The target node. Must exist in the graph.
            weight: Finite, non-negative edge weight.
            key: Optional explicit edge id. Must not already be in use.
            **attr: Additional edge attributes.

        Returns:
            EdgeID: The id assigned to the new edge.

        Raises:
            ValueError: If either node does not exist, the edge is a self-loop,
                the ordered pair already has an edge, the key is in use, or
                the weight is invalid.
        """
        if u_of_edge not in self:
            raise ValueError(f"Source node '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Target node '{v_of_edge}' does not exist.")
        if u_of_edge == v_of_edge:
            raise ValueError(f"Self-loop on node '{u_of_edge}' is not allowed.")
        if (u_of_edge, v_of_edge) in self._pair_index:
            raise ValueError(
                f"Edge from '{u_of_edge}' to '{v_of_edge}' already exists."
            )
        if key is not None and key in self._edges:
            raise ValueError(f"Edge with id '{key}' already exists.")
        _check_weight(weight)

        if key is None:
            edge_id = self._next_edge_id
            self._next_edge_id += 1
        else:
            edge_id = key
            if edge_id >= self._next_edge_id:
                self._next_edge_id = edge_id + 1

        attr[self.weight_attr] = float(weight)
        super().add_edge(u_of_edge, v_of_edge, **attr)
        self._edges[edge_id] = (
            u_of_edge,
            v_of_edge,
            edge_id,
            self._succ[u_of_edge][v_of_edge],
        )
        self._pair_index[(u_of_edge, v_of_edge)] = edge_id
        return edge_id

    def add_edges_from(self, ebunch_to_add, **attr: Any) -> None:
        """Add several edges through ``add_edge``.

        Each item is ``(u, v, weight)`` or ``(u, v, attr_dict)``; in the
        latter form the weight is read from the ``weight_attr`` key, falling
        back to ``attr``.

        Raises:
            ValueError: If an edge has no weight or ``add_edge`` rejects it.
                Edges added before the failing one are kept.
        """
        for item in ebunch_to_add:
            if len(item) != 3:
                raise ValueError(f"Edge {item!r} must be (u, v, weight) or (u, v, data).")
            u, v, data = item
            if isinstance(data, dict):
                data = {**attr, **data}
            else:
                data = {**attr, self.weight_attr: data}
            if self.weight_attr not in data:
                raise ValueError(f"Edge ({u}, {v}) has no '{self.weight_attr}' value.")
            weight = data.pop(self.weight_attr)
            self.add_edge(u, v, weight, **data)

    def add_weighted_edges_from(self, ebunch_to_add, weight: str = "weight", **attr: Any) -> None:
        """Add ``(u, v, w)`` edges through ``add_edge``.

        Raises:
            ValueError: If ``weight`` is not this graph's weight attribute.
        """
        if weight != self.weight_attr:
            raise ValueError(
                f"Weights are stored under '{self.weight_attr}', not '{weight}'."
            )
        self.add_edges_from(ebunch_to_add, **attr)

    #
    # Unsupported mutations
    #
    # Node and edge ids must stay valid for the graph's lifetime.
    def remove_node(self, n: NodeID) -> None:
        raise NotImplementedError("StrictDiGraph does not support node removal.")

    def remove_nodes_from(self, nodes) -> None:
        raise NotImplementedError("StrictDiGraph does not support node removal.")

    def remove_edge(self, u: NodeID, v: NodeID) -> None:
        raise NotImplementedError("StrictDiGraph does not support edge removal.")

    def remove_edges_from(self, ebunch) -> None:
        raise NotImplementedError("StrictDiGraph does not support edge removal.")

    def clear(self) -> None:
        raise NotImplementedError("StrictDiGraph does not support clearing.")

    def clear_edges(self) -> None:
        raise NotImplementedError("StrictDiGraph does not support edge removal.")

    def find_edge(self, u: NodeID, v: NodeID) -> Optional[EdgeID]:
        """Return the id of the edge from u to v, or None if there is none."""
        return self._pair_index.get((u, v))

    def edge_indices(self) -> Iterator[EdgeID]:
        """Yield edge ids in insertion order."""
        return iter(self._edges)

    def edge_endpoints(self, key: EdgeID) -> Tuple[NodeID, NodeID]:
        """Return ``(source, target)`` of edge ``key``.

        Raises:
            ValueError: If no edge with this id exists.
        """
        u, v, _, _ = self._lookup(key)
        return u, v

    def edge_weight(self, key: EdgeID) -> float:
        """Return the weight of edge ``key``.

        Raises:
            ValueError: If no edge with this id exists.
        """
        return self._lookup(key)[3][self.weight_attr]

    def set_edge_weight(self, key: EdgeID, weight: float) -> None:
        """Replace the weight of edge ``key``.

        Raises:
            ValueError: If no edge with this id exists or the weight is invalid.
        """
        attr = self._lookup(key)[3]
        _check_weight(weight)
        attr[self.weight_attr] = float(weight)

    def out_edges_weighted(self, n: NodeID) -> Iterator[Tuple[EdgeID, NodeID, float]]:
        """Yield ``(edge_id, target, weight)`` for each edge leaving ``n``.

        Edges are enumerated in the order they were added to the graph.

        Raises:
            ValueError: If the node does not exist.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        for v, attr in self._succ[n].items():
            yield self._pair_index[(n, v)], v, attr[self.weight_attr]

    #
    # Convenience methods
    #
    def get_nodes(self) -> Dict[NodeID, AttrDict]:
        """Retrieve all nodes and their attributes as a dictionary."""
        return dict(self.nodes(data=True))

    def get_edges(self) -> Dict[EdgeID, EdgeTuple]:
        """Retrieve a dictionary of all edges by their ids.

        Returns:
            Dict[EdgeID, EdgeTuple]: A mapping of edge id to
                ``(source_node, target_node, edge_id, edge_attributes)``.
        """
        return self._edges

    def has_edge_by_id(self, key: EdgeID) -> bool:
        """Check whether an edge with the given id exists."""
        return key in self._edges

    def clone_nodes(self) -> StrictDiGraph:
        """Return a new edgeless graph with the same node ids and cloned payloads."""
        graph = self.__class__()
        graph.weight_attr = self.weight_attr
        graph.payload_attr = self.payload_attr
        for n, attr in self._node.items():
            graph.add_node(n, **deepcopy(attr))
        return graph

    def _lookup(self, key: EdgeID) -> EdgeTuple:
        if key not in self._edges:
            raise ValueError(f"Edge with id='{key}' not found.")
        return self._edges[key]


def _check_weight(weight: float) -> None:
    if not math.isfinite(weight) or weight < 0:
        raise ValueError(f"Edge weight must be finite and non-negative, got {weight}.")
