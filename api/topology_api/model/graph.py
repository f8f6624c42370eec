from typing import Dict, List, Optional
from .node import Node
from .edge import Edge


class Graph:
    """
    Renderable peer topology.

    Nodes and edges keep their insertion order for a stable layout, while
    membership is keyed by id: re-adding an existing id is a no-op.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self._node_index: Dict[str, Node] = {}
        self._edge_index: Dict[str, Edge] = {}

    # -----------------
    # NODE OPERATIONS
    # -----------------

    def add_node(self, node: Node) -> bool:
        if not node.node_id:
            raise ValueError("Node id must not be empty.")

        if node.node_id in self._node_index:
            return False

        self._node_index[node.node_id] = node
        self.nodes.append(node)
        return True

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._node_index.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._node_index

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, edge: Edge) -> bool:
        # Only the source has to be known: peers are not guaranteed to report themselves
        if edge.source not in self._node_index:
            raise ValueError(f"Source node '{edge.source}' does not exist.")

        if edge.edge_id in self._edge_index:
            return False

        self._edge_index[edge.edge_id] = edge
        self.edges.append(edge)
        return True

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edge_index.get(edge_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edge_index

    def get_edges(self) -> List[Edge]:
        return self.edges

    def dangling_endpoints(self) -> List[str]:
        """Edge targets that never reported themselves as a node, in first-seen order."""
        seen = []
        for edge in self.edges:
            if edge.target not in self._node_index and edge.target not in seen:
                seen.append(edge.target)
        return seen

    def is_empty(self) -> bool:
        return not self.nodes

    def node_ids(self) -> set:
        return set(self._node_index)

    def edge_ids(self) -> set:
        return set(self._edge_index)

    def to_dict(self) -> dict:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    def to_elements(self) -> list:
        return [node.to_element() for node in self.nodes] + [edge.to_element() for edge in self.edges]
