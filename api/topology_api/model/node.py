class Node:
    def __init__(self, node_id: str, label: str = "", attributes: dict = None):
        self.node_id = node_id
        self.label = label or node_id
        self.attributes = attributes or {}

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other.node_id == self.node_id

    def __hash__(self) -> int:
        return hash(self.node_id)

    def __repr__(self) -> str:
        return f"Node({self.node_id!r})"

    def to_dict(self) -> dict:
        return {"id": self.node_id}

    def to_element(self) -> dict:
        # Cytoscape element format
        return {"data": {"id": self.node_id, "label": self.label}}
