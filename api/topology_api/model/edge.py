class Edge:
    def __init__(self, source: str, target: str, attributes: dict = None):
        self.source = source
        self.target = target
        self.attributes = attributes or {}

    @property
    def edge_id(self) -> str:
        return Edge.make_id(self.source, self.target)

    @staticmethod
    def make_id(source: str, target: str) -> str:
        return f"{source}-{target}"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and other.edge_id == self.edge_id

    def __hash__(self) -> int:
        return hash(self.edge_id)

    def __repr__(self) -> str:
        return f"Edge({self.source!r} -> {self.target!r})"

    def to_dict(self) -> dict:
        return {
            "id": self.edge_id,
            "from": self.source,
            "to": self.target,
        }

    def to_element(self) -> dict:
        return {"data": {"id": self.edge_id, "source": self.source, "target": self.target}}
