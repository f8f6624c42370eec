from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """Address of a gossip node, which is also its unique identity."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    def to_dict(self) -> dict:
        return {"host": self.host, "port": self.port}
