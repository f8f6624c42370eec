# Typed view of a raw peer report, as returned by a control node's GET /peers.
#
# Field names drifted between controller versions: the node's own address was
# sent as "addr" or "config" before it became "address". All three are read
# here so nothing past this module ever sees the legacy names.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from api.topology_api.codec import address_from_dict
from api.topology_api.errors import MalformedReport
from api.topology_api.model import Address

ADDRESS_KEYS = ("address", "addr", "config")


@dataclass(frozen=True)
class NodeRecord:
    """One node's self-reported view of its peers."""

    address: Address
    peers: Tuple[Address, ...] = ()

    @classmethod
    def from_dict(cls, raw: Any, position: int) -> "NodeRecord":
        if not isinstance(raw, Mapping):
            raise MalformedReport("node entry must be an object", position=position)

        raw_address = None
        for key in ADDRESS_KEYS:
            if raw.get(key) is not None:
                raw_address = raw[key]
                break
        if raw_address is None:
            raise MalformedReport("node entry lacks 'address'", position=position)

        address = address_from_dict(raw_address, position=position)

        raw_peers = raw.get("peers")
        if raw_peers is None:
            return cls(address=address)
        if not isinstance(raw_peers, list):
            raise MalformedReport("'peers' must be a list", position=position)

        peers = tuple(
            address_from_dict(peer, position=position, peer=j)
            for j, peer in enumerate(raw_peers)
        )
        return cls(address=address, peers=peers)


@dataclass(frozen=True)
class TopologyReport:
    """A single snapshot of the network as seen by the control node."""

    nodes: Tuple[NodeRecord, ...] = ()

    @classmethod
    def from_dict(cls, raw: Any) -> "TopologyReport":
        if not isinstance(raw, Mapping):
            raise MalformedReport("report must be a JSON object")

        raw_nodes = raw.get("nodes")
        if raw_nodes is None:
            return cls()
        if not isinstance(raw_nodes, list):
            raise MalformedReport("'nodes' must be a list")

        return cls(nodes=tuple(
            NodeRecord.from_dict(entry, position=i)
            for i, entry in enumerate(raw_nodes)
        ))

    def to_dict(self) -> dict:
        return {
            "nodes": [
                {
                    "address": record.address.to_dict(),
                    "peers": [peer.to_dict() for peer in record.peers],
                }
                for record in self.nodes
            ]
        }
