from __future__ import annotations

from typing import Any, Mapping, Union

from api.topology_api.codec import encode
from api.topology_api.errors import InvalidAddress
from api.topology_api.model import Graph, Node, Edge
from .report import TopologyReport

DEDUP_ANALYZED = "analyzed"
DEDUP_UNDIRECTED = "undirected"
DEDUP_POLICIES = (DEDUP_ANALYZED, DEDUP_UNDIRECTED)


class TopologyBuilder:
    """
    Turns a peer report into a deduplicated Graph.

    Every record's own address becomes a node. Every peer it lists becomes an
    edge ``self-peer``, unless the peer's own record was already processed
    earlier in the report ("analyzed"). That gate keeps mutually reported
    links from being drawn twice, but it depends on record order: with
    A then B listing each other, only ``A-B`` survives.

    With ``dedup="undirected"`` the gate is replaced by a check on the
    unordered endpoint pair, which gives one edge per link regardless of the
    order records arrive in.
    """

    def __init__(self, dedup: str = DEDUP_ANALYZED):
        if dedup not in DEDUP_POLICIES:
            raise ValueError(f"Unknown dedup policy '{dedup}'. Use one of: {', '.join(DEDUP_POLICIES)}.")
        self.dedup = dedup

    def parse(self, report: Union[TopologyReport, Mapping[str, Any]]) -> Graph:
        if not isinstance(report, TopologyReport):
            report = TopologyReport.from_dict(report)

        # Fresh per call: nothing survives between reports
        graph = Graph()
        analyzed = set()
        linked = set()

        for position, record in enumerate(report.nodes):
            self_key = self._encode(record.address, position)
            graph.add_node(Node(self_key))

            for j, peer in enumerate(record.peers):
                peer_key = self._encode(peer, position, j)

                if self.dedup == DEDUP_UNDIRECTED:
                    pair = frozenset((self_key, peer_key))
                    if pair in linked:
                        continue
                    linked.add(pair)
                elif peer_key in analyzed:
                    continue

                graph.add_edge(Edge(self_key, peer_key))

            analyzed.add(self_key)

        return graph

    @staticmethod
    def _encode(address, position: int, peer: int = None) -> str:
        try:
            return encode(address)
        except InvalidAddress as exc:
            raise exc.at(position, peer) from None
