from .report import NodeRecord, TopologyReport
from .builder import TopologyBuilder, DEDUP_ANALYZED, DEDUP_UNDIRECTED
from .base import BaseDatasourcePlugin

__all__ = [
    "NodeRecord",
    "TopologyReport",
    "TopologyBuilder",
    "DEDUP_ANALYZED",
    "DEDUP_UNDIRECTED",
    "BaseDatasourcePlugin",
]
