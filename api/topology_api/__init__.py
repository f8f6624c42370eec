"""Public API exports for topology_api plugin contracts."""

from .errors import TopologyError, MalformedReport, InvalidAddress, ReportFetchError
from .model import Address, Node, Edge, Graph
from .services import DataSourcePlugin, VisualizerPlugin

__all__ = [
    "TopologyError",
    "MalformedReport",
    "InvalidAddress",
    "ReportFetchError",
    "Address",
    "Node",
    "Edge",
    "Graph",
    "DataSourcePlugin",
    "VisualizerPlugin",
]
