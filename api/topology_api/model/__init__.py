"""
Core topology domain model (Address, Node, Edge, Graph).
"""

from .address import Address
from .node import Node
from .edge import Edge
from .graph import Graph

__all__ = ["Address", "Node", "Edge", "Graph"]
