"""Service-level plugin contracts for topology_api."""

from .datasource_plugin import DataSourcePlugin
from .visualizer_plugin import VisualizerPlugin

__all__ = ["DataSourcePlugin", "VisualizerPlugin"]
