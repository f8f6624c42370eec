"""Topology platform: plugin wiring, workspace state and polling."""

from .config import PlatformConfig, configure_logging
from .engine import TopologyEngine, RefreshResult
from .registry import PluginRegistry
from .workspace import Workspace
from .poller import TopologyPoller

__all__ = [
    "PlatformConfig",
    "configure_logging",
    "TopologyEngine",
    "RefreshResult",
    "PluginRegistry",
    "Workspace",
    "TopologyPoller",
]
