import itertools
import logging
import threading
from dataclasses import dataclass

from .config import PlatformConfig
from .registry import PluginRegistry
from .workspace import Workspace
from api.topology_api.datasource_common.builder import TopologyBuilder, DEDUP_ANALYZED
from api.topology_api.errors import TopologyError
from api.topology_api.model import Graph
from api.topology_api.services import DataSourcePlugin, VisualizerPlugin

logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    sequence: int
    graph: Graph
    committed: bool


class TopologyEngine:
    """
    High-level orchestration layer.

    Responsibilities:
    - Plugin execution
    - Numbering refreshes so late results can be recognised
    - Delegation to Workspace
    """

    def __init__(self, config: PlatformConfig = None, workspace: Workspace = None):
        self.config = config or PlatformConfig.from_env()
        self.registry = PluginRegistry()
        self.workspace = workspace or Workspace(history_size=self.config.history_size)
        self._sequence = itertools.count(1)
        self._sequence_lock = threading.Lock()

    # ==========================================================
    # MAIN ORCHESTRATION
    # ==========================================================

    def next_sequence(self) -> int:
        with self._sequence_lock:
            return next(self._sequence)

    def refresh(self, datasource_name: str, source=None, **options) -> RefreshResult:
        datasource_cls = self.registry.get_datasource(datasource_name)
        if not datasource_cls:
            raise ValueError(f"Datasource '{datasource_name}' not found.")

        datasource: DataSourcePlugin = datasource_cls()
        options.setdefault("timeout", self.config.request_timeout)
        options.setdefault("base_url", self.config.control_url)

        sequence = self.next_sequence()
        try:
            graph = datasource.load_graph(source, **options)
        except TopologyError as exc:
            logger.warning("Refresh #%d from '%s' failed: %s", sequence, datasource_name, exc)
            self.workspace.record_error(exc, sequence)
            raise

        committed = self.workspace.commit(graph, sequence)
        if committed:
            logger.info(
                "Refresh #%d from '%s': %d nodes, %d edges",
                sequence, datasource_name, len(graph.nodes), len(graph.edges),
            )
        return RefreshResult(sequence=sequence, graph=graph, committed=committed)

    def ingest(self, report, dedup: str = DEDUP_ANALYZED) -> RefreshResult:
        """Build and commit a report that was pushed to us rather than fetched."""
        sequence = self.next_sequence()
        try:
            graph = TopologyBuilder(dedup=dedup).parse(report)
        except TopologyError as exc:
            self.workspace.record_error(exc, sequence)
            raise

        committed = self.workspace.commit(graph, sequence)
        return RefreshResult(sequence=sequence, graph=graph, committed=committed)

    def render(self, visualizer_name: str, **options) -> str:
        visualizer_cls = self.registry.get_visualizer(visualizer_name)
        if not visualizer_cls:
            raise ValueError(f"Visualizer '{visualizer_name}' not found.")

        visualizer: VisualizerPlugin = visualizer_cls()
        options.setdefault("control_url", self.config.control_url)
        options.setdefault("sequence", self.workspace.committed_sequence)
        return visualizer.render(self.workspace.get_graph() or Graph(), **options)

    def process(
        self,
        datasource_name: str,
        visualizer_name: str,
        source=None,
        **options,
    ) -> str:
        self.refresh(datasource_name, source, **options)
        return self.render(visualizer_name, **options)

    # ==========================================================
    # WORKSPACE DELEGATION API
    # ==========================================================

    def get_current_graph(self):
        return self.workspace.get_graph()

    def clear_workspace(self):
        self.workspace.clear()

    def undo(self):
        return self.workspace.undo()

    def list_nodes(self):
        return self.workspace.list_nodes()

    def find_node(self, node_id: str):
        return self.workspace.find_node_by_id(node_id)

    def list_edges(self):
        return self.workspace.list_edges()

    def search_nodes_by_host(self, host_substr: str):
        return self.workspace.find_nodes_by_host(host_substr)

    def search_edges_by_endpoint(self, node_id: str):
        return self.workspace.find_edges_by_endpoint(node_id)
