# base.py
from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any

from api.topology_api.model import Graph
from api.topology_api.services.datasource_plugin import DataSourcePlugin
from .builder import TopologyBuilder, DEDUP_ANALYZED

logger = logging.getLogger(__name__)


class BaseDatasourcePlugin(DataSourcePlugin):
    # Base class for defining the flow of creating a Graph object
    # The flow is always to first get the raw report (this is different based on plugin)
    # Secondly, the builder turns it into nodes and edges (which is the same for all)

    def load_graph(self, source: Any, **options: Any) -> Graph:
        raw_report = self._parse_source(source, **options)

        builder = TopologyBuilder(dedup=options.get("dedup") or DEDUP_ANALYZED)
        graph = builder.parse(raw_report)

        logger.debug(
            "%s built %d nodes and %d edges", self.plugin_id, len(graph.nodes), len(graph.edges)
        )
        return graph

    @staticmethod
    def _resolve_path(source: Any, options: dict[str, Any]) -> str:
        if isinstance(source, str) and source.strip():
            return source
        fp = options.get("file_path")
        if isinstance(fp, str) and fp.strip():
            return fp
        raise ValueError("Missing file path. Provide it as 'source' or as option 'file_path'.")

    @abstractmethod
    def _parse_source(self, source: Any, **options: Any) -> Any:
        # Return the raw report mapping; every subclass must implement this
        pass
