import logging
from importlib.metadata import entry_points
from api.topology_api.services import DataSourcePlugin
from api.topology_api.services import VisualizerPlugin
from typing import Dict, Type

DATASOURCE_GROUP = "topology_platform.datasource"
VISUALIZER_GROUP = "topology_platform.visualizer"

logger = logging.getLogger(__name__)


class PluginRegistry:

    _instance = None
    _datasources: Dict[str, Type[DataSourcePlugin]]
    _visualizers: Dict[str, Type[VisualizerPlugin]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._datasources = {}
            cls._instance._visualizers = {}
            cls._instance._load_plugins()
        return cls._instance

    def _load_plugins(self):
        eps = entry_points()

        for ep in eps.select(group=DATASOURCE_GROUP):
            self._datasources[ep.name] = ep.load()

        for ep in eps.select(group=VISUALIZER_GROUP):
            self._visualizers[ep.name] = ep.load()

        logger.debug(
            "Loaded datasources %s and visualizers %s",
            sorted(self._datasources), sorted(self._visualizers),
        )

    def register_datasource(self, name: str, plugin_cls: Type[DataSourcePlugin]) -> None:
        self._datasources[name] = plugin_cls

    def register_visualizer(self, name: str, plugin_cls: Type[VisualizerPlugin]) -> None:
        self._visualizers[name] = plugin_cls

    def get_datasource(self, name: str) -> Type[DataSourcePlugin] | None:
        return self._datasources.get(name)

    def get_visualizer(self, name: str) -> Type[VisualizerPlugin] | None:
        return self._visualizers.get(name)

    def list_datasources(self) -> list[str]:
        return list(self._datasources.keys())

    def list_visualizers(self) -> list[str]:
        return list(self._visualizers.keys())
