import pytest

from api.topology_api.datasource_common.base import BaseDatasourcePlugin
from api.topology_api.errors import MalformedReport, ReportFetchError
from core.topology_platform.config import PlatformConfig
from core.topology_platform.engine import TopologyEngine
from visualizer_cytoscape.visualizer_cytoscape_plugin.plugin import CytoscapeVisualizer


class ScriptedDatasource(BaseDatasourcePlugin):
    """Hands out the queued reports one by one; exceptions are raised."""

    queue = []

    @property
    def plugin_id(self) -> str:
        return "scripted"

    @property
    def display_name(self) -> str:
        return "Scripted reports"

    def _parse_source(self, source, **options):
        item = ScriptedDatasource.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def report(*hosts):
    return {"nodes": [{"address": {"host": h, "port": 1}, "peers": []} for h in hosts]}


@pytest.fixture
def engine():
    engine = TopologyEngine(config=PlatformConfig())
    engine.registry.register_datasource("scripted", ScriptedDatasource)
    engine.registry.register_visualizer("cytoscape", CytoscapeVisualizer)
    ScriptedDatasource.queue = []
    return engine


def test_sequences_increase(engine):
    assert [engine.next_sequence() for _ in range(3)] == [1, 2, 3]


def test_refresh_commits_graph(engine):
    ScriptedDatasource.queue = [report("a")]

    result = engine.refresh("scripted")

    assert result.committed
    assert engine.get_current_graph() is result.graph
    assert [n.node_id for n in engine.list_nodes()] == ["a:1"]


def test_failed_refresh_keeps_last_good_graph(engine):
    ScriptedDatasource.queue = [report("a"), ReportFetchError("control node down")]
    good = engine.refresh("scripted").graph

    with pytest.raises(ReportFetchError):
        engine.refresh("scripted")

    assert engine.get_current_graph() is good
    assert isinstance(engine.workspace.last_error, ReportFetchError)


def test_malformed_report_keeps_last_good_graph(engine):
    ScriptedDatasource.queue = [report("a"), {"nodes": [{"peers": []}]}]
    good = engine.refresh("scripted").graph

    with pytest.raises(MalformedReport):
        engine.refresh("scripted")

    assert engine.get_current_graph() is good


def test_unknown_plugins_are_reported(engine):
    with pytest.raises(ValueError):
        engine.refresh("missing")
    with pytest.raises(ValueError):
        engine.render("missing")


def test_ingest_uses_builder_and_commits(engine):
    result = engine.ingest(report("a", "b"))

    assert result.committed
    assert engine.get_current_graph().node_ids() == {"a:1", "b:1"}


def test_ingest_rejects_malformed_report(engine):
    with pytest.raises(MalformedReport):
        engine.ingest({"nodes": "nope"})
    assert engine.get_current_graph() is None


def test_process_renders_current_graph(engine):
    ScriptedDatasource.queue = [report("a")]

    html = engine.process("scripted", "cytoscape")

    assert "a:1" in html


def test_render_without_graph_gives_empty_page(engine):
    assert "Empty Graph" in engine.render("cytoscape")


def test_undo_goes_back_one_refresh(engine):
    ScriptedDatasource.queue = [report("a"), report("b")]
    first = engine.refresh("scripted").graph
    engine.refresh("scripted")

    assert engine.undo() is first
