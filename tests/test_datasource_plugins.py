import json

import pytest
import requests

from api.topology_api.errors import MalformedReport, ReportFetchError
from datasource_peers.datasource_peers_plugin.plugin import (
    ControlNodeDatasourcePlugin,
    ReportFileDatasourcePlugin,
)
from tests.conftest import FakeResponse


def test_fetches_peers_endpoint(fake_control_node):
    graph = ControlNodeDatasourcePlugin().load_graph("http://ctrl:7080/")

    assert fake_control_node.calls == ["http://ctrl:7080/peers"]
    assert graph.edge_ids() == {"10.0.0.1:9000-10.0.0.2:9000"}


def test_falls_back_to_base_url_option(fake_control_node):
    ControlNodeDatasourcePlugin().load_graph(None, base_url="http://other:1")

    assert fake_control_node.calls == ["http://other:1/peers"]


def test_dedup_option_is_passed_to_builder(fake_control_node):
    fake_control_node.answer(FakeResponse(payload={"nodes": [
        {"address": {"host": "a", "port": 1}},
        {"address": {"host": "b", "port": 1}, "peers": [{"host": "a", "port": 1}]},
    ]}))
    plugin = ControlNodeDatasourcePlugin()

    assert plugin.load_graph("http://ctrl").edges == []
    assert len(plugin.load_graph("http://ctrl", dedup="undirected").edges) == 1


def test_http_error_status_raises_fetch_error(fake_control_node):
    fake_control_node.answer(FakeResponse(status_code=503))

    with pytest.raises(ReportFetchError) as excinfo:
        ControlNodeDatasourcePlugin().load_graph("http://ctrl")
    assert excinfo.value.status_code == 503
    assert excinfo.value.url == "http://ctrl/peers"


def test_connection_error_raises_fetch_error(fake_control_node):
    fake_control_node.answer(requests.ConnectionError("refused"))

    with pytest.raises(ReportFetchError):
        ControlNodeDatasourcePlugin().load_graph("http://ctrl")


def test_non_json_body_raises_fetch_error(fake_control_node):
    fake_control_node.answer(FakeResponse(text="<html>oops</html>"))

    with pytest.raises(ReportFetchError):
        ControlNodeDatasourcePlugin().load_graph("http://ctrl")


def test_malformed_payload_propagates(fake_control_node):
    fake_control_node.answer(FakeResponse(payload={"nodes": [{"peers": []}]}))

    with pytest.raises(MalformedReport):
        ControlNodeDatasourcePlugin().load_graph("http://ctrl")


def test_report_file_plugin_reads_saved_report(tmp_path, scenario_report):
    path = tmp_path / "peers.json"
    path.write_text(json.dumps(scenario_report), encoding="utf-8")

    graph = ReportFileDatasourcePlugin().load_graph(str(path))

    assert graph.node_ids() == {"10.0.0.1:9000", "10.0.0.2:9000"}


def test_report_file_plugin_accepts_file_path_option(tmp_path):
    path = tmp_path / "peers.json"
    path.write_text(json.dumps({"nodes": None}), encoding="utf-8")

    graph = ReportFileDatasourcePlugin().load_graph(None, file_path=str(path))

    assert graph.is_empty()


def test_report_file_plugin_rejects_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{nodes:", encoding="utf-8")

    with pytest.raises(MalformedReport):
        ReportFileDatasourcePlugin().load_graph(str(path))


def test_report_file_plugin_needs_a_path():
    with pytest.raises(ValueError):
        ReportFileDatasourcePlugin().load_graph(None)


def test_parameter_schemas_describe_options():
    assert "base_url" in ControlNodeDatasourcePlugin().parameters_schema()
    assert "file_path" in ReportFileDatasourcePlugin().parameters_schema()
