from api.topology_api.datasource_common import TopologyBuilder
from visualizer_cytoscape.visualizer_cytoscape_plugin.plugin import CytoscapeVisualizer, build_elements
from api.topology_api.model import Graph


def test_empty_graph_renders_placeholder_page():
    assert CytoscapeVisualizer().render(Graph()) == "<html><body>Empty Graph</body></html>"


def test_page_contains_elements_and_controls(scenario_report):
    graph = TopologyBuilder().parse(scenario_report)

    html = CytoscapeVisualizer().render(graph, control_url="http://ctrl:7080", refresh_url="/api/peers/")

    assert "10.0.0.1:9000-10.0.0.2:9000" in html
    assert 'id="ctrlAddr"' in html
    assert "http://ctrl:7080" in html
    assert '"/api/peers/"' in html
    assert "2 nodes, 1 edges" in html


def test_empty_graph_with_refresh_url_still_renders_page():
    html = CytoscapeVisualizer().render(Graph(), refresh_url="/api/peers/")

    assert "cytoscape(" in html


def test_unreported_peers_get_placeholder_elements():
    graph = TopologyBuilder().parse({"nodes": [
        {"address": {"host": "a", "port": 1}, "peers": [{"host": "z", "port": 1}]},
    ]})

    elements = build_elements(graph)

    assert {"data": {"id": "z:1", "label": "z:1"}, "classes": "unreported"} in elements
    # Nodes come before the edges that reference them
    ids = [e["data"]["id"] for e in elements]
    assert ids.index("z:1") < ids.index("a:1-z:1")
    # The graph itself is untouched
    assert not graph.has_node("z:1")


def test_elements_without_unreported_peers_match_graph_elements(scenario_report):
    graph = TopologyBuilder().parse(scenario_report)

    assert build_elements(graph) == graph.to_elements()


def test_page_ignores_refreshes_older_than_what_it_shows(scenario_report):
    graph = TopologyBuilder().parse(scenario_report)

    html = CytoscapeVisualizer().render(graph, refresh_url="/api/peers/", sequence=7)

    assert "var lastSequence = 7;" in html
    assert "!payload.committed || payload.sequence <= lastSequence" in html
