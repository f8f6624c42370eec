import os
from jinja2 import Environment, FileSystemLoader
from api.topology_api.services.visualizer_plugin import VisualizerPlugin
from api.topology_api.model.graph import Graph

# Palette of the original gossip dashboard
COLORS = {
    "main": "#5F84F4",
    "accent": "#314275",
    "text": "#FFFFFF",
    "unreported": "#A0A0A0",
}

CYTOSCAPE_URL = "https://unpkg.com/cytoscape@3/dist/cytoscape.min.js"


def build_elements(graph: Graph) -> list:
    """
    Cytoscape elements for the graph.

    Cytoscape refuses edges whose endpoints are missing, so peers that never
    reported themselves get a placeholder node. The placeholder exists only
    here; the graph is not modified.
    """
    elements = graph.to_elements()
    placeholders = [
        {"data": {"id": node_id, "label": node_id}, "classes": "unreported"}
        for node_id in graph.dangling_endpoints()
    ]
    split = len(graph.nodes)
    return elements[:split] + placeholders + elements[split:]


class CytoscapeVisualizer(VisualizerPlugin):
    @property
    def plugin_id(self) -> str:
        return "cytoscape"

    @property
    def display_name(self) -> str:
        return "Peer Topology (Cytoscape)"

    def render_options_schema(self) -> dict:
        return {
            "control_url": {
                "type": "str",
                "label": "Control node URL",
                "required": False,
            },
            "refresh_url": {
                "type": "str",
                "label": "JSON endpoint the page refreshes from",
                "required": False,
            },
        }

    def render(self, graph: Graph, **options) -> str:
        refresh_url = options.get("refresh_url") or ""

        # A page that can refresh itself is still useful while empty
        if graph.is_empty() and not refresh_url:
            return "<html><body>Empty Graph</body></html>"

        template_path = os.path.join(os.path.dirname(__file__), 'templates')
        env = Environment(loader=FileSystemLoader(template_path), autoescape=True)
        template = env.get_template('cytoscape.html')

        return template.render(
            elements=build_elements(graph),
            colors=COLORS,
            cytoscape_url=CYTOSCAPE_URL,
            control_url=options.get("control_url") or "",
            refresh_url=refresh_url,
            sequence=int(options.get("sequence") or 0),
            node_count=len(graph.nodes),
            edge_count=len(graph.edges),
        )
