from .plugin import CytoscapeVisualizer, build_elements

__all__ = ["CytoscapeVisualizer", "build_elements"]
