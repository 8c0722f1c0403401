"""Services layer - Consumers of the graph engine.

Available services:
- GraphVisualizer: Display-ready listings, route summaries, statistics,
  validation and map rendering
"""

from .graph_visualizer import GraphVisualizer, ValidationReport

__all__ = ["GraphVisualizer", "ValidationReport"]
