"""Graph engine for the proximity graph.

This subpackage contains the in-memory graph of locations and the
shortest-path search that runs on top of its adjacency mapping.
"""

from .dijkstra import dijkstra
from .proximity_graph import ProximityGraph

__all__ = ["ProximityGraph", "dijkstra"]
