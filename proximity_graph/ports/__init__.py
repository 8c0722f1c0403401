"""Ports layer - Abstract interfaces (Protocols) for the package.

Ports define the contracts between the graph engine and the code that
consumes it. They enable dependency injection and make the reporting
layer testable against any graph implementation.
"""

from .graph import Adjacency, GraphQueryPort, MutableAdjacency
from .rendering import MapRendererPort

__all__ = [
    # Graph
    "Adjacency",
    "MutableAdjacency",
    "GraphQueryPort",
    # Rendering
    "MapRendererPort",
]
