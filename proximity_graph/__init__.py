"""Top-level package for the proximity graph project.

An in-memory, undirected, weighted graph of geographic locations with
great-circle distances, neighbor and radius queries, Dijkstra shortest
paths and a record format that round-trips the whole graph.

    from proximity_graph import Location, ProximityGraph

    graph = ProximityGraph()
    graph.insert_location(Location("cdmx", "Mexico City", 19.4326, -99.1332))
"""

from .domain import (
    DuplicateError,
    Location,
    Neighbor,
    NoConnectionError,
    NotFoundError,
    ProximityGraphError,
    RenderingError,
    SelfLoopError,
    ShortestPath,
    ValidationError,
)
from .graph import ProximityGraph

__all__ = [
    "Location",
    "Neighbor",
    "ShortestPath",
    "ProximityGraph",
    "ProximityGraphError",
    "ValidationError",
    "NotFoundError",
    "NoConnectionError",
    "DuplicateError",
    "SelfLoopError",
    "RenderingError",
]
