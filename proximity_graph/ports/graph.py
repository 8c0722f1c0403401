"""Graph ports - Abstractions for querying the proximity graph.

These protocols define the contract between the graph engine and its
consumers (reporting, rendering). Consumers only see read operations;
mutation stays on ``ProximityGraph`` itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Location, Neighbor, ShortestPath

# Maps location id -> {neighbor id: edge weight in km}
Adjacency = Mapping[str, Mapping[str, float]]
MutableAdjacency = Dict[str, Dict[str, float]]


class GraphQueryPort(Protocol):
    """Read-only view of a proximity graph.

    Implementation: graph/proximity_graph.py (ProximityGraph)
    """

    def get_location(self, location_id: str) -> Location:
        """Return the stored location.

        Raises:
            NotFoundError: If the id is unknown.
        """
        ...

    def neighbors(self, location_id: str) -> List[Neighbor]:
        """Directly connected locations, closest first."""
        ...

    def neighbors_within_radius(
        self, location_id: str, max_distance: float
    ) -> List[Neighbor]:
        """Neighbors whose edge weight is at most ``max_distance``."""
        ...

    def shortest_path(self, from_id: str, to_id: str) -> Optional[ShortestPath]:
        """Cheapest route between two locations, or None if unreachable."""
        ...

    def location_count(self) -> int:
        ...

    def connection_count(self) -> int:
        ...

    def locations(self) -> List[Location]:
        """All locations in insertion order."""
        ...

    def has_connection(self, first_id: str, second_id: str) -> bool:
        ...
