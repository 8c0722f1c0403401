"""In-memory proximity graph of locations.

The graph keeps two insertion-ordered mappings: location id -> Location
and location id -> {neighbor id: weight}. Every location has an
adjacency entry, edges are written in both directions with the same
strictly positive weight, and self-loops are rejected.

Mutators validate all of their input before writing, so a failed call
leaves the graph exactly as it was.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from ..domain.errors import (
    DuplicateError,
    NoConnectionError,
    NotFoundError,
    SelfLoopError,
    ValidationError,
)
from ..domain.models import Location, Neighbor, ShortestPath, round_half_up
from ..ports.graph import MutableAdjacency
from .dijkstra import dijkstra

_CONNECTION_FIELDS = ("from", "to", "distance")


def _is_positive_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value)) and value > 0
    except OverflowError:
        return False


@dataclass
class ProximityGraph:
    """Undirected weighted graph keyed by location id.

    Implements GraphQueryPort. The graph owns the Location instances it
    is given; lookups return the stored instance, not a copy.

    Example:
        graph = ProximityGraph()
        graph.insert_location(Location("cdmx", "Mexico City", 19.4326, -99.1332))
        graph.insert_location(Location("pue", "Puebla", 19.0414, -98.2063))
        graph.connect("cdmx", "pue", 130)
        graph.shortest_path("cdmx", "pue").distance  # 130.0
    """

    _locations: Dict[str, Location] = field(
        default_factory=dict, init=False, repr=False
    )
    _adjacency: MutableAdjacency = field(default_factory=dict, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert_location(self, location: Location) -> None:
        """Add a location with an empty adjacency entry.

        Raises:
            TypeError: If ``location`` is not a Location.
            DuplicateError: If a location with the same id already exists.
        """
        if not isinstance(location, Location):
            raise TypeError("The parameter must be an instance of Location")
        if location.id in self._locations:
            raise DuplicateError(
                f"Location with id {location.id} already exists in the graph",
                location_id=location.id,
            )

        self._locations[location.id] = location
        self._adjacency[location.id] = {}
        self._logger.debug("Location inserted", extra={"location_id": location.id})

    def connect(
        self, first_id: str, second_id: str, weight: Optional[float] = None
    ) -> None:
        """Add or overwrite the undirected edge between two locations.

        Args:
            first_id: One endpoint.
            second_id: The other endpoint.
            weight: Edge weight in km. Computed with the great-circle
                distance between the two locations when omitted.

        Raises:
            NotFoundError: If either id is not in the graph.
            SelfLoopError: If both ids are the same.
            ValidationError: If the resulting weight is not a positive
                finite number.
        """
        first = self._require(first_id)
        second = self._require(second_id)
        if first_id == second_id:
            raise SelfLoopError(
                "A location cannot be connected to itself",
                location_id=first_id,
            )

        final_weight = first.distance_to(second) if weight is None else weight
        if not _is_positive_number(final_weight):
            raise ValidationError(
                f"Distance must be greater than 0, got {final_weight!r}",
                field_name="distance",
            )

        final_weight = float(final_weight)
        self._adjacency[first_id][second_id] = final_weight
        self._adjacency[second_id][first_id] = final_weight
        self._logger.debug(
            "Locations connected",
            extra={"from": first_id, "to": second_id, "distance_km": final_weight},
        )

    def clear(self) -> None:
        """Remove every location and edge."""
        count = len(self._locations)
        self._locations.clear()
        self._adjacency.clear()
        self._logger.info("Graph cleared", extra={"locations_cleared": count})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_location(self, location_id: str) -> Location:
        """Return the stored location.

        Raises:
            NotFoundError: If the id is unknown.
        """
        return self._require(location_id)

    def locations(self) -> List[Location]:
        """All locations in insertion order."""
        return list(self._locations.values())

    def neighbors(self, location_id: str) -> List[Neighbor]:
        """Directly connected locations, sorted by ascending weight.

        Ties keep the order in which the edges were first added.

        Raises:
            NotFoundError: If the id is empty, not a string, or unknown.
        """
        if not isinstance(location_id, str) or not location_id:
            raise NotFoundError(
                "Location id must be a non-empty string",
                location_id=str(location_id),
            )
        self._require(location_id)

        found = [
            Neighbor(location=self._locations[neighbor_id], distance=weight)
            for neighbor_id, weight in self._adjacency[location_id].items()
        ]
        found.sort(key=lambda neighbor: neighbor.distance)
        return found

    def neighbors_within_radius(
        self, location_id: str, max_distance: float
    ) -> List[Neighbor]:
        """Neighbors whose edge weight is at most ``max_distance`` km.

        Raises:
            ValidationError: If ``max_distance`` is not a positive number.
            NotFoundError: Under the same conditions as ``neighbors``.
        """
        if not _is_positive_number(max_distance):
            raise ValidationError(
                "Maximum distance must be a positive number",
                field_name="max_distance",
            )
        return [
            neighbor
            for neighbor in self.neighbors(location_id)
            if neighbor.distance <= max_distance
        ]

    def shortest_path(self, from_id: str, to_id: str) -> Optional[ShortestPath]:
        """Find the cheapest route between two locations.

        A query from a location to itself returns a single-location path
        of distance 0 without searching.

        Returns:
            ShortestPath, or None when the destination is unreachable.

        Raises:
            NotFoundError: If either id is not in the graph.
        """
        self._require(from_id)
        self._require(to_id)

        if from_id == to_id:
            return ShortestPath(path=(self._locations[from_id],), distance=0.0)

        path, distance = dijkstra(self._adjacency, from_id, to_id)
        if not path:
            self._logger.debug(
                "No route found", extra={"from": from_id, "to": to_id}
            )
            return None

        return ShortestPath(
            path=tuple(self._locations[location_id] for location_id in path),
            distance=round_half_up(distance),
        )

    def has_connection(self, first_id: str, second_id: str) -> bool:
        """Whether an edge joins the two locations. Never raises."""
        if first_id not in self or second_id not in self:
            return False
        return second_id in self._adjacency[first_id]

    def distance_between(self, first_id: str, second_id: str) -> float:
        """Weight of the edge between two locations.

        Raises:
            NoConnectionError: If no edge joins them.
        """
        if not self.has_connection(first_id, second_id):
            raise NoConnectionError(
                f"No connection exists between {first_id} and {second_id}",
                location_id=first_id,
                from_id=first_id,
                to_id=second_id,
            )
        return self._adjacency[first_id][second_id]

    def location_count(self) -> int:
        return len(self._locations)

    def connection_count(self) -> int:
        """Number of undirected edges."""
        return sum(len(edges) for edges in self._adjacency.values()) // 2

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, location_id: object) -> bool:
        return isinstance(location_id, str) and location_id in self._locations

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def to_record(self) -> Dict[str, List[Dict[str, Any]]]:
        """Export the graph as ``{"locations": [...], "connections": [...]}``.

        Each undirected edge is listed once.
        """
        connections: List[Dict[str, Any]] = []
        seen: Set[Tuple[str, str]] = set()

        for first_id, edges in self._adjacency.items():
            for second_id, weight in edges.items():
                key = (min(first_id, second_id), max(first_id, second_id))
                if key in seen:
                    continue
                seen.add(key)
                connections.append(
                    {"from": first_id, "to": second_id, "distance": weight}
                )

        return {
            "locations": [
                location.to_record() for location in self._locations.values()
            ],
            "connections": connections,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> ProximityGraph:
        """Build a new graph from a record produced by ``to_record``.

        Locations are inserted first, then every connection is added with
        its recorded distance.

        Raises:
            ValidationError: If the record is malformed.
            DuplicateError, NotFoundError, SelfLoopError: If the data is
                inconsistent.
        """
        if not isinstance(record, Mapping):
            raise ValidationError("Graph record must be a mapping")
        locations = record.get("locations")
        connections = record.get("connections")
        if not isinstance(locations, (list, tuple)):
            raise ValidationError(
                'Graph record must contain a "locations" list',
                field_name="locations",
            )
        if not isinstance(connections, (list, tuple)):
            raise ValidationError(
                'Graph record must contain a "connections" list',
                field_name="connections",
            )

        graph = cls()
        for location_record in locations:
            graph.insert_location(Location.from_record(location_record))

        for connection in connections:
            if not isinstance(connection, Mapping):
                raise ValidationError("Connection record must be a mapping")
            missing = [name for name in _CONNECTION_FIELDS if name not in connection]
            if missing:
                raise ValidationError(
                    f"Connection record is missing fields: {', '.join(missing)}",
                    field_name=missing[0],
                )
            if connection["distance"] is None:
                raise ValidationError(
                    "Connection distance is required",
                    field_name="distance",
                )
            graph.connect(connection["from"], connection["to"], connection["distance"])

        graph._logger.info(
            "Graph imported",
            extra={
                "locations": graph.location_count(),
                "connections": graph.connection_count(),
            },
        )
        return graph

    def load_record(self, record: Mapping[str, Any]) -> None:
        """Replace this graph's content with ``record``.

        The record is fully validated into a fresh graph first; on any
        error this graph is left untouched.
        """
        imported = self.from_record(record)
        self._locations = imported._locations
        self._adjacency = imported._adjacency

    # ------------------------------------------------------------------

    def _require(self, location_id: str) -> Location:
        location = None
        if isinstance(location_id, str):
            location = self._locations.get(location_id)
        if location is None:
            raise NotFoundError(
                f"Location with id {location_id} does not exist in the graph",
                location_id=str(location_id),
            )
        return location
