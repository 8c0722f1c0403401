"""Immutable domain models for the proximity graph.

All models are frozen dataclasses with slots. A ``Location`` is the node
type of the graph; ``Neighbor`` and ``ShortestPath`` are the results of
graph queries. These models have no external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple

from .errors import ValidationError

EARTH_RADIUS_KM = 6371.0

_RECORD_FIELDS = ("id", "name", "latitude", "longitude")


def round_half_up(value: float) -> float:
    """Round half-up to two decimals (12.375 -> 12.38)."""
    return math.floor(value * 100 + 0.5) / 100


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Unrounded great-circle distance in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # Float error can push antipodal points slightly above 1.
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return not math.isnan(float(value))
    except OverflowError:
        # int too large for a float
        return False


@dataclass(frozen=True, slots=True)
class Location:
    """A named point on Earth's surface, the node type of the graph.

    Two locations are equal when their identifiers are equal; name,
    coordinates and region do not take part in comparison or hashing.

    Attributes:
        id: Unique identifier within a graph (e.g., 'cdmx')
        name: Display name, trimmed
        latitude: Degrees in [-90, 90]
        longitude: Degrees in [-180, 180]
        region: Optional region label, trimmed, empty when absent
    """

    id: str
    name: str = field(compare=False)
    latitude: float = field(compare=False)
    longitude: float = field(compare=False)
    region: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        """Validate identity and coordinates, normalize text fields."""
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError(
                "Location id is required and must be a string",
                field_name="id",
            )
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(
                "Location name is required and must be a string",
                field_name="name",
            )
        if not _is_number(self.latitude) or not -90 <= self.latitude <= 90:
            raise ValidationError(
                f"Latitude must be a number between -90 and 90, got {self.latitude!r}",
                field_name="latitude",
            )
        if not _is_number(self.longitude) or not -180 <= self.longitude <= 180:
            raise ValidationError(
                "Longitude must be a number between -180 and 180, "
                f"got {self.longitude!r}",
                field_name="longitude",
            )
        if self.region is not None and not isinstance(self.region, str):
            raise ValidationError(
                "Location region must be a string",
                field_name="region",
            )

        object.__setattr__(self, "name", self.name.strip())
        object.__setattr__(self, "latitude", float(self.latitude))
        object.__setattr__(self, "longitude", float(self.longitude))
        object.__setattr__(self, "region", (self.region or "").strip())

    def distance_to(self, other: Location) -> float:
        """Great-circle distance to another location.

        Uses the Haversine formula with an Earth radius of 6371 km and
        rounds half-up to two decimals. The points are evaluated in a
        canonical order so that ``a.distance_to(b) == b.distance_to(a)``
        holds exactly.

        Args:
            other: The location to measure to.

        Returns:
            Distance in kilometers.

        Raises:
            TypeError: If ``other`` is not a Location.
        """
        if not isinstance(other, Location):
            raise TypeError("The parameter must be an instance of Location")

        first, second = sorted(
            [(self.latitude, self.longitude), (other.latitude, other.longitude)]
        )
        return round_half_up(haversine_km(*first, *second))

    def to_record(self) -> dict[str, Any]:
        """Flat record used by graph export."""
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "region": self.region,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Location:
        """Build a location from a record produced by ``to_record``.

        Raises:
            ValidationError: If the record is not a mapping, misses a
                required field, or fails constructor validation.
        """
        if not isinstance(record, Mapping):
            raise ValidationError("Location record must be a mapping")

        missing = [name for name in _RECORD_FIELDS if name not in record]
        if missing:
            raise ValidationError(
                f"Location record is missing fields: {', '.join(missing)}",
                field_name=missing[0],
            )

        return cls(
            id=record["id"],
            name=record["name"],
            latitude=record["latitude"],
            longitude=record["longitude"],
            region=record.get("region") or "",
        )

    def __str__(self) -> str:
        return f"{self.name}, {self.region} ({self.latitude}, {self.longitude})"


class Neighbor(NamedTuple):
    """A directly connected location and the weight of the edge to it.

    Unpacks as a pair: ``location, distance = neighbor``.
    """

    location: Location
    distance: float


@dataclass(frozen=True, slots=True)
class ShortestPath:
    """Result of a successful shortest-path query.

    Attributes:
        path: Ordered locations from origin to destination (inclusive)
        distance: Total edge weight, rounded to two decimals
    """

    path: tuple[Location, ...]
    distance: float

    @property
    def origin(self) -> Location:
        return self.path[0]

    @property
    def destination(self) -> Location:
        return self.path[-1]

    @property
    def location_ids(self) -> tuple[str, ...]:
        """Identifiers along the path."""
        return tuple(location.id for location in self.path)

    @property
    def stops(self) -> int:
        """Number of intermediate stops, excluding origin and destination."""
        return max(len(self.path) - 2, 0)
