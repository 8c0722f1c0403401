"""Graph visualizer service - display-ready views of a proximity graph.

The visualizer composes the read-only operations of GraphQueryPort into
plain dictionaries (ready for JSON or templating), an HTML table, a
structural validation report and, when a renderer is injected, HTML maps.
It never touches graph storage directly.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import ReportConfig, get_config
from ..domain.errors import RenderingError, ValidationError
from ..domain.models import Location, round_half_up
from ..ports.graph import GraphQueryPort
from ..ports.rendering import MapRendererPort


def _coordinates(location: Location) -> Dict[str, float]:
    return {"latitude": location.latitude, "longitude": location.longitude}


def _path_text(output_path: Optional[Path]) -> Optional[str]:
    return str(output_path) if output_path is not None else None


def _location_view(location: Location) -> Dict[str, Any]:
    return {
        "id": location.id,
        "name": location.name,
        "coordinates": _coordinates(location),
        "region": location.region,
    }


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of ``GraphVisualizer.validate``.

    Attributes:
        valid: True when no errors were found
        errors: Structural problems (empty graph, asymmetric edges)
        warnings: Suspicious but legal states (isolated locations)
    """

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass
class GraphVisualizer:
    """Formats graph queries for display.

    Attributes:
        graph: Any GraphQueryPort implementation
        map_renderer: Optional renderer used by the ``render_*`` methods
        config: Reporting configuration
    """

    graph: GraphQueryPort
    map_renderer: Optional[MapRendererPort] = None
    config: ReportConfig = field(default_factory=lambda: get_config().report)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def nearby_data(
        self, location_id: str, max_results: Optional[int] = None
    ) -> Dict[str, Any]:
        """Describe a location and its neighbors, closest first.

        Args:
            location_id: The central location.
            max_results: Cap on listed neighbors. Falls back to the
                configured default; a non-positive or absent cap means
                no limit. ``total_count`` is always the uncapped count.

        Raises:
            ValidationError: If ``location_id`` is empty.
            NotFoundError: If the location does not exist.
        """
        if not location_id:
            raise ValidationError("Location id is required", field_name="location_id")

        center = self.graph.get_location(location_id)
        neighbors = self.graph.neighbors(location_id)

        limit = max_results
        if limit is None:
            limit = self.config.max_nearby_results
        listed = neighbors[:limit] if limit and limit > 0 else neighbors

        return {
            "center": _location_view(center),
            "nearby": [
                {**_location_view(neighbor.location), "distance": neighbor.distance}
                for neighbor in listed
            ],
            "total_count": len(neighbors),
        }

    def route_data(self, from_id: str, to_id: str) -> Dict[str, Any]:
        """Summarize the shortest route between two locations.

        Returns ``{"found": False, "message": ...}`` when no route exists.

        Raises:
            ValidationError: If either id is empty.
            NotFoundError: If either location does not exist.
        """
        if not from_id or not to_id:
            raise ValidationError("Origin and destination ids are required")

        result = self.graph.shortest_path(from_id, to_id)
        if result is None:
            self._logger.info(
                "No route between locations",
                extra={"from": from_id, "to": to_id},
            )
            return {
                "found": False,
                "message": "No route exists between the specified locations",
            }

        return {
            "found": True,
            "origin": {"id": result.origin.id, "name": result.origin.name},
            "destination": {
                "id": result.destination.id,
                "name": result.destination.name,
            },
            "path": [_location_view(location) for location in result.path],
            "total_distance": result.distance,
            "stops": result.stops,
        }

    def connection_density(self) -> List[Dict[str, Any]]:
        """Neighbor count per location, most connected first."""
        density = [
            {
                "id": location.id,
                "name": location.name,
                "connections": len(self.graph.neighbors(location.id)),
                "coordinates": _coordinates(location),
            }
            for location in self.graph.locations()
        ]
        density.sort(key=lambda entry: entry["connections"], reverse=True)
        return density

    def statistics(self) -> Dict[str, Any]:
        """Aggregate degree statistics for the whole graph."""
        locations = self.graph.locations()
        if not locations:
            return {
                "total_locations": 0,
                "total_connections": 0,
                "average_connections": 0,
                "max_connections": 0,
                "min_connections": 0,
                "most_connected": None,
            }

        degrees = [len(self.graph.neighbors(location.id)) for location in locations]

        most_connected = None
        best = 0
        for location, degree in zip(locations, degrees):
            if degree > best:
                best = degree
                most_connected = {
                    "id": location.id,
                    "name": location.name,
                    "connections": degree,
                }

        return {
            "total_locations": len(locations),
            "total_connections": self.graph.connection_count(),
            "average_connections": round_half_up(sum(degrees) / len(locations)),
            "max_connections": max(degrees),
            "min_connections": min(degrees),
            "most_connected": most_connected,
        }

    def html_table(self, location_id: str) -> str:
        """HTML table of the neighbors of a location."""
        if not location_id:
            raise ValidationError("Location id is required", field_name="location_id")

        data = self.nearby_data(location_id, max_results=0)
        if not data["nearby"]:
            return "<p>No nearby locations to display.</p>"

        rows = [
            "<table>",
            "  <thead>",
            "    <tr>",
            "      <th>Location</th>",
            "      <th>Region</th>",
            "      <th>Distance (km)</th>",
            "    </tr>",
            "  </thead>",
            "  <tbody>",
        ]
        for entry in data["nearby"]:
            rows += [
                "    <tr>",
                f"      <td>{html.escape(entry['name'])}</td>",
                f"      <td>{html.escape(entry['region'])}</td>",
                f"      <td>{entry['distance']}</td>",
                "    </tr>",
            ]
        rows += ["  </tbody>", "</table>"]
        return "\n".join(rows)

    def validate(self) -> ValidationReport:
        """Check the graph for isolated locations and asymmetric edges."""
        if self.graph.location_count() == 0:
            return ValidationReport(
                valid=False, errors=("The graph contains no locations",)
            )

        errors: List[str] = []
        warnings: List[str] = []
        locations = self.graph.locations()

        for location in locations:
            if not self.graph.neighbors(location.id):
                warnings.append(
                    f"Location {location.name} ({location.id}) has no connections"
                )

        for location in locations:
            for neighbor in self.graph.neighbors(location.id):
                if not self.graph.has_connection(neighbor.location.id, location.id):
                    errors.append(
                        f"Asymmetric connection between {location.id} "
                        f"and {neighbor.location.id}"
                    )

        if errors:
            self._logger.warning(
                "Graph validation failed", extra={"errors": len(errors)}
            )
        return ValidationReport(
            valid=not errors, errors=tuple(errors), warnings=tuple(warnings)
        )

    def render_route_map(
        self, from_id: str, to_id: str, output_path: Optional[Path] = None
    ) -> Path:
        """Render the shortest route between two locations to an HTML map.

        Without ``output_path`` the renderer writes to its configured
        output directory.

        Raises:
            RenderingError: If no renderer is configured or no route exists.
        """
        renderer = self._require_renderer(output_path)
        result = self.graph.shortest_path(from_id, to_id)
        if result is None:
            raise RenderingError(
                f"No route from {from_id} to {to_id}",
                output_path=_path_text(output_path),
            )
        return renderer.render_route(result.path, output_path)

    def render_nearby_map(
        self, location_id: str, output_path: Optional[Path] = None
    ) -> Path:
        """Render a location and its neighbors to an HTML map."""
        renderer = self._require_renderer(output_path)
        center = self.graph.get_location(location_id)
        return renderer.render_nearby(
            center, self.graph.neighbors(location_id), output_path
        )

    def _require_renderer(self, output_path: Optional[Path]) -> MapRendererPort:
        if self.map_renderer is None:
            raise RenderingError(
                "No map renderer configured",
                output_path=_path_text(output_path),
            )
        return self.map_renderer
