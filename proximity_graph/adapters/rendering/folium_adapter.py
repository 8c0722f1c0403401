"""Folium map renderer adapter.

Renders shortest-path routes and nearby-location views as interactive
HTML maps:
- Domain model input (Location, Neighbor)
- Configuration injection (tiles, zoom, route styling)
- Failures wrapped in RenderingError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import folium

from ...config import RenderingConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import Location, Neighbor

ROUTE_FILE = "route.html"
NEARBY_FILE = "nearby.html"


def _coordinates(location: Location) -> Tuple[float, float]:
    return (location.latitude, location.longitude)


def _center(locations: Sequence[Location]) -> List[float]:
    lats = [location.latitude for location in locations]
    lons = [location.longitude for location in locations]
    return [sum(lats) / len(lats), sum(lons) / len(lons)]


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort.

    Attributes:
        config: Rendering configuration (tiles, zoom, route styling)
    """

    config: RenderingConfig = field(default_factory=lambda: get_config().rendering)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render_route(
        self,
        path: Sequence[Location],
        output_path: Optional[Path] = None,
    ) -> Path:
        """Render a route on a map and save to file.

        The origin is marked green, the destination red and waypoints blue.
        Without ``output_path`` the map goes to ``route.html`` in the
        configured output directory.

        Raises:
            RenderingError: If the route is empty or rendering fails.
        """
        output_path = output_path or self.config.output_path(ROUTE_FILE)
        if not path:
            raise RenderingError(
                "Cannot render empty route",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering route map",
            extra={"locations": len(path), "output_path": str(output_path)},
        )

        try:
            m = self._new_map(_center(path))

            last = len(path) - 1
            for index, location in enumerate(path):
                if index == 0:
                    icon_color = "green"
                elif index == last:
                    icon_color = "red"
                else:
                    icon_color = "blue"
                self._add_marker(m, location, icon_color)

            if len(path) >= 2:
                folium.PolyLine(
                    [_coordinates(location) for location in path],
                    weight=self.config.route_weight,
                    color=self.config.route_color,
                    opacity=0.8,
                ).add_to(m)

            return self._save(m, output_path)
        except RenderingError:
            raise
        except Exception as e:
            raise self._failure(output_path, e) from e

    def render_nearby(
        self,
        center: Location,
        neighbors: Sequence[Neighbor],
        output_path: Optional[Path] = None,
    ) -> Path:
        """Render a location and its neighbors, one line per edge.

        Defaults to ``nearby.html`` in the configured output directory.

        Raises:
            RenderingError: If rendering fails.
        """
        output_path = output_path or self.config.output_path(NEARBY_FILE)
        self._logger.info(
            "Rendering nearby map",
            extra={
                "location_id": center.id,
                "neighbors": len(neighbors),
                "output_path": str(output_path),
            },
        )

        try:
            m = self._new_map(_coordinates(center))
            self._add_marker(m, center, "green")

            for neighbor in neighbors:
                self._add_marker(m, neighbor.location, "blue")
                folium.PolyLine(
                    [_coordinates(center), _coordinates(neighbor.location)],
                    weight=self.config.route_weight,
                    color=self.config.route_color,
                    opacity=0.6,
                    tooltip=f"{neighbor.distance} km",
                ).add_to(m)

            return self._save(m, output_path)
        except RenderingError:
            raise
        except Exception as e:
            raise self._failure(output_path, e) from e

    def _new_map(self, location: Sequence[float]) -> folium.Map:
        return folium.Map(
            location=list(location),
            zoom_start=self.config.zoom_start,
            tiles=self.config.tiles,
            control_scale=True,
        )

    def _add_marker(self, m: folium.Map, location: Location, color: str) -> None:
        label = location.name
        if location.region:
            label = f"{label}, {location.region}"
        folium.Marker(
            location=_coordinates(location),
            popup=label,
            tooltip=location.id,
            icon=folium.Icon(color=color),
        ).add_to(m)

    def _save(self, m: folium.Map, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        m.save(str(output_path))
        self._logger.info(
            "Map rendered successfully",
            extra={"output_path": str(output_path)},
        )
        return output_path

    def _failure(self, output_path: Path, error: Exception) -> RenderingError:
        self._logger.error(
            "Map rendering failed",
            extra={"error": str(error), "output_path": str(output_path)},
        )
        return RenderingError(
            f"Map rendering failed: {error}",
            output_path=str(output_path),
            renderer_type="folium",
            cause=error,
        )
