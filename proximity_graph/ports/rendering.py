"""Rendering port - turns routes and neighborhoods into map files.

Implementation: adapters/rendering/folium_adapter.py (FoliumMapRenderer)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Location, Neighbor


class MapRendererPort(Protocol):
    """Writes HTML maps for graph query results."""

    def render_route(
        self, path: Sequence[Location], output_path: Optional[Path] = None
    ) -> Path:
        """Draw a shortest-path result, origin to destination.

        Args:
            path: Locations in travel order.
            output_path: Target HTML file; the renderer picks one when omitted.

        Returns:
            The written file.
        """
        ...

    def render_nearby(
        self,
        center: Location,
        neighbors: Sequence[Neighbor],
        output_path: Optional[Path] = None,
    ) -> Path:
        """Draw a location with one line to each direct neighbor."""
        ...
