"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    DuplicateError,
    NoConnectionError,
    NotFoundError,
    ProximityGraphError,
    RenderingError,
    SelfLoopError,
    ValidationError,
)
from .models import EARTH_RADIUS_KM, Location, Neighbor, ShortestPath, round_half_up

__all__ = [
    # Models
    "EARTH_RADIUS_KM",
    "Location",
    "Neighbor",
    "ShortestPath",
    "round_half_up",
    # Errors
    "ProximityGraphError",
    "ValidationError",
    "NotFoundError",
    "NoConnectionError",
    "DuplicateError",
    "SelfLoopError",
    "RenderingError",
]
