"""Typed domain errors for the proximity graph.

Every public graph operation either returns a result or raises one of
these errors before touching any state. A missing route is not an
error: ``ProximityGraph.shortest_path`` returns ``None`` instead.

All errors inherit from ProximityGraphError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ProximityGraphError(Exception):
    """Base error for the proximity graph domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ValidationError(ProximityGraphError):
    """Malformed input: location fields, weights, radius or import records.

    Attributes:
        field_name: Name of the offending field, when there is one
    """

    field_name: str = ""


@dataclass
class NotFoundError(ProximityGraphError):
    """Referenced location id does not exist in the graph.

    Attributes:
        location_id: The identifier that was looked up
    """

    location_id: str = ""


@dataclass
class NoConnectionError(NotFoundError):
    """No edge exists between two locations.

    Attributes:
        from_id: First endpoint
        to_id: Second endpoint
    """

    from_id: str = ""
    to_id: str = ""


@dataclass
class DuplicateError(ProximityGraphError):
    """A location with the same id is already in the graph."""

    location_id: str = ""


@dataclass
class SelfLoopError(ProximityGraphError):
    """Attempt to connect a location to itself."""

    location_id: str = ""


@dataclass
class RenderingError(ProximityGraphError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
