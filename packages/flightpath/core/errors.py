"""Exception hierarchy for the FlightPath engine.

All engine failures are recoverable: the animation engine catches them,
logs, and keeps the last published state. They exist so that callers
outside the engine (CLI, tests, config loading) can tell the failure
kinds apart.
"""

from __future__ import annotations


class FlightPathError(Exception):
    """Base exception for all FlightPath errors."""


class GeometryError(FlightPathError, ValueError):
    """Raised when curve or container geometry cannot be used."""


class DegenerateGeometryError(GeometryError):
    """Raised for zero-length curves or zero-height containers."""


class InvalidProgressError(FlightPathError, ValueError):
    """Raised when a non-finite or out-of-range progress reaches a curve query.

    Attributes:
        progress: The rejected progress value
    """

    def __init__(self, progress: float, message: str | None = None) -> None:
        self.progress = progress
        super().__init__(message or f"progress must be a finite value in [0, 1], got {progress!r}")


class PathDataError(FlightPathError, ValueError):
    """Raised when SVG path data cannot be parsed.

    Attributes:
        position: Index of the offending token in the path data (if known)
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} (at token {position})"
        super().__init__(message)
