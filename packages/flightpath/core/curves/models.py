"""Curve schema models for the journey path.

This module defines the immutable geometry the engine samples:
- Point: A 2D coordinate in curve units (SVG user space)
- CubicSegment: One cubic Bezier piece (start, two controls, end)
- Threshold: A label placed along the curve that is revealed by progress
- StaticLabel: A label placed along the curve that is always shown
- CurveModel: Contiguous cubic segments plus ordered thresholds

All models validate on construction and are frozen afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from flightpath.core.curves.arclength import DEFAULT_TABLE_RESOLUTION, ArcLengthTable
from flightpath.core.errors import InvalidProgressError
from flightpath.core.utils.math import is_finite

CONTIGUITY_TOLERANCE = 1e-9


class Point(BaseModel):
    """A point in curve space.

    Example:
        >>> Point(x=150, y=50).as_tuple()
        (150.0, 50.0)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float = Field(..., allow_inf_nan=False, description="Horizontal coordinate")
    y: float = Field(..., allow_inf_nan=False, description="Vertical coordinate (grows downwards)")

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def is_close(self, other: Point, tolerance: float = CONTIGUITY_TOLERANCE) -> bool:
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance


class CubicSegment(BaseModel):
    """One cubic Bezier segment.

    Attributes:
        start: Segment start point (on-curve).
        control1: First control point.
        control2: Second control point.
        end: Segment end point (on-curve).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: Point
    control1: Point
    control2: Point
    end: Point

    @classmethod
    def from_coords(cls, *coords: float) -> CubicSegment:
        """Build a segment from 8 numbers: x0 y0 x1 y1 x2 y2 x3 y3."""
        if len(coords) != 8:
            raise ValueError(f"expected 8 coordinates, got {len(coords)}")
        pts = [Point(x=coords[i], y=coords[i + 1]) for i in range(0, 8, 2)]
        return cls(start=pts[0], control1=pts[1], control2=pts[2], end=pts[3])

    @classmethod
    def line(cls, start: Point, end: Point) -> CubicSegment:
        """Straight line expressed as a cubic with controls at thirds."""
        dx = end.x - start.x
        dy = end.y - start.y
        return cls(
            start=start,
            control1=Point(x=start.x + dx / 3.0, y=start.y + dy / 3.0),
            control2=Point(x=start.x + 2.0 * dx / 3.0, y=start.y + 2.0 * dy / 3.0),
            end=end,
        )

    def nodes(self) -> np.ndarray:
        """Node matrix in the (2, 4) Fortran layout expected by ``bezier``."""
        return np.asfortranarray(
            [
                [self.start.x, self.control1.x, self.control2.x, self.end.x],
                [self.start.y, self.control1.y, self.control2.y, self.end.y],
            ],
            dtype=float,
        )

    def reversed(self) -> CubicSegment:
        return CubicSegment(
            start=self.end, control1=self.control2, control2=self.control1, end=self.start
        )


class Threshold(BaseModel):
    """A label anchored along the curve and revealed by scroll progress.

    Attributes:
        offset_percent: Position of the label along the curve, as a
            fraction of total arc length [0, 1].
        label: Identifier of the label (unique within a curve).
        reveal_progress: Progress that must be exceeded for the label to
            be visible [0, 1].

    Example:
        >>> Threshold(offset_percent=0.18, label="First Solo", reveal_progress=0.15)
        Threshold(offset_percent=0.18, label='First Solo', reveal_progress=0.15)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    offset_percent: float = Field(..., ge=0.0, le=1.0, description="Curve offset [0,1]")
    label: str = Field(..., min_length=1, description="Label identifier")
    reveal_progress: float = Field(..., ge=0.0, le=1.0, description="Reveal progress [0,1]")


class StaticLabel(BaseModel):
    """A label anchored along the curve and shown regardless of progress."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    offset_percent: float = Field(..., ge=0.0, le=1.0, description="Curve offset [0,1]")
    label: str = Field(..., min_length=1, description="Label identifier")
    opacity: float = Field(default=0.8, ge=0.0, le=1.0)


class CurveModel(BaseModel):
    """Immutable journey path: contiguous cubic segments plus thresholds.

    The arc-length table is built once at construction; ``length`` and all
    distance queries read from it.

    Attributes:
        segments: Ordered, contiguous cubic segments (at least one).
        thresholds: Labels ordered by offset_percent with non-decreasing
            reveal_progress.
        static_labels: Always-visible labels; names are unique across both
            label kinds.

    Example:
        >>> curve = CurveModel.from_path_data("M 0 0 C 10 0, 20 0, 30 0")
        >>> round(curve.length, 6)
        30.0
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    segments: list[CubicSegment] = Field(..., min_length=1)
    thresholds: list[Threshold] = Field(default_factory=list)
    static_labels: list[StaticLabel] = Field(default_factory=list)
    table_resolution: int = Field(default=DEFAULT_TABLE_RESOLUTION, ge=8, exclude=True)

    _table: ArcLengthTable = PrivateAttr()

    @field_validator("segments")
    @classmethod
    def _validate_contiguous(cls, segments: list[CubicSegment]) -> list[CubicSegment]:
        for i in range(len(segments) - 1):
            if not segments[i].end.is_close(segments[i + 1].start):
                raise ValueError(
                    f"segments must be contiguous: segment {i} ends at "
                    f"{segments[i].end.as_tuple()} but segment {i + 1} starts at "
                    f"{segments[i + 1].start.as_tuple()}"
                )
        return segments

    @model_validator(mode="after")
    def _validate_thresholds(self) -> CurveModel:
        seen: set[str] = set()
        last_offset = -1.0
        last_reveal = -1.0
        for threshold in self.thresholds:
            if threshold.label in seen:
                raise ValueError(f"duplicate threshold label: {threshold.label!r}")
            seen.add(threshold.label)
            if threshold.offset_percent < last_offset:
                raise ValueError("thresholds must be ordered by offset_percent ascending")
            if threshold.reveal_progress < last_reveal:
                raise ValueError(
                    "threshold reveal_progress must be non-decreasing with offset_percent"
                )
            last_offset = threshold.offset_percent
            last_reveal = threshold.reveal_progress
        for static in self.static_labels:
            if static.label in seen:
                raise ValueError(f"duplicate label: {static.label!r}")
            seen.add(static.label)
        return self

    def model_post_init(self, __context: Any) -> None:
        self._table = ArcLengthTable([s.nodes() for s in self.segments], self.table_resolution)

    @classmethod
    def from_path_data(
        cls,
        path_data: str,
        thresholds: Sequence[Threshold] = (),
        table_resolution: int = DEFAULT_TABLE_RESOLUTION,
        static_labels: Sequence[StaticLabel] = (),
    ) -> CurveModel:
        """Build a curve from an SVG path ``d`` string."""
        from flightpath.core.curves.path_data import parse_path_data

        return cls(
            segments=parse_path_data(path_data),
            thresholds=list(thresholds),
            static_labels=list(static_labels),
            table_resolution=table_resolution,
        )

    def to_path_data(self) -> str:
        """Serialize segments back into an absolute SVG path ``d`` string."""
        from flightpath.core.curves.path_data import format_path_data

        return format_path_data(self.segments)

    @property
    def table(self) -> ArcLengthTable:
        return self._table

    @property
    def length(self) -> float:
        """Total arc length in curve units."""
        return self._table.total_length

    @property
    def start_point(self) -> Point:
        return self.segments[0].start

    @property
    def end_point(self) -> Point:
        return self.segments[-1].end

    @property
    def labels(self) -> list[str]:
        return [t.label for t in self.thresholds]

    def point_at_length(self, distance: float) -> Point:
        """Point at an absolute arc-length distance from the start.

        Distances outside [0, length] are clamped. The curve endpoints are
        returned exactly rather than re-evaluated.

        Raises:
            InvalidProgressError: If distance is not finite.
        """
        if not is_finite(distance):
            raise InvalidProgressError(distance, f"distance must be finite, got {distance!r}")
        if distance <= 0.0:
            return self.start_point
        if distance >= self.length:
            return self.end_point
        x, y = self._table.point_at(distance)
        return Point(x=x, y=y)

    def sample_at(self, progress: float) -> Point:
        """Arc-length uniform point at normalized progress [0, 1].

        Raises:
            InvalidProgressError: If progress is non-finite or outside [0, 1].
        """
        if not is_finite(progress) or not 0.0 <= progress <= 1.0:
            raise InvalidProgressError(progress)
        return self.point_at_length(progress * self.length)

    def reversed(self) -> CurveModel:
        """Same geometry traversed end -> start, without labels.

        Label offsets are tied to the forward direction and are not carried over.
        """
        return CurveModel(
            segments=[s.reversed() for s in reversed(self.segments)],
            table_resolution=self.table_resolution,
        )
