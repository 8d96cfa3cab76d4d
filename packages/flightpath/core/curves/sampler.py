"""Curve sampling: progress -> point and heading.

Sampling is arc-length uniform, so the marker moves at constant speed
along the path regardless of how segment curvature is distributed. The
heading is approximated from a second point a small lookahead distance
further along (or behind, at the very end of the curve).
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from flightpath.core.curves.models import CurveModel, StaticLabel, Threshold
from flightpath.core.errors import DegenerateGeometryError, InvalidProgressError
from flightpath.core.utils.math import heading_degrees, is_finite

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = 2.0


class SamplePoint(BaseModel):
    """A sampled curve position with its tangent direction.

    Attributes:
        x: Horizontal coordinate.
        y: Vertical coordinate.
        tangent_angle_degrees: Heading in degrees, 0 = +x, positive turns
            clockwise on screen.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    tangent_angle_degrees: float = Field(..., allow_inf_nan=False)


class LabelAnchor(BaseModel):
    """Placement of a label on the curve.

    Attributes:
        label: Label text.
        x: Anchor x coordinate.
        y: Anchor y coordinate.
        angle_degrees: Text rotation, kept within (-90, 90] so text reads upright.
        flipped: True when the curve heads leftwards at the anchor and the
            text rotation was turned by 180 degrees.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    x: float
    y: float
    angle_degrees: float
    flipped: bool = False


class CurveSampler:
    """Arc-length uniform sampler with lookahead tangent estimation.

    Args:
        lookahead: Distance (curve units) between the sampled point and the
            second point used for the heading. Must be finite and > 0.

    Example:
        >>> curve = CurveModel.from_path_data("M 0 0 C 10 0, 20 0, 30 0")
        >>> CurveSampler().sample_at(curve, 0.5).tangent_angle_degrees
        0.0
    """

    def __init__(self, lookahead: float = DEFAULT_LOOKAHEAD):
        if not is_finite(lookahead) or lookahead <= 0.0:
            raise ValueError(f"lookahead must be a finite value > 0, got {lookahead!r}")
        self.lookahead = lookahead

    def sample_at(self, curve: CurveModel, progress: float) -> SamplePoint:
        """Sample point and tangent angle at normalized progress.

        Args:
            curve: Curve to sample.
            progress: Normalized progress in [0, 1]; callers clamp first.

        Returns:
            SamplePoint at ``progress * curve.length`` along the curve.

        Raises:
            InvalidProgressError: If progress is non-finite or outside [0, 1].
            DegenerateGeometryError: If the curve has zero length.
        """
        if not is_finite(progress) or not 0.0 <= progress <= 1.0:
            raise InvalidProgressError(progress)

        length = curve.length
        if not is_finite(length) or length <= 0.0:
            raise DegenerateGeometryError(f"curve length must be > 0, got {length!r}")

        distance = progress * length
        point = curve.point_at_length(distance)

        # Curves shorter than the lookahead still need two distinct points
        step = min(self.lookahead, length)
        if distance + step <= length:
            ahead = curve.point_at_length(distance + step)
            dx, dy = ahead.x - point.x, ahead.y - point.y
        else:
            # Terminal stretch: look behind so the heading stays defined
            behind = curve.point_at_length(max(0.0, distance - step))
            dx, dy = point.x - behind.x, point.y - behind.y

        return SamplePoint(x=point.x, y=point.y, tangent_angle_degrees=heading_degrees(dx, dy))

    def anchor_for(self, curve: CurveModel, label: Threshold | StaticLabel) -> LabelAnchor:
        """Anchor position and upright rotation for one label."""
        sample = self.sample_at(curve, label.offset_percent)
        angle = sample.tangent_angle_degrees
        flipped = angle > 90.0 or angle <= -90.0
        if flipped:
            angle = angle - 180.0 if angle > 0.0 else angle + 180.0
        return LabelAnchor(
            label=label.label, x=sample.x, y=sample.y, angle_degrees=angle, flipped=flipped
        )

    def label_anchors(self, curve: CurveModel) -> list[LabelAnchor]:
        """Anchors for every threshold, in threshold order."""
        return [self.anchor_for(curve, t) for t in curve.thresholds]

    def static_anchors(self, curve: CurveModel) -> list[LabelAnchor]:
        """Anchors for the always-visible labels."""
        return [self.anchor_for(curve, s) for s in curve.static_labels]


_default_sampler = CurveSampler()


def sample_at(curve: CurveModel, progress: float) -> SamplePoint:
    """Sample ``curve`` at ``progress`` with the default lookahead."""
    return _default_sampler.sample_at(curve, progress)
