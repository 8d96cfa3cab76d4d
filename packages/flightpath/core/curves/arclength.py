"""Arc-length parameterization for multi-segment cubic Bezier paths.

Bezier curves are parametric in t, and equal steps in t do not travel
equal distances along the curve. This module precomputes, for every
segment, its exact length (via the ``bezier`` library) plus a flattened
table mapping normalized distance within the segment back to t. Locating
a distance is then a binary search over segment offsets followed by a
linear interpolation in that segment's table.
"""

from __future__ import annotations

from collections.abc import Sequence

import bezier
import numpy as np

DEFAULT_TABLE_RESOLUTION = 256


class ArcLengthTable:
    """Distance -> (segment, t) lookup for a sequence of cubic segments.

    Instances are immutable once built and safe to share between samplers.

    Args:
        segment_nodes: One (2, 4) node array per cubic segment, columns are
            start, control1, control2, end.
        resolution: Number of flattening steps per segment (>= 8).

    Raises:
        ValueError: If no segments are provided or resolution < 8.

    Example:
        >>> nodes = np.asfortranarray([[0.0, 1.0, 2.0, 3.0], [0.0, 0.0, 0.0, 0.0]])
        >>> table = ArcLengthTable([nodes])
        >>> round(table.total_length, 6)
        3.0
    """

    def __init__(
        self,
        segment_nodes: Sequence[np.ndarray],
        resolution: int = DEFAULT_TABLE_RESOLUTION,
    ):
        if not segment_nodes:
            raise ValueError("at least one segment is required")
        if resolution < 8:
            raise ValueError("resolution must be >= 8")

        self._resolution = resolution
        self._t_grid = np.linspace(0.0, 1.0, resolution + 1)
        self._curves: list[bezier.Curve] = []
        self._fractions: list[np.ndarray] = []
        lengths: list[float] = []

        for nodes in segment_nodes:
            curve = bezier.Curve(np.asfortranarray(nodes, dtype=float), degree=3)
            self._curves.append(curve)

            pts = curve.evaluate_multi(self._t_grid)
            chords = np.hypot(np.diff(pts[0, :]), np.diff(pts[1, :]))
            cumulative = np.concatenate(([0.0], np.cumsum(chords)))
            if cumulative[-1] > 0.0:
                self._fractions.append(cumulative / cumulative[-1])
                lengths.append(float(curve.length))
            else:
                # Collapsed segment: every t maps to the same point
                self._fractions.append(self._t_grid.copy())
                lengths.append(0.0)

        self._lengths = np.asarray(lengths, dtype=float)
        self._offsets = np.concatenate(([0.0], np.cumsum(self._lengths)))

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def segment_count(self) -> int:
        return len(self._curves)

    @property
    def segment_lengths(self) -> tuple[float, ...]:
        return tuple(float(v) for v in self._lengths)

    @property
    def total_length(self) -> float:
        return float(self._offsets[-1])

    def locate(self, distance: float) -> tuple[int, float]:
        """Resolve an absolute distance to (segment index, local t).

        Args:
            distance: Arc-length distance from the path start, clamped to
                [0, total_length].

        Returns:
            Tuple of segment index and the local Bezier parameter in [0, 1].
        """
        distance = min(max(distance, 0.0), self.total_length)
        last = self.segment_count - 1
        index = int(np.searchsorted(self._offsets, distance, side="right")) - 1
        index = min(max(index, 0), last)

        seg_length = self._lengths[index]
        if seg_length <= 0.0:
            return index, 0.0

        local = (distance - self._offsets[index]) / seg_length
        local = min(max(local, 0.0), 1.0)
        t = float(np.interp(local, self._fractions[index], self._t_grid))
        return index, t

    def evaluate(self, index: int, t: float) -> tuple[float, float]:
        """Evaluate segment ``index`` at parameter ``t``."""
        point = self._curves[index].evaluate(t)
        return float(point[0, 0]), float(point[1, 0])

    def point_at(self, distance: float) -> tuple[float, float]:
        """Point located ``distance`` along the path."""
        index, t = self.locate(distance)
        return self.evaluate(index, t)
