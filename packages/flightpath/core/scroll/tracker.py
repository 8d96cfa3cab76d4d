"""Scroll position -> normalized progress."""

from __future__ import annotations

import logging

from flightpath.core.scroll.models import INITIAL_PROGRESS, ContainerRect, ProgressState
from flightpath.core.utils.math import clamp_unit, is_finite

logger = logging.getLogger(__name__)

DEFAULT_SPEED_MULTIPLIER = 1.5


def is_measurable(rect: ContainerRect | None, viewport_height: float) -> bool:
    """True when the rect can be turned into progress without dividing by zero."""
    if rect is None:
        return False
    return is_finite(rect.top, rect.height, viewport_height) and rect.height > 0.0


class ProgressTracker:
    """Converts container geometry into animation progress.

    progress = clamp(clamp(raw) * speed_multiplier), where
    raw = (viewport_height - rect.top) / rect.height.

    The speed multiplier lets the marker finish its traversal before the
    whole backing section has scrolled past.

    Args:
        speed_multiplier: Scale applied to clamped raw progress (> 0).

    Example:
        >>> tracker = ProgressTracker(speed_multiplier=2.0)
        >>> tracker.update(ContainerRect(top=800, height=1000), viewport_height=1000).progress
        0.4
    """

    def __init__(self, speed_multiplier: float = DEFAULT_SPEED_MULTIPLIER):
        if not is_finite(speed_multiplier) or speed_multiplier <= 0.0:
            raise ValueError(
                f"speed_multiplier must be a finite value > 0, got {speed_multiplier!r}"
            )
        self.speed_multiplier = speed_multiplier
        self._last = INITIAL_PROGRESS

    @property
    def last_state(self) -> ProgressState:
        return self._last

    def reset(self) -> None:
        self._last = INITIAL_PROGRESS

    def update(self, rect: ContainerRect | None, viewport_height: float) -> ProgressState:
        """Compute progress for the current geometry.

        Unmeasurable geometry (missing rect, zero height, non-finite values)
        leaves the previous state in place and returns it.
        """
        if rect is None or not is_measurable(rect, viewport_height):
            logger.debug("Skipping progress update: unmeasurable container %s", rect)
            return self._last

        raw = (viewport_height - rect.top) / rect.height
        progress = clamp_unit(clamp_unit(raw) * self.speed_multiplier)
        self._last = ProgressState(raw_progress=raw, progress=progress)
        return self._last
