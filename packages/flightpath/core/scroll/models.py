"""Scroll tracking models.

- ViewportEvent: notifications the engine subscribes to
- ContainerRect: tracked container geometry in viewport coordinates
- ProgressState: raw and clamped scroll progress
- AnimationState: the published snapshot consumed by renderers
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from flightpath.core.curves.models import Point
from flightpath.core.curves.reveal import EMPTY_REVEAL_SET, RevealSet


class ViewportEvent(str, Enum):
    """Viewport notifications that trigger recomputation."""

    SCROLL = "scroll"
    RESIZE = "resize"


class ContainerRect(BaseModel):
    """Bounding box of the tracked container, relative to the viewport top.

    Attributes:
        top: Distance from the viewport top to the container top (negative
            once the container has scrolled past the top edge).
        height: Container height; 0 while not laid out.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: float
    height: float


class ProgressState(BaseModel):
    """Scroll progress for one event.

    Attributes:
        raw_progress: Unclamped ratio (viewport_height - top) / height.
        progress: Final progress after clamping and the speed multiplier [0, 1].
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    raw_progress: float = 0.0
    progress: float = Field(default=0.0, ge=0.0, le=1.0)


INITIAL_PROGRESS = ProgressState()


class AnimationState(BaseModel):
    """Snapshot published by the animation engine.

    Instances are frozen; consumers can keep references without copying.

    Attributes:
        progress: Animation progress [0, 1].
        point: Marker position on the curve.
        angle: Marker heading in degrees.
        reveal_set: Labels currently visible.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    point: Point
    angle: float = Field(default=0.0, allow_inf_nan=False)
    reveal_set: RevealSet = EMPTY_REVEAL_SET

    @property
    def dash_offset(self) -> float:
        """Stroke dash offset for a traced line with normalized length 1."""
        return 1.0 - self.progress

    @property
    def marker_visible(self) -> bool:
        return self.progress > 0.0
