"""Render attributes derived from an animation snapshot.

Rendering collaborators (marker element, traced-line mask, label text,
parallax backdrop) read these values; nothing here touches a real
surface.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from flightpath.core.curves.models import CurveModel
from flightpath.core.scroll.models import AnimationState

DEFAULT_LABEL_OPACITY = 0.7
DEFAULT_MARKER_SIZE = 50


class RenderAttributes(BaseModel):
    """Visual attributes for one snapshot.

    Attributes:
        marker_left: Marker anchor x (the sampled point).
        marker_top: Marker anchor y.
        marker_size: Marker width/height in pixels.
        marker_transform: CSS transform centring the marker on the point and
            rotating it around its own centre.
        marker_opacity: 1 once the animation has started, else 0.
        dash_offset: Stroke dash offset for the traced line (path length 1).
        background_position: CSS background-position for the parallax backdrop.
        label_opacity: Opacity per threshold label.
        static_label_opacity: Fixed opacity per always-visible label.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    marker_left: float
    marker_top: float
    marker_size: int = Field(default=DEFAULT_MARKER_SIZE, gt=0)
    marker_transform: str
    marker_opacity: float = Field(ge=0.0, le=1.0)
    dash_offset: float = Field(ge=0.0, le=1.0)
    background_position: str
    label_opacity: dict[str, float] = Field(default_factory=dict)
    static_label_opacity: dict[str, float] = Field(default_factory=dict)


def marker_transform(angle: float) -> str:
    return f"translate(-50%, -50%) rotate({angle:.4f}deg)"


def build_render_attributes(
    state: AnimationState,
    curve: CurveModel,
    *,
    label_opacity: float = DEFAULT_LABEL_OPACITY,
    marker_size: int = DEFAULT_MARKER_SIZE,
) -> RenderAttributes:
    """Derive render attributes for ``state``.

    Args:
        state: Snapshot published by the engine.
        curve: Curve the snapshot was computed for (supplies label order).
        label_opacity: Opacity applied to revealed labels.
        marker_size: Marker size in pixels.

    Returns:
        Frozen RenderAttributes.

    Example:
        >>> curve = CurveModel.from_path_data("M 0 0 L 10 0")
        >>> state = AnimationState(progress=0.25, point=curve.start_point)
        >>> build_render_attributes(state, curve).dash_offset
        0.75
    """
    if not 0.0 <= label_opacity <= 1.0:
        raise ValueError(f"label_opacity must be in [0, 1], got {label_opacity!r}")

    return RenderAttributes(
        marker_left=state.point.x,
        marker_top=state.point.y,
        marker_size=marker_size,
        marker_transform=marker_transform(state.angle),
        marker_opacity=1.0 if state.marker_visible else 0.0,
        dash_offset=state.dash_offset,
        background_position=f"50% {state.progress * 100:.2f}%",
        label_opacity={
            label: (label_opacity if label in state.reveal_set else 0.0) for label in curve.labels
        },
        static_label_opacity={s.label: s.opacity for s in curve.static_labels},
    )
