"""Scroll tracking, orchestration and render state."""

from flightpath.core.scroll.engine import AnimationEngine, initial_state
from flightpath.core.scroll.models import (
    AnimationState,
    ContainerRect,
    ProgressState,
    ViewportEvent,
)
from flightpath.core.scroll.protocols import EventSource, FrameScheduler, LayoutProvider
from flightpath.core.scroll.render import RenderAttributes, build_render_attributes
from flightpath.core.scroll.simulated import ManualFrameScheduler, SimulatedViewport
from flightpath.core.scroll.tracker import DEFAULT_SPEED_MULTIPLIER, ProgressTracker

__all__ = [
    "AnimationEngine",
    "AnimationState",
    "ContainerRect",
    "DEFAULT_SPEED_MULTIPLIER",
    "EventSource",
    "FrameScheduler",
    "LayoutProvider",
    "ManualFrameScheduler",
    "ProgressState",
    "ProgressTracker",
    "RenderAttributes",
    "SimulatedViewport",
    "ViewportEvent",
    "build_render_attributes",
    "initial_state",
]
