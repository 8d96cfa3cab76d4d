"""Animation engine: event wiring and state publication.

The engine owns the single mutable AnimationState. On every scroll or
resize event it runs tracker -> sampler -> reveal policy and swaps in a
new frozen snapshot in one assignment, so listeners never observe a new
point with a stale reveal set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from flightpath.core.curves.models import CurveModel, Point
from flightpath.core.curves.reveal import EMPTY_REVEAL_SET, RevealPolicy
from flightpath.core.curves.sampler import CurveSampler
from flightpath.core.errors import DegenerateGeometryError, InvalidProgressError
from flightpath.core.scroll.models import AnimationState, ViewportEvent
from flightpath.core.scroll.protocols import (
    EventSource,
    FrameScheduler,
    LayoutProvider,
    StateListener,
)
from flightpath.core.scroll.tracker import ProgressTracker, is_measurable

logger = logging.getLogger(__name__)

_TRACKED_EVENTS = (ViewportEvent.SCROLL, ViewportEvent.RESIZE)


def initial_state(curve: CurveModel) -> AnimationState:
    """State before the first measurable event: marker parked at the curve start."""
    return AnimationState(
        progress=0.0, point=curve.start_point, angle=0.0, reveal_set=EMPTY_REVEAL_SET
    )


class AnimationEngine:
    """Scroll-driven marker animation along one curve.

    Args:
        curve: Immutable path the marker travels along.
        layout: Source of container geometry and viewport height.
        events: Source of scroll/resize notifications.
        tracker: Progress tracker (default speed multiplier if omitted).
        sampler: Curve sampler (default lookahead if omitted).
        policy: Reveal policy.
        frame_scheduler: When given, events are coalesced so at most one
            recomputation runs per frame.
    """

    def __init__(
        self,
        curve: CurveModel,
        layout: LayoutProvider,
        events: EventSource,
        *,
        tracker: ProgressTracker | None = None,
        sampler: CurveSampler | None = None,
        policy: RevealPolicy | None = None,
        frame_scheduler: FrameScheduler | None = None,
    ):
        self.curve = curve
        self._layout = layout
        self._events = events
        self.tracker = tracker or ProgressTracker()
        self.sampler = sampler or CurveSampler()
        self.policy = policy or RevealPolicy()
        self._frame_scheduler = frame_scheduler

        self._state = initial_state(curve)
        self._listeners: list[StateListener] = []
        self._mounted = False
        self._frame_pending = False

    @property
    def state(self) -> AnimationState:
        """Latest published snapshot."""
        return self._state

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """Subscribe to viewport events and compute the initial state."""
        if self._mounted:
            logger.debug("Engine already mounted; ignoring mount()")
            return
        for event in _TRACKED_EVENTS:
            self._events.add_listener(event, self.handle_event)
        self._mounted = True
        logger.debug(
            "Engine mounted (%d segments, length %.2f)",
            len(self.curve.segments),
            self.curve.length,
        )
        self.recompute()

    def unmount(self) -> None:
        """Remove viewport subscriptions and drop any pending frame."""
        if not self._mounted:
            return
        for event in _TRACKED_EVENTS:
            self._events.remove_listener(event, self.handle_event)
        self._mounted = False
        self._frame_pending = False
        logger.debug("Engine unmounted")

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for new snapshots.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def handle_event(self) -> None:
        """Scroll/resize handler. Recomputes now, or once on the next frame."""
        if self._frame_scheduler is None:
            self.recompute()
            return
        if self._frame_pending:
            return
        self._frame_pending = True
        self._frame_scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        if not self._frame_pending:
            # Cancelled by unmount()
            return
        self._frame_pending = False
        self.recompute()

    def recompute(self) -> AnimationState:
        """Run the pipeline once and publish the result.

        Returns:
            The published state; the previous one when the step is skipped.
        """
        rect = self._layout.get_tracked_rect()
        viewport_height = self._layout.get_viewport_height()
        if not is_measurable(rect, viewport_height):
            logger.debug("Container not measurable (%s); keeping last state", rect)
            return self._state

        progress = self.tracker.update(rect, viewport_height).progress
        try:
            sample = self.sampler.sample_at(self.curve, progress)
            reveal_set = self.policy.resolve(self.curve, progress)
        except DegenerateGeometryError as e:
            logger.debug("Skipping animation update: %s", e)
            return self._state
        except InvalidProgressError as e:
            logger.warning("Skipping animation update: %s", e)
            return self._state

        new_state = AnimationState(
            progress=progress,
            point=Point(x=sample.x, y=sample.y),
            angle=sample.tangent_angle_degrees,
            reveal_set=reveal_set,
        )
        self._publish(new_state)
        return self._state

    def _publish(self, new_state: AnimationState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
