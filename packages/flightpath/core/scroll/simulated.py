"""In-memory viewport for driving the engine without a rendering surface.

Simulates a page with one tracked container. Scrolling and resizing
update the geometry and dispatch events synchronously, the same way a
browser runs scroll handlers to completion. Used by the CLI and tests.
"""

from __future__ import annotations

import logging
from collections import defaultdict

import numpy as np

from flightpath.core.scroll.models import ContainerRect, ViewportEvent
from flightpath.core.scroll.protocols import EventHandler

logger = logging.getLogger(__name__)


class SimulatedViewport:
    """Layout provider and event source backed by plain numbers.

    Coordinates are document coordinates: the container starts at
    ``container_top`` and the viewport shows
    ``[scroll_y, scroll_y + viewport_height)``.

    Not thread-safe (use per-test instance).

    Args:
        viewport_height: Visible height.
        container_top: Document offset of the tracked container.
        container_height: Height of the tracked container (0 = not laid out).
        scroll_y: Initial scroll offset.
    """

    def __init__(
        self,
        viewport_height: float = 900.0,
        container_top: float = 1200.0,
        container_height: float = 1400.0,
        scroll_y: float = 0.0,
    ):
        self.viewport_height = viewport_height
        self.container_top = container_top
        self.container_height = container_height
        self.scroll_y = scroll_y
        self.attached = True
        self._handlers: dict[ViewportEvent, list[EventHandler]] = defaultdict(list)

    # LayoutProvider

    def get_tracked_rect(self) -> ContainerRect | None:
        if not self.attached:
            return None
        return ContainerRect(top=self.container_top - self.scroll_y, height=self.container_height)

    def get_viewport_height(self) -> float:
        return self.viewport_height

    # EventSource

    def add_listener(self, event: ViewportEvent, handler: EventHandler) -> None:
        self._handlers[event].append(handler)

    def remove_listener(self, event: ViewportEvent, handler: EventHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event: ViewportEvent | None = None) -> int:
        """Number of registered handlers, for one event or all events."""
        if event is not None:
            return len(self._handlers.get(event, []))
        return sum(len(h) for h in self._handlers.values())

    def dispatch(self, event: ViewportEvent) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler()

    # Simulation controls

    def scroll_to(self, scroll_y: float) -> None:
        self.scroll_y = float(scroll_y)
        self.dispatch(ViewportEvent.SCROLL)

    def scroll_by(self, delta: float) -> None:
        self.scroll_to(self.scroll_y + delta)

    def resize(self, viewport_height: float) -> None:
        self.viewport_height = float(viewport_height)
        self.dispatch(ViewportEvent.RESIZE)

    def relayout(
        self,
        *,
        container_top: float | None = None,
        container_height: float | None = None,
    ) -> None:
        """Change container geometry and notify as a resize would."""
        if container_top is not None:
            self.container_top = float(container_top)
        if container_height is not None:
            self.container_height = float(container_height)
        self.dispatch(ViewportEvent.RESIZE)

    def detach(self) -> None:
        self.attached = False

    def attach(self) -> None:
        self.attached = True

    def sweep_positions(self, steps: int) -> list[float]:
        """Scroll offsets from "container just below viewport" to "container above viewport".

        Args:
            steps: Number of positions (>= 2), endpoints included.
        """
        if steps < 2:
            raise ValueError("steps must be >= 2")
        start = self.container_top - self.viewport_height
        end = self.container_top + self.container_height
        return [float(v) for v in np.linspace(start, end, steps)]


class ManualFrameScheduler:
    """Frame scheduler whose frames are advanced explicitly.

    Example:
        >>> frames = ManualFrameScheduler()
        >>> frames.request_frame(lambda: None)
        >>> frames.pending
        1
        >>> frames.run_frame()
        1
    """

    def __init__(self) -> None:
        self._queue: list[EventHandler] = []

    @property
    def pending(self) -> int:
        return len(self._queue)

    def request_frame(self, callback: EventHandler) -> None:
        self._queue.append(callback)

    def run_frame(self) -> int:
        """Run callbacks queued before this frame; returns how many ran."""
        queue, self._queue = self._queue, []
        for callback in queue:
            callback()
        if queue:
            logger.debug("Ran %d frame callbacks", len(queue))
        return len(queue)
