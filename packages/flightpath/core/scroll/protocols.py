"""Protocols for the engine's external collaborators.

The engine never touches a real rendering surface. Layout queries, event
delivery and frame scheduling are injected through these interfaces.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flightpath.core.scroll.models import AnimationState, ContainerRect, ViewportEvent

EventHandler = Callable[[], None]
StateListener = Callable[["AnimationState"], None]


@runtime_checkable
class LayoutProvider(Protocol):
    """Supplies tracked container geometry on demand.

    Values are queried once per event and never cached by the engine.
    """

    def get_tracked_rect(self) -> ContainerRect | None:
        """Return the tracked container's rect, or None if not mounted/detached."""
        ...

    def get_viewport_height(self) -> float:
        """Return the current viewport height."""
        ...


@runtime_checkable
class EventSource(Protocol):
    """Delivers scroll and resize notifications."""

    def add_listener(self, event: ViewportEvent, handler: EventHandler) -> None:
        """Register handler for event."""
        ...

    def remove_listener(self, event: ViewportEvent, handler: EventHandler) -> None:
        """Unregister a handler previously registered for event."""
        ...


@runtime_checkable
class FrameScheduler(Protocol):
    """Runs a callback before the next frame is painted."""

    def request_frame(self, callback: EventHandler) -> None:
        """Schedule callback for the next frame."""
        ...
