"""FlightPath session - wires configuration into a running animation.

The session owns the validated AppConfig and the curve built from it, and
hands out engines bound to a layout/event source. Rendering surfaces
(browser bridge, simulated viewport, tests) only deal with the session.

Example:
    session = FlightPathSession(app_config="flightpath.yaml")
    viewport = SimulatedViewport()
    engine = session.build_engine(viewport, viewport)
    engine.mount()
    attrs = session.render(engine.state)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from flightpath.core.config.models import AppConfig
from flightpath.core.curves.models import CurveModel
from flightpath.core.curves.reveal import RevealPolicy
from flightpath.core.curves.sampler import CurveSampler
from flightpath.core.scroll.engine import AnimationEngine
from flightpath.core.scroll.models import AnimationState
from flightpath.core.scroll.protocols import EventSource, FrameScheduler, LayoutProvider
from flightpath.core.scroll.render import RenderAttributes, build_render_attributes
from flightpath.core.scroll.tracker import ProgressTracker

logger = logging.getLogger(__name__)


class FlightPathSession:
    """Configuration plus the immutable curve it describes.

    Args:
        app_config: AppConfig instance, path, or None (uses default path)

    Raises:
        TypeError: If app_config is of the wrong type
        ValidationError: If the config or the journey geometry is invalid
    """

    def __init__(self, *, app_config: AppConfig | Path | str | None = None):
        self.app_config: AppConfig = self._resolve_config(app_config)
        self._curve: CurveModel | None = None

    @staticmethod
    def _resolve_config(value: Any) -> AppConfig:
        if value is None:
            return AppConfig.load_or_default()
        elif isinstance(value, (Path, str)):
            return AppConfig.load_or_default(Path(value))
        elif isinstance(value, AppConfig):
            return value
        else:
            raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    @property
    def curve(self) -> CurveModel:
        """Curve for the configured journey (built on first access)."""
        if self._curve is None:
            self._curve = self.app_config.build_curve()
            logger.debug(
                "Built curve: %d segments, length %.2f, labels=%s",
                len(self._curve.segments),
                self._curve.length,
                self._curve.labels,
            )
        return self._curve

    def build_engine(
        self,
        layout: LayoutProvider,
        events: EventSource,
        frame_scheduler: FrameScheduler | None = None,
    ) -> AnimationEngine:
        """Create an unmounted engine for this journey.

        Args:
            layout: Source of container geometry.
            events: Source of scroll/resize notifications.
            frame_scheduler: Required when ``engine.coalesce_frames`` is set.

        Raises:
            ValueError: If frame coalescing is enabled without a scheduler.
        """
        if self.app_config.engine.coalesce_frames and frame_scheduler is None:
            raise ValueError("engine.coalesce_frames requires a frame scheduler")

        return AnimationEngine(
            self.curve,
            layout,
            events,
            tracker=ProgressTracker(self.app_config.tracker.speed_multiplier),
            sampler=CurveSampler(self.app_config.sampler.lookahead),
            policy=RevealPolicy(),
            frame_scheduler=frame_scheduler if self.app_config.engine.coalesce_frames else None,
        )

    def render(self, state: AnimationState) -> RenderAttributes:
        """Render attributes for a snapshot using the configured defaults."""
        return build_render_attributes(
            state,
            self.curve,
            label_opacity=self.app_config.render.label_opacity,
            marker_size=self.app_config.render.marker_size,
        )
