"""Tests for AnimationEngine orchestration and lifecycle."""

from __future__ import annotations

import logging
import math

import pytest

from flightpath.core.curves.models import CurveModel, Point
from flightpath.core.curves.reveal import EMPTY_REVEAL_SET
from flightpath.core.scroll.engine import AnimationEngine, initial_state
from flightpath.core.scroll.models import AnimationState, ViewportEvent
from flightpath.core.scroll.protocols import EventSource, FrameScheduler, LayoutProvider
from flightpath.core.scroll.simulated import ManualFrameScheduler, SimulatedViewport
from flightpath.core.scroll.tracker import ProgressTracker


def _engine(
    curve: CurveModel,
    viewport: SimulatedViewport,
    frames: ManualFrameScheduler | None = None,
) -> AnimationEngine:
    return AnimationEngine(
        curve,
        viewport,
        viewport,
        tracker=ProgressTracker(speed_multiplier=1.0),
        frame_scheduler=frames,
    )


class TestInitialState:
    """Tests for the pre-mount state."""

    def test_parked_at_start(self, pilots_curve: CurveModel) -> None:
        state = initial_state(pilots_curve)
        assert state.progress == 0.0
        assert state.point == Point(x=150, y=50)
        assert state.angle == 0.0
        assert state.reveal_set == EMPTY_REVEAL_SET

    def test_engine_starts_in_initial_state(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(pilots_curve, viewport)
        assert engine.state == initial_state(pilots_curve)
        assert not engine.mounted


class TestSimulatedViewportProtocols:
    """The simulated viewport satisfies the engine's collaborator protocols."""

    def test_protocols(self, viewport: SimulatedViewport, frames: ManualFrameScheduler) -> None:
        assert isinstance(viewport, LayoutProvider)
        assert isinstance(viewport, EventSource)
        assert isinstance(frames, FrameScheduler)


class TestLifecycle:
    """Tests for mount/unmount."""

    def test_mount_subscribes_once(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(straight_curve, viewport)
        engine.mount()
        engine.mount()
        assert engine.mounted
        assert viewport.listener_count(ViewportEvent.SCROLL) == 1
        assert viewport.listener_count(ViewportEvent.RESIZE) == 1

    def test_mount_computes_initial_state(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        viewport.scroll_y = 1500.0
        engine = _engine(straight_curve, viewport)
        engine.mount()
        assert engine.state.progress == pytest.approx(0.5)
        assert engine.state.point.x == pytest.approx(50.0, abs=1e-6)

    def test_unmount_removes_subscriptions(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(straight_curve, viewport)
        engine.mount()
        engine.unmount()
        assert not engine.mounted
        assert viewport.listener_count() == 0

        viewport.scroll_to(1500.0)
        assert engine.state.progress == 0.0

    def test_unmount_when_not_mounted(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(straight_curve, viewport)
        engine.unmount()
        assert viewport.listener_count() == 0

    def test_remount(self, straight_curve: CurveModel, viewport: SimulatedViewport) -> None:
        engine = _engine(straight_curve, viewport)
        engine.mount()
        engine.unmount()
        engine.mount()
        assert viewport.listener_count() == 2
        viewport.scroll_to(1750.0)
        assert engine.state.progress == pytest.approx(0.75)


class TestRecompute:
    """Tests for the per-event pipeline."""

    def test_scroll_updates_state(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(pilots_curve, viewport)
        engine.mount()

        viewport.scroll_to(1600.0)
        state = engine.state
        assert state.progress == pytest.approx(0.6)
        assert state.reveal_set == {"First Solo", "Private Pilot License"}
        expected = pilots_curve.sample_at(0.6)
        assert state.point.as_tuple() == pytest.approx(expected.as_tuple())

    def test_resize_updates_state(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        viewport.scroll_y = 1500.0
        engine = _engine(straight_curve, viewport)
        engine.mount()

        # Taller viewport shows more of the container
        viewport.resize(1200.0)
        assert engine.state.progress == pytest.approx(0.7)

    def test_full_scroll_reaches_end(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(pilots_curve, viewport)
        engine.mount()
        viewport.scroll_to(5000.0)
        assert engine.state.progress == 1.0
        assert engine.state.point == pilots_curve.end_point
        assert engine.state.reveal_set == set(pilots_curve.labels)

    def test_scrolling_back_restores_earlier_state(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(pilots_curve, viewport)
        engine.mount()
        viewport.scroll_to(1300.0)
        earlier = engine.state
        viewport.scroll_to(1950.0)
        viewport.scroll_to(1300.0)
        assert engine.state == earlier

    def test_recompute_returns_state(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(straight_curve, viewport)
        viewport.scroll_y = 1250.0
        assert engine.recompute() is engine.state
        assert engine.state.progress == pytest.approx(0.25)


class TestDegenerateInput:
    """The engine never raises or publishes NaN for unusable geometry."""

    def test_zero_height_container_keeps_state(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(pilots_curve, viewport)
        engine.mount()
        viewport.scroll_to(1400.0)
        before = engine.state

        viewport.relayout(container_height=0.0)
        viewport.scroll_to(1800.0)
        assert engine.state == before
        assert not math.isnan(engine.state.point.x)
        assert not math.isnan(engine.state.angle)

    def test_detached_container_keeps_state(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(pilots_curve, viewport)
        engine.mount()
        viewport.scroll_to(1400.0)
        before = engine.state

        viewport.detach()
        viewport.scroll_to(1800.0)
        assert engine.state == before

        viewport.attach()
        viewport.scroll_to(1800.0)
        assert engine.state.progress == pytest.approx(0.8)

    def test_zero_length_curve_keeps_initial_state(
        self,
        zero_length_curve: CurveModel,
        viewport: SimulatedViewport,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        engine = _engine(zero_length_curve, viewport)
        with caplog.at_level(logging.DEBUG, logger="flightpath.core.scroll.engine"):
            engine.mount()
            viewport.scroll_to(1500.0)
        assert engine.state == initial_state(zero_length_curve)
        assert "Skipping animation update" in caplog.text


class TestSubscribers:
    """Tests for listener notification."""

    def test_notified_on_change_only(
        self, straight_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        engine = _engine(straight_curve, viewport)
        received: list[AnimationState] = []
        engine.subscribe(received.append)
        engine.mount()

        viewport.scroll_to(1500.0)
        viewport.scroll_to(1500.0)
        viewport.resize(1000.0)
        assert len(received) == 1
        assert received[0] is engine.state

    def test_unsubscribe(self, straight_curve: CurveModel, viewport: SimulatedViewport) -> None:
        engine = _engine(straight_curve, viewport)
        received: list[AnimationState] = []
        unsubscribe = engine.subscribe(received.append)
        engine.mount()
        unsubscribe()
        unsubscribe()

        viewport.scroll_to(1500.0)
        assert received == []

    def test_snapshot_is_consistent(
        self, pilots_curve: CurveModel, viewport: SimulatedViewport
    ) -> None:
        """Each published snapshot's reveal set matches its own progress."""
        engine = _engine(pilots_curve, viewport)
        received: list[AnimationState] = []
        engine.subscribe(received.append)
        engine.mount()
        for scroll_y in range(1000, 3100, 50):
            viewport.scroll_to(float(scroll_y))

        assert received
        for state in received:
            expected = {
                t.label for t in pilots_curve.thresholds if state.progress > t.reveal_progress
            }
            assert state.reveal_set == expected


class TestFrameCoalescing:
    """Tests for frame-scheduled recomputation."""

    def test_many_events_one_recompute(
        self,
        straight_curve: CurveModel,
        viewport: SimulatedViewport,
        frames: ManualFrameScheduler,
    ) -> None:
        engine = _engine(straight_curve, viewport, frames)
        engine.mount()
        received: list[AnimationState] = []
        engine.subscribe(received.append)

        viewport.scroll_to(1200.0)
        viewport.scroll_to(1400.0)
        viewport.resize(1000.0)
        viewport.scroll_to(1500.0)
        assert frames.pending == 1
        assert engine.state.progress == 0.0

        assert frames.run_frame() == 1
        assert engine.state.progress == pytest.approx(0.5)
        assert len(received) == 1

    def test_next_frame_after_run(
        self,
        straight_curve: CurveModel,
        viewport: SimulatedViewport,
        frames: ManualFrameScheduler,
    ) -> None:
        engine = _engine(straight_curve, viewport, frames)
        engine.mount()
        viewport.scroll_to(1500.0)
        frames.run_frame()
        viewport.scroll_to(1750.0)
        assert frames.pending == 1
        frames.run_frame()
        assert engine.state.progress == pytest.approx(0.75)

    def test_unmount_cancels_pending_frame(
        self,
        straight_curve: CurveModel,
        viewport: SimulatedViewport,
        frames: ManualFrameScheduler,
    ) -> None:
        engine = _engine(straight_curve, viewport, frames)
        engine.mount()
        viewport.scroll_to(1500.0)
        engine.unmount()
        frames.run_frame()
        assert engine.state.progress == 0.0
