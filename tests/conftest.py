"""Shared pytest fixtures for flightpath tests."""

from __future__ import annotations

import logging

import pytest

from flightpath.core.config.presets import PILOTS_STORY_PATH, PILOTS_STORY_THRESHOLDS
from flightpath.core.curves.models import CurveModel, Threshold
from flightpath.core.scroll.simulated import ManualFrameScheduler, SimulatedViewport

# ============================================================================
# Curve Fixtures
# ============================================================================


@pytest.fixture
def pilots_curve() -> CurveModel:
    """Three-segment journey path with four labels."""
    return CurveModel.from_path_data(PILOTS_STORY_PATH, PILOTS_STORY_THRESHOLDS)


@pytest.fixture
def straight_curve() -> CurveModel:
    """Horizontal line from (0, 0) to (100, 0), no thresholds."""
    return CurveModel.from_path_data("M 0 0 L 100 0")


@pytest.fixture
def single_cubic_curve() -> CurveModel:
    """One cubic from (150, 50) to (350, 1200) with three labels."""
    return CurveModel.from_path_data(
        "M 150 50 C 450 50, 50 900, 350 1200",
        thresholds=[
            Threshold(offset_percent=0.20, label="Takeoff", reveal_progress=0.15),
            Threshold(offset_percent=0.30, label="Cruise", reveal_progress=0.23),
            Threshold(offset_percent=0.80, label="Landing", reveal_progress=0.75),
        ],
    )


@pytest.fixture
def zero_length_curve() -> CurveModel:
    """A curve whose only segment collapses to a point."""
    return CurveModel.from_path_data("M 10 10 L 10 10")


# ============================================================================
# Viewport Fixtures
# ============================================================================


@pytest.fixture
def viewport() -> SimulatedViewport:
    """Viewport 1000 high; container 1000 high starting at document offset 2000.

    With a speed multiplier of 1.0, scroll_y = 1500 puts progress at 0.5.
    """
    return SimulatedViewport(viewport_height=1000.0, container_top=2000.0, container_height=1000.0)


@pytest.fixture
def frames() -> ManualFrameScheduler:
    return ManualFrameScheduler()


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
