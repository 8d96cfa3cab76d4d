"""Tests for CurveSampler: positions, tangents and label anchors."""

from __future__ import annotations

import math

import pytest

from flightpath.core.curves.models import CurveModel, StaticLabel, Threshold
from flightpath.core.curves.sampler import CurveSampler, sample_at
from flightpath.core.errors import DegenerateGeometryError, InvalidProgressError


class TestCurveSamplerConstruction:
    """Tests for sampler parameters."""

    @pytest.mark.parametrize("lookahead", [0.0, -1.0, math.nan, math.inf])
    def test_rejects_invalid_lookahead(self, lookahead: float) -> None:
        with pytest.raises(ValueError, match="lookahead"):
            CurveSampler(lookahead=lookahead)

    def test_default_lookahead(self) -> None:
        assert CurveSampler().lookahead == 2.0


class TestSampleAt:
    """Tests for progress -> point + tangent."""

    def test_exact_start(self, pilots_curve: CurveModel) -> None:
        sample = CurveSampler().sample_at(pilots_curve, 0.0)
        assert (sample.x, sample.y) == (150.0, 50.0)
        # First control point is level with the start
        assert sample.tangent_angle_degrees == pytest.approx(0.0, abs=0.5)

    def test_exact_end_uses_look_behind(self, pilots_curve: CurveModel) -> None:
        sample = CurveSampler().sample_at(pilots_curve, 1.0)
        assert (sample.x, sample.y) == (350.0, 1200.0)
        # Final control leg runs from (150, 1100) to (350, 1200)
        expected = math.degrees(math.atan2(100.0, 200.0))
        assert sample.tangent_angle_degrees == pytest.approx(expected, abs=1.0)

    def test_heading_directions(self) -> None:
        sampler = CurveSampler()
        down = CurveModel.from_path_data("M 0 0 L 0 100")
        left = CurveModel.from_path_data("M 100 0 L 0 0")
        diagonal = CurveModel.from_path_data("M 0 0 L 100 100")

        assert sampler.sample_at(down, 0.5).tangent_angle_degrees == pytest.approx(90.0)
        assert abs(sampler.sample_at(left, 0.5).tangent_angle_degrees) == pytest.approx(180.0)
        assert sampler.sample_at(diagonal, 0.5).tangent_angle_degrees == pytest.approx(45.0)

    def test_look_behind_near_end(self, straight_curve: CurveModel) -> None:
        sampler = CurveSampler(lookahead=10.0)
        sample = sampler.sample_at(straight_curve, 0.95)
        assert sample.x == pytest.approx(95.0, abs=1e-6)
        assert sample.tangent_angle_degrees == pytest.approx(0.0)

    @pytest.mark.parametrize("progress", [0.0, 0.5, 1.0])
    def test_lookahead_longer_than_curve(self, progress: float) -> None:
        """Short curves keep the real heading instead of a zero vector."""
        curve = CurveModel.from_path_data("M 0 0 L 0 1")
        sample = CurveSampler(lookahead=5.0).sample_at(curve, progress)
        assert sample.tangent_angle_degrees == pytest.approx(90.0)
        assert sample.x == pytest.approx(0.0, abs=1e-9)
        assert sample.y == pytest.approx(progress, abs=1e-6)

    def test_default_lookahead_on_unit_curve(self) -> None:
        curve = CurveModel.from_path_data("M 0 0 L 0 1")
        assert sample_at(curve, 0.0).tangent_angle_degrees == pytest.approx(90.0)

    def test_arc_length_uniform(self, pilots_curve: CurveModel) -> None:
        """Equal progress steps travel equal distances along the curve."""
        sampler = CurveSampler()
        steps = 200
        points = [sampler.sample_at(pilots_curve, i / steps) for i in range(steps + 1)]
        chords = [
            math.dist((a.x, a.y), (b.x, b.y)) for a, b in zip(points, points[1:], strict=False)
        ]
        expected = pilots_curve.length / steps
        for chord in chords:
            assert chord == pytest.approx(expected, rel=0.01)

    def test_deterministic(self, pilots_curve: CurveModel) -> None:
        sampler = CurveSampler()
        assert sampler.sample_at(pilots_curve, 0.37) == sampler.sample_at(pilots_curve, 0.37)

    @pytest.mark.parametrize("progress", [-0.01, 1.01, math.nan, -math.inf])
    def test_invalid_progress(self, pilots_curve: CurveModel, progress: float) -> None:
        with pytest.raises(InvalidProgressError) as exc_info:
            CurveSampler().sample_at(pilots_curve, progress)
        assert exc_info.value.progress is progress

    def test_zero_length_curve(self, zero_length_curve: CurveModel) -> None:
        assert zero_length_curve.length == 0.0
        with pytest.raises(DegenerateGeometryError):
            CurveSampler().sample_at(zero_length_curve, 0.5)

    def test_module_level_sample_at(self, straight_curve: CurveModel) -> None:
        assert sample_at(straight_curve, 0.25) == CurveSampler().sample_at(straight_curve, 0.25)


class TestLabelAnchors:
    """Tests for label placement."""

    def test_anchor_position(self, straight_curve: CurveModel) -> None:
        threshold = Threshold(offset_percent=0.4, label="mid", reveal_progress=0.3)
        anchor = CurveSampler().anchor_for(straight_curve, threshold)
        assert anchor.label == "mid"
        assert (anchor.x, anchor.y) == pytest.approx((40.0, 0.0), abs=1e-6)
        assert anchor.angle_degrees == pytest.approx(0.0)
        assert anchor.flipped is False

    def test_leftward_label_is_flipped_upright(self) -> None:
        curve = CurveModel.from_path_data(
            "M 100 0 L 0 0",
            thresholds=[Threshold(offset_percent=0.5, label="back", reveal_progress=0.5)],
        )
        (anchor,) = CurveSampler().label_anchors(curve)
        assert anchor.flipped is True
        assert anchor.angle_degrees == pytest.approx(0.0)

    def test_anchors_for_all_thresholds(self, pilots_curve: CurveModel) -> None:
        anchors = CurveSampler().label_anchors(pilots_curve)
        assert [a.label for a in anchors] == pilots_curve.labels
        for anchor in anchors:
            assert -90.0 < anchor.angle_degrees <= 90.0

    def test_static_anchors(self, straight_curve: CurveModel) -> None:
        curve = CurveModel.from_path_data(
            "M 0 0 L 100 0",
            static_labels=[StaticLabel(offset_percent=0.08, label="intro")],
        )
        (anchor,) = CurveSampler().static_anchors(curve)
        assert anchor.label == "intro"
        assert (anchor.x, anchor.y) == pytest.approx((8.0, 0.0), abs=1e-6)
        assert CurveSampler().static_anchors(straight_curve) == []

    def test_zero_length_curve_cannot_place_labels(self) -> None:
        curve = CurveModel.from_path_data(
            "M 10 10 L 10 10",
            thresholds=[Threshold(offset_percent=0.5, label="dot", reveal_progress=0.5)],
        )
        with pytest.raises(DegenerateGeometryError):
            CurveSampler().label_anchors(curve)
