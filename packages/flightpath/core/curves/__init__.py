"""Curve geometry, sampling and reveal policy."""

from flightpath.core.curves.arclength import ArcLengthTable
from flightpath.core.curves.models import CubicSegment, CurveModel, Point, StaticLabel, Threshold
from flightpath.core.curves.path_data import format_path_data, parse_path_data
from flightpath.core.curves.reveal import (
    EMPTY_REVEAL_SET,
    RevealPolicy,
    RevealSet,
    resolve_reveal_set,
)
from flightpath.core.curves.sampler import CurveSampler, LabelAnchor, SamplePoint, sample_at

__all__ = [
    "ArcLengthTable",
    "CubicSegment",
    "CurveModel",
    "CurveSampler",
    "EMPTY_REVEAL_SET",
    "LabelAnchor",
    "Point",
    "RevealPolicy",
    "RevealSet",
    "SamplePoint",
    "StaticLabel",
    "Threshold",
    "format_path_data",
    "parse_path_data",
    "resolve_reveal_set",
    "sample_at",
]
