"""Shared utilities for FlightPath."""

from flightpath.core.utils.json import dumps, read_json
from flightpath.core.utils.math import clamp, clamp_unit, heading_degrees, is_finite

__all__ = [
    "clamp",
    "clamp_unit",
    "dumps",
    "heading_degrees",
    "is_finite",
    "read_json",
]
