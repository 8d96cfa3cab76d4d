"""Math utilities for common operations."""

from __future__ import annotations

import math
from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def clamp_unit(value: float) -> float:
    """Clamp value to [0, 1] and return a plain float."""
    return float(clamp(value, 0.0, 1.0))


def is_finite(*values: float) -> bool:
    """Return True if every value is a finite number."""
    return all(math.isfinite(v) for v in values)


def heading_degrees(dx: float, dy: float) -> float:
    """Direction of the vector (dx, dy) in degrees, 0 pointing along +x.

    Screen coordinates have y growing downwards, so positive angles turn
    clockwise on screen, matching CSS ``rotate()``.
    """
    return math.degrees(math.atan2(dy, dx))
