"""Tolerance-aware comparisons for player coordinates.

Two players within TOLERANCE (3 cm) of each other on an axis are treated
as level: neither is "left of" or "in front of" the other. A separation
of exactly TOLERANCE is enough to establish an order.

Every function takes an optional ``epsilon`` to override the default.
"""

from __future__ import annotations

from typing import Literal, Optional

from volleyrules.core.models.player import Point
from volleyrules.court.coordinate import TOLERANCE

# Absorbs binary rounding in differences such as 2.03 - 2.0
_FLOAT_SLACK = 1e-9


def _eps(epsilon: Optional[float]) -> float:
    return TOLERANCE if epsilon is None else epsilon


def is_equal(a: float, b: float, epsilon: Optional[float] = None) -> bool:
    """True when a and b are too close to be ordered."""
    return abs(a - b) < _eps(epsilon) - _FLOAT_SLACK


def is_less(a: float, b: float, epsilon: Optional[float] = None) -> bool:
    """True when a is clearly below b (by at least epsilon)."""
    return b - a >= _eps(epsilon) - _FLOAT_SLACK


def is_greater(a: float, b: float, epsilon: Optional[float] = None) -> bool:
    """True when a is clearly above b (by at least epsilon)."""
    return a - b >= _eps(epsilon) - _FLOAT_SLACK


def is_less_or_equal(a: float, b: float, epsilon: Optional[float] = None) -> bool:
    return a <= b + _eps(epsilon)


def is_greater_or_equal(a: float, b: float, epsilon: Optional[float] = None) -> bool:
    return a >= b - _eps(epsilon)


def is_within_range(
    value: float, low: float, high: float, epsilon: Optional[float] = None
) -> bool:
    """Check low - eps <= value <= high + eps."""
    return (is_greater_or_equal(value, low, epsilon) and
            is_less_or_equal(value, high, epsilon))


def clamp_with_tolerance(
    value: float, low: float, high: float, epsilon: Optional[float] = None
) -> float:
    """Clamp a value into [low - eps, high + eps].

    Values more than eps outside the range land exactly on the nearest
    edge; values within eps of an edge are returned unchanged.
    """
    eps = _eps(epsilon)
    if value < low - eps:
        return low
    if value > high + eps:
        return high
    return value


def apply_tolerance(
    value: float, direction: Literal["min", "max"], epsilon: Optional[float] = None
) -> float:
    """Shift a value down ("min") or up ("max") by epsilon."""
    eps = _eps(epsilon)
    return value - eps if direction == "min" else value + eps


def round_to_precision(value: float, precision: int = 3) -> float:
    """Round to a number of decimals (3 = millimeters)."""
    return round(value, precision)


def compare(a: float, b: float, epsilon: Optional[float] = None) -> int:
    """Three-way compare: -1 if a < b, 0 if level, 1 if a > b."""
    if is_less(a, b, epsilon):
        return -1
    if is_greater(a, b, epsilon):
        return 1
    return 0


def is_significant_difference(a: float, b: float, epsilon: Optional[float] = None) -> bool:
    return not is_equal(a, b, epsilon)


def points_equal(p1: Point, p2: Point, epsilon: Optional[float] = None) -> bool:
    """True when both axes are level within tolerance."""
    return is_equal(p1.x, p2.x, epsilon) and is_equal(p1.y, p2.y, epsilon)
