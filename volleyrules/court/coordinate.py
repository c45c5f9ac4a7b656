"""Coordinate system conventions and conversion utilities.

Rules coordinate system (meters, one team's half of the court):
    Origin (0, 0) = intersection of the left sideline and the net

    X-axis (lateral):
        0.0 = Left sideline (from the team's perspective, facing the net)
        9.0 = Right sideline

    Y-axis (depth):
        0.0 = Net
        9.0 = Endline
        9.0 - 11.0 = Service zone behind the endline

Rendering coordinate system:
    A fixed logical box supplied by the caller (600 x 360 by default).
    The two systems differ only by an independent scale on each axis,
    there is no rotation or offset.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from volleyrules.core.models.player import Point


# =============================================================================
# Court Dimension Constants
# =============================================================================

COURT_WIDTH = 9.0    # meters, sideline to sideline
COURT_LENGTH = 9.0   # meters, net to endline

NET_Y = 0.0
ENDLINE_Y = 9.0
ATTACK_LINE_Y = 3.0

# Service zone runs from the endline to 2 m behind it
SERVICE_ZONE_START = ENDLINE_Y
SERVICE_ZONE_END = 11.0

LEFT_SIDELINE_X = 0.0
RIGHT_SIDELINE_X = 9.0
CENTER_LINE_X = 4.5

# 3 cm: two players closer than this are treated as level with each other
TOLERANCE = 0.03


# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_SCREEN_WIDTH = 600.0
DEFAULT_SCREEN_HEIGHT = 360.0


# =============================================================================
# Bounds
# =============================================================================

@dataclass(frozen=True)
class CourtBounds:
    """A rectangular region in one coordinate space."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def contains(self, x: float, y: float) -> bool:
        """Check if point is within this region (edges inclusive)."""
        return (self.min_x <= x <= self.max_x and
                self.min_y <= y <= self.max_y)

    def clamp(self, x: float, y: float) -> Point:
        """Nearest point inside the region."""
        return Point(
            max(self.min_x, min(self.max_x, x)),
            max(self.min_y, min(self.max_y, y)),
        )

    @property
    def is_well_formed(self) -> bool:
        return self.min_x <= self.max_x and self.min_y <= self.max_y


# Playing court only
COURT_BOUNDS = CourtBounds(
    min_x=LEFT_SIDELINE_X, max_x=RIGHT_SIDELINE_X,
    min_y=NET_Y, max_y=ENDLINE_Y,
)

# Playing court plus the service zone
EXTENDED_BOUNDS = CourtBounds(
    min_x=LEFT_SIDELINE_X, max_x=RIGHT_SIDELINE_X,
    min_y=NET_Y, max_y=SERVICE_ZONE_END,
)


def is_within_court_bounds(x: float, y: float) -> bool:
    return COURT_BOUNDS.contains(x, y)


def is_within_extended_bounds(x: float, y: float) -> bool:
    return EXTENDED_BOUNDS.contains(x, y)


def is_in_service_zone(x: float, y: float) -> bool:
    """Check if a point lies in the service zone behind the endline."""
    return (LEFT_SIDELINE_X <= x <= RIGHT_SIDELINE_X and
            SERVICE_ZONE_START <= y <= SERVICE_ZONE_END)


def is_valid_position(x: float, y: float, allow_service_zone: bool = False) -> bool:
    """Check a rules-space point against the court.

    Args:
        x: Lateral position in meters
        y: Depth in meters
        allow_service_zone: Accept y up to 11 (servers only)

    Returns:
        True if the point is on the court (or in the service zone when allowed)
    """
    if allow_service_zone:
        return is_within_extended_bounds(x, y)
    return is_within_court_bounds(x, y)


def normalize_coordinates(x: float, y: float, allow_service_zone: bool = False) -> Point:
    """Clamp a rules-space point onto the court (or court + service zone)."""
    bounds = EXTENDED_BOUNDS if allow_service_zone else COURT_BOUNDS
    return bounds.clamp(x, y)


def clamp_to_bounds(x: float, y: float, bounds: CourtBounds) -> Point:
    return bounds.clamp(x, y)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


# =============================================================================
# Coordinate Conversion
# =============================================================================

class CoordinateTransformer:
    """Linear mapping between the rendering box and rules-space meters.

    Each axis is scaled independently:
        x_rules = x_screen * COURT_WIDTH / screen_width
        y_rules = y_screen * COURT_LENGTH / screen_height

    Nothing is clipped; points outside the box map outside the court.
    Non-finite inputs pass through unchanged (NaN stays NaN).
    """

    def __init__(
        self,
        screen_width: float = DEFAULT_SCREEN_WIDTH,
        screen_height: float = DEFAULT_SCREEN_HEIGHT,
    ):
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(
                f"Rendering box must have positive size, got {screen_width}x{screen_height}"
            )
        self.screen_width = float(screen_width)
        self.screen_height = float(screen_height)

    def __repr__(self) -> str:
        return f"CoordinateTransformer({self.screen_width:g}x{self.screen_height:g})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordinateTransformer):
            return NotImplemented
        return (self.screen_width == other.screen_width and
                self.screen_height == other.screen_height)

    def __hash__(self) -> int:
        return hash((self.screen_width, self.screen_height))

    @property
    def screen_bounds(self) -> CourtBounds:
        return CourtBounds(0.0, self.screen_width, 0.0, self.screen_height)

    def scaling_factors(self) -> tuple[float, float]:
        """Screen -> rules scale on (x, y)."""
        return (COURT_WIDTH / self.screen_width, COURT_LENGTH / self.screen_height)

    def screen_to_rules(self, sx: float, sy: float) -> Point:
        """Convert a rendering-space point to rules-space meters.

        Args:
            sx: X in rendering units (0 to screen_width)
            sy: Y in rendering units (0 to screen_height)

        Returns:
            Point in meters
        """
        return Point(
            sx * COURT_WIDTH / self.screen_width,
            sy * COURT_LENGTH / self.screen_height,
        )

    def rules_to_screen(self, x: float, y: float) -> Point:
        """Convert rules-space meters to a rendering-space point."""
        return Point(
            x * self.screen_width / COURT_WIDTH,
            y * self.screen_height / COURT_LENGTH,
        )

    def screen_bounds_to_rules(self, bounds: CourtBounds) -> CourtBounds:
        top_left = self.screen_to_rules(bounds.min_x, bounds.min_y)
        bottom_right = self.screen_to_rules(bounds.max_x, bounds.max_y)
        return CourtBounds(top_left.x, bottom_right.x, top_left.y, bottom_right.y)

    def rules_bounds_to_screen(self, bounds: CourtBounds) -> CourtBounds:
        top_left = self.rules_to_screen(bounds.min_x, bounds.min_y)
        bottom_right = self.rules_to_screen(bounds.max_x, bounds.max_y)
        return CourtBounds(top_left.x, bottom_right.x, top_left.y, bottom_right.y)

    def is_valid_screen_position(self, sx: float, sy: float) -> bool:
        return self.screen_bounds.contains(sx, sy)


_default_transformer: Optional[CoordinateTransformer] = None


def default_transformer() -> CoordinateTransformer:
    """Transformer for the rendering box configured in EngineConfig."""
    global _default_transformer
    from volleyrules.config import get_config

    config = get_config()
    if (_default_transformer is None or
            _default_transformer.screen_width != config.screen_width or
            _default_transformer.screen_height != config.screen_height):
        _default_transformer = CoordinateTransformer(config.screen_width, config.screen_height)
    return _default_transformer
