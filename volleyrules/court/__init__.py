"""Court geometry: coordinate spaces, tolerance comparisons and slot topology."""

from volleyrules.court.coordinate import (
    COURT_BOUNDS,
    COURT_LENGTH,
    COURT_WIDTH,
    EXTENDED_BOUNDS,
    SERVICE_ZONE_END,
    TOLERANCE,
    CoordinateTransformer,
    CourtBounds,
    default_transformer,
    is_valid_position,
)
from volleyrules.court.neighbors import (
    BACK_ROW,
    COLUMN_PAIRS,
    FRONT_ROW,
    all_neighbors,
    constraint_dependencies,
    counterpart,
    dependents_of,
    left_neighbor,
    right_neighbor,
)

__all__ = [
    "BACK_ROW",
    "COLUMN_PAIRS",
    "COURT_BOUNDS",
    "COURT_LENGTH",
    "COURT_WIDTH",
    "CoordinateTransformer",
    "CourtBounds",
    "EXTENDED_BOUNDS",
    "FRONT_ROW",
    "SERVICE_ZONE_END",
    "TOLERANCE",
    "all_neighbors",
    "constraint_dependencies",
    "counterpart",
    "default_transformer",
    "dependents_of",
    "is_valid_position",
    "left_neighbor",
    "right_neighbor",
]
