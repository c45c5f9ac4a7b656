"""
Volleyball positioning rules engine.

Checks six-player lineups against the overlap (rotation fault) rules,
computes how far a player can be dragged before causing a fault, and
converts between the caller's rendering box and court meters.

Quick start:
    from volleyrules import PlayerState, RulesEngine

    engine = RulesEngine()
    result = engine.validate_lineup(players)
    bounds = engine.get_player_constraints(3, players)
"""

from volleyrules.cache import PerformanceCache, lineup_hash
from volleyrules.config import EngineConfig, get_config
from volleyrules.core.enums import Column, Role, RotationSlot, Row
from volleyrules.core.models import (
    Lineup,
    OverlapResult,
    PlayerState,
    Point,
    PositionBounds,
    Violation,
    ViolationCode,
)
from volleyrules.court.coordinate import CoordinateTransformer
from volleyrules.engine import RulesEngine
from volleyrules.errors import (
    InvalidSlotError,
    LineupShapeError,
    SlotNotFoundError,
    VolleyRulesError,
)
from volleyrules.rules import (
    analyze_lineup,
    calculate_valid_bounds,
    snap_to_valid_position,
    validate_lineup,
)

__version__ = "0.1.0"

__all__ = [
    "Column",
    "CoordinateTransformer",
    "EngineConfig",
    "InvalidSlotError",
    "Lineup",
    "LineupShapeError",
    "OverlapResult",
    "PerformanceCache",
    "PlayerState",
    "Point",
    "PositionBounds",
    "Role",
    "RotationSlot",
    "Row",
    "RulesEngine",
    "SlotNotFoundError",
    "Violation",
    "ViolationCode",
    "VolleyRulesError",
    "analyze_lineup",
    "calculate_valid_bounds",
    "get_config",
    "lineup_hash",
    "snap_to_valid_position",
    "validate_lineup",
]
