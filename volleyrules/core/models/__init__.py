"""Core rules engine models."""

from volleyrules.core.models.lineup import Lineup
from volleyrules.core.models.player import PlayerState, Point, slot_map
from volleyrules.core.models.results import (
    OverlapResult,
    PositionBounds,
    Violation,
    ViolationCode,
)

__all__ = [
    "Lineup",
    "OverlapResult",
    "PlayerState",
    "Point",
    "PositionBounds",
    "Violation",
    "ViolationCode",
    "slot_map",
]
