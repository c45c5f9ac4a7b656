"""
Pydantic schemas for formation payloads and engine results.

Plain-data boundary for callers that exchange JSON:
- Formation input (screen positions + rotation map + server slot)
- Overlap results and position bounds as JSON-ready dicts
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict

from volleyrules.core.models import OverlapResult, PositionBounds, Violation
from volleyrules.convert import FormationPosition


class ScreenPoint(BaseModel):
    """A position in rendering units."""
    x: float
    y: float


class FormationSchema(BaseModel):
    """A stored formation as sent by the caller."""
    positions: Dict[str, ScreenPoint] = Field(..., description="Screen positions keyed by player id")
    rotation: Dict[int, str] = Field(..., description="Rotation slot (1-6) -> player id")
    server_slot: int = Field(1, ge=1, le=6, description="Slot that is serving")

    def formation_positions(self) -> Dict[str, FormationPosition]:
        return {
            player_id: FormationPosition(x=point.x, y=point.y)
            for player_id, point in self.positions.items()
        }


class PointSchema(BaseModel):
    """A rules-space point in meters."""
    x: float
    y: float


class ViolationSchema(BaseModel):
    """A single rule failure."""
    code: str
    slots: List[int]
    message: str
    coordinates: Optional[Dict[int, PointSchema]] = None

    @classmethod
    def from_violation(cls, violation: Violation) -> "ViolationSchema":
        coordinates = None
        if violation.coordinates is not None:
            coordinates = {
                int(slot): PointSchema(x=point.x, y=point.y)
                for slot, point in violation.coordinates.items()
            }
        return cls(
            code=violation.code.value,
            slots=[int(s) for s in violation.slots],
            message=violation.message,
            coordinates=coordinates,
        )


class OverlapResultSchema(BaseModel):
    """Outcome of validating a lineup."""
    is_legal: bool
    violations: List[ViolationSchema] = []

    @classmethod
    def from_result(cls, result: OverlapResult) -> "OverlapResultSchema":
        return cls(
            is_legal=result.is_legal,
            violations=[ViolationSchema.from_violation(v) for v in result.violations],
        )


class PositionBoundsSchema(BaseModel):
    """Movable rectangle for one slot, in meters."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    is_constrained: bool = False
    constraint_reasons: List[str] = []

    @classmethod
    def from_bounds(cls, bounds: PositionBounds) -> "PositionBoundsSchema":
        return cls(
            min_x=bounds.min_x,
            max_x=bounds.max_x,
            min_y=bounds.min_y,
            max_y=bounds.max_y,
            is_constrained=bounds.is_constrained,
            constraint_reasons=list(bounds.constraint_reasons),
        )
