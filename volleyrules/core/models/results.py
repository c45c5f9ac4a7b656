"""Validation and constraint result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from volleyrules.core.models.player import Point


class ViolationCode(str, Enum):
    """Types of violations the validator reports."""

    ROW_ORDER = "ROW_ORDER"                # Wrong left-to-right order within a row
    FRONT_BACK = "FRONT_BACK"              # Front player not ahead of back counterpart
    MULTIPLE_SERVERS = "MULTIPLE_SERVERS"  # Server count is not exactly one
    INVALID_LINEUP = "INVALID_LINEUP"      # Wrong player count, bad or duplicate slots


@dataclass(frozen=True)
class Violation:
    """A single rule failure.

    ``slots`` lists the slots involved in rule order: for ROW_ORDER the
    slot that must be further left comes first, for FRONT_BACK the front
    slot comes first.
    """

    code: ViolationCode
    slots: tuple[int, ...]
    message: str
    coordinates: Optional[Mapping[int, Point]] = None

    def to_dict(self) -> dict:
        data = {
            "code": self.code.value,
            "slots": [int(s) for s in self.slots],
            "message": self.message,
        }
        if self.coordinates is not None:
            data["coordinates"] = {
                int(slot): {"x": point.x, "y": point.y}
                for slot, point in self.coordinates.items()
            }
        return data


@dataclass(frozen=True)
class OverlapResult:
    """Outcome of validating a lineup."""

    is_legal: bool
    violations: tuple[Violation, ...] = ()

    def __post_init__(self) -> None:
        if self.is_legal != (len(self.violations) == 0):
            raise ValueError("is_legal must be True exactly when there are no violations")

    @classmethod
    def of(cls, violations) -> OverlapResult:
        """Build a result whose legality follows from the violation list."""
        violations = tuple(violations)
        return cls(is_legal=not violations, violations=violations)

    def codes(self) -> list[ViolationCode]:
        return [v.code for v in self.violations]

    def to_dict(self) -> dict:
        return {
            "is_legal": self.is_legal,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass(frozen=True)
class PositionBounds:
    """Axis-aligned rectangle a slot may occupy given the rest of the lineup."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    is_constrained: bool = False
    constraint_reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "max_x": self.max_x,
            "min_y": self.min_y,
            "max_y": self.max_y,
            "is_constrained": self.is_constrained,
            "constraint_reasons": list(self.constraint_reasons),
        }
