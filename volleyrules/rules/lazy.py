"""Deferred violation analysis.

Validation itself is cheap; building explanations, fix suggestions and
display messages is not, and most drag frames never show them. The
objects here validate eagerly and format on first access only.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from volleyrules.core.enums import RotationSlot
from volleyrules.core.models import (
    OverlapResult,
    PlayerState,
    Point,
    Violation,
    ViolationCode,
    slot_map,
)
from volleyrules.rules import overlap

if TYPE_CHECKING:
    from volleyrules.cache import PerformanceCache


_SEVERITY = {
    ViolationCode.INVALID_LINEUP: "critical",
    ViolationCode.MULTIPLE_SERVERS: "major",
    ViolationCode.FRONT_BACK: "major",
    ViolationCode.ROW_ORDER: "minor",
}


class LazyViolation:
    """A violation whose descriptive fields are computed on demand."""

    def __init__(self, violation: Violation, players: tuple[PlayerState, ...]):
        self.violation = violation
        self._players = players

    def __repr__(self) -> str:
        return f"LazyViolation({self.code.value}, slots={list(self.slots)})"

    @property
    def code(self) -> ViolationCode:
        return self.violation.code

    @property
    def slots(self) -> tuple[int, ...]:
        return self.violation.slots

    @cached_property
    def message(self) -> str:
        return overlap.explain_violation(self.violation, self._players)

    @cached_property
    def detailed_message(self) -> str:
        by_slot = slot_map(self._players)
        return overlap.enhance_violation(self.violation, by_slot).message

    @cached_property
    def coordinates(self) -> Mapping[int, Point]:
        if self.violation.coordinates is not None:
            return dict(self.violation.coordinates)
        by_slot = slot_map(self._players)
        return {s: by_slot[s].position for s in self.slots if s in by_slot}

    @cached_property
    def suggested_fix(self) -> Optional[str]:
        return overlap.suggested_fix(self.violation, self._players)

    @cached_property
    def affected_players(self) -> list[PlayerState]:
        by_slot = slot_map(self._players)
        return [by_slot[s] for s in self.slots if s in by_slot]

    @cached_property
    def severity(self) -> str:
        return _SEVERITY.get(self.code, "major")

    def to_dict(self) -> dict:
        data = self.violation.to_dict()
        data["explanation"] = self.message
        data["suggested_fix"] = self.suggested_fix
        data["severity"] = self.severity
        return data


class LazyOverlapResult:
    """Overlap result with eager legality and deferred presentation."""

    def __init__(self, result: OverlapResult, players: Iterable[PlayerState]):
        self.result = result
        self.players = tuple(players)
        self.violations = [LazyViolation(v, self.players) for v in result.violations]

    def __repr__(self) -> str:
        return f"LazyOverlapResult(is_legal={self.is_legal}, violations={len(self.violations)})"

    @property
    def is_legal(self) -> bool:
        return self.result.is_legal

    @cached_property
    def user_friendly_messages(self) -> list[str]:
        return overlap.user_friendly_messages(self.result.violations)

    @cached_property
    def summary(self) -> overlap.ViolationSummary:
        return overlap.violation_summary(self.result.violations)

    @cached_property
    def affected_slots(self) -> list[RotationSlot]:
        return [RotationSlot(s) for s in self.summary.affected_slots
                if RotationSlot.is_valid(s)]

    def violations_for_slot(self, slot: int) -> list[LazyViolation]:
        return [v for v in self.violations if slot in v.slots]

    def to_dict(self) -> dict:
        return {
            "is_legal": self.is_legal,
            "violations": [v.to_dict() for v in self.violations],
            "summary": self.summary.to_dict(),
        }


def analyze_lineup(
    players: Iterable[PlayerState],
    cache: Optional[PerformanceCache] = None,
) -> LazyOverlapResult:
    """Validate a lineup and wrap the result for deferred formatting.

    Args:
        players: The lineup to check
        cache: Optional cache for the validation step

    Returns:
        LazyOverlapResult
    """
    players = tuple(players)
    if cache is not None:
        result = cache.get_validation(players, overlap.validate_lineup)
    else:
        result = overlap.validate_lineup(players)
    return LazyOverlapResult(result, players)
