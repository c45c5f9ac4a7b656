"""Overlap (rotation fault) validation.

At the moment of serve:
    - Front row order: LF < MF < RF (left to right)
    - Back row order: LB < MB < RB (left to right)
    - Each front player is closer to the net than the back player
      in the same column

Comparisons go through the tolerance helpers, so two players less than
3 cm apart on an axis count as level, which is a violation. The server
is exempt: any pair that includes the server is skipped.

Rule failures are returned as Violation entries, never raised.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence

from volleyrules.core.enums import RotationSlot
from volleyrules.core.models import (
    OverlapResult,
    PlayerState,
    Point,
    Violation,
    ViolationCode,
    slot_map,
)
from volleyrules.court.coordinate import TOLERANCE
from volleyrules.court.neighbors import BACK_ROW, COLUMN_PAIRS, FRONT_ROW
from volleyrules.court.tolerance import is_less

logger = logging.getLogger(__name__)

_ALL_SLOTS = frozenset(range(1, 7))


@dataclass
class ViolationSummary:
    """Aggregate view over a list of violations."""

    total_violations: int
    violation_types: dict[str, int] = field(default_factory=dict)
    affected_slots: list[int] = field(default_factory=list)
    severity: str = "none"  # none | minor | major | critical

    def to_dict(self) -> dict:
        return {
            "total_violations": self.total_violations,
            "violation_types": dict(self.violation_types),
            "affected_slots": list(self.affected_slots),
            "severity": self.severity,
        }


# =============================================================================
# Validation
# =============================================================================

def validate_lineup(players: Iterable[PlayerState]) -> OverlapResult:
    """Check a lineup against the overlap rules.

    Args:
        players: The six players (a Lineup or any iterable of PlayerState)

    Returns:
        OverlapResult with every violation found
    """
    players = list(players)
    violations = _structural_violations(players)

    if len(players) != 6:
        return OverlapResult.of(violations)

    slots = {p.slot for p in players}
    if slots != _ALL_SLOTS:
        logger.debug("Lineup slots %s are not a permutation of 1-6", sorted(slots, key=repr))
        return OverlapResult.of(violations)

    by_slot = slot_map(players)
    violations.extend(_row_order_violations(by_slot, FRONT_ROW, "Front"))
    violations.extend(_row_order_violations(by_slot, BACK_ROW, "Back"))
    violations.extend(_front_back_violations(by_slot))
    return OverlapResult.of(violations)


def _structural_violations(players: Sequence[PlayerState]) -> list[Violation]:
    if len(players) != 6:
        logger.debug("Lineup has %d players", len(players))
        return [Violation(
            code=ViolationCode.INVALID_LINEUP,
            slots=tuple(p.slot for p in players),
            message=f"Invalid lineup: expected 6 players, got {len(players)}",
        )]

    violations = []

    counts = Counter(p.slot for p in players)
    duplicates = sorted((s for s, n in counts.items() if n > 1), key=repr)
    if duplicates:
        violations.append(Violation(
            code=ViolationCode.INVALID_LINEUP,
            slots=tuple(duplicates),
            message="Invalid lineup: duplicate rotation slots found: "
                    + ", ".join(str(s) for s in duplicates),
        ))

    invalid = sorted({p.slot for p in players if not RotationSlot.is_valid(p.slot)}, key=repr)
    if invalid:
        violations.append(Violation(
            code=ViolationCode.INVALID_LINEUP,
            slots=tuple(invalid),
            message="Invalid lineup: invalid rotation slots: "
                    + ", ".join(repr(s) for s in invalid),
        ))

    servers = [p for p in players if p.is_server]
    if len(servers) != 1:
        violations.append(Violation(
            code=ViolationCode.MULTIPLE_SERVERS,
            slots=tuple(p.slot for p in servers),
            message=f"Invalid lineup: expected exactly 1 server, got {len(servers)}",
            coordinates=_coordinates(servers) if servers else None,
        ))

    return violations


def _row_order_violations(
    by_slot: Mapping[int, PlayerState],
    row: Sequence[RotationSlot],
    row_name: str,
) -> list[Violation]:
    violations = []
    for left_slot, right_slot in zip(row, row[1:]):
        left = by_slot[left_slot]
        right = by_slot[right_slot]
        if left.is_server or right.is_server:
            continue
        if not is_less(left.x, right.x):
            violations.append(Violation(
                code=ViolationCode.ROW_ORDER,
                slots=(int(left_slot), int(right_slot)),
                message=(
                    f"{row_name} row order violation: "
                    f"{left_slot.full_name} ({left.display_name}) must be to the left of "
                    f"{right_slot.full_name} ({right.display_name})"
                ),
                coordinates=_coordinates([left, right]),
            ))
    return violations


def _front_back_violations(by_slot: Mapping[int, PlayerState]) -> list[Violation]:
    violations = []
    for front_slot, back_slot in COLUMN_PAIRS:
        front = by_slot[front_slot]
        back = by_slot[back_slot]
        if front.is_server or back.is_server:
            continue
        if not is_less(front.y, back.y):
            violations.append(Violation(
                code=ViolationCode.FRONT_BACK,
                slots=(int(front_slot), int(back_slot)),
                message=(
                    "Front/back order violation: "
                    f"{front_slot.full_name} ({front.display_name}) must be in front of "
                    f"{back_slot.full_name} ({back.display_name})"
                ),
                coordinates=_coordinates([front, back]),
            ))
    return violations


def _coordinates(players: Iterable[PlayerState]) -> dict[int, Point]:
    return {p.slot: Point(p.x, p.y) for p in players}


# =============================================================================
# Explanations
# =============================================================================

def _slot_name(slot: int) -> str:
    if RotationSlot.is_valid(slot):
        return RotationSlot(slot).full_name
    return f"Slot {slot}"


def _player_name(slot: int, by_slot: Mapping[int, PlayerState]) -> str:
    player = by_slot.get(slot)
    return f"{player.display_name} (slot {slot})" if player else f"slot {slot}"


def _at(point: Point) -> str:
    return f"({point.x:.2f}, {point.y:.2f})"


def explain_violation(violation: Violation, players: Iterable[PlayerState]) -> str:
    """Human readable explanation naming the players and their coordinates."""
    by_slot = slot_map(players)

    if violation.code in (ViolationCode.ROW_ORDER, ViolationCode.FRONT_BACK) \
            and len(violation.slots) == 2:
        first, second = violation.slots
        relation = ("must be to the left of" if violation.code is ViolationCode.ROW_ORDER
                    else "must be in front of")
        lhs = f"{_slot_name(first)} {_player_name(first, by_slot)}"
        rhs = f"{_slot_name(second)} {_player_name(second, by_slot)}"
        coords = violation.coordinates
        if coords and first in coords and second in coords:
            return f"{lhs} at {_at(coords[first])} {relation} {rhs} at {_at(coords[second])}"
        return f"{lhs} {relation} {rhs}"

    if violation.code is ViolationCode.MULTIPLE_SERVERS:
        if not violation.slots:
            return "Exactly one player must be the server. Currently serving: nobody"
        names = ", ".join(_player_name(s, by_slot) for s in violation.slots)
        return f"Only one player can be the server. Currently serving: {names}"

    return violation.message


def is_position_valid(
    slot: int,
    point: Point,
    players: Iterable[PlayerState],
    is_server: bool = False,
) -> bool:
    """Would the lineup be legal with ``slot`` moved to ``point``?

    The other five players keep their places. When they do not make up
    a full lineup there is nothing to check against, so the move is
    allowed.
    """
    test_player = PlayerState(
        id="test",
        display_name="Test Player",
        slot=slot,
        x=point.x,
        y=point.y,
        is_server=is_server,
    )
    others = [p for p in players if p.slot != slot]
    lineup = [test_player] + others
    if len(lineup) != 6:
        return True
    return validate_lineup(lineup).is_legal


# =============================================================================
# Detailed Reporting
# =============================================================================

def detailed_violations(players: Iterable[PlayerState]) -> list[Violation]:
    """Validate and return violations with measured separations in the message."""
    players = list(players)
    by_slot = slot_map(players)
    return [enhance_violation(v, by_slot) for v in validate_lineup(players).violations]


def enhance_violation(violation: Violation, by_slot: Mapping[int, PlayerState]) -> Violation:
    code = violation.code

    if code in (ViolationCode.ROW_ORDER, ViolationCode.FRONT_BACK):
        if len(violation.slots) != 2:
            return violation
        first, second = (by_slot.get(s) for s in violation.slots)
        if first is None or second is None:
            return violation
        if code is ViolationCode.ROW_ORDER:
            separation = second.x - first.x
            message = (
                f"Row order violation: {_slot_name(first.slot)} ({first.display_name}) "
                f"at x={first.x:.2f}m must be to the left of "
                f"{_slot_name(second.slot)} ({second.display_name}) at x={second.x:.2f}m."
            )
        else:
            separation = second.y - first.y
            message = (
                f"Front/back violation: {_slot_name(first.slot)} ({first.display_name}) "
                f"at y={first.y:.2f}m must be in front of "
                f"{_slot_name(second.slot)} ({second.display_name}) at y={second.y:.2f}m."
            )
        message += (
            f" Current separation: {separation:.3f}m "
            f"(minimum required: {TOLERANCE:.3f}m)"
        )
        return Violation(code, violation.slots, message, _coordinates([first, second]))

    present = [by_slot[s] for s in violation.slots if s in by_slot]
    coordinates = _coordinates(present) if present else violation.coordinates

    if code is ViolationCode.MULTIPLE_SERVERS:
        if not violation.slots:
            message = "No server designated. Exactly one player must be the server at serve contact."
        else:
            details = ", ".join(_player_name(s, by_slot) for s in violation.slots)
            message = (
                f"Multiple servers detected: {details}. "
                "Only one player can be designated as the server at serve contact."
            )
        return Violation(code, violation.slots, message, coordinates)

    return Violation(code, violation.slots, violation.message, coordinates)


def violation_summary(violations: Sequence[Violation]) -> ViolationSummary:
    """Count violations by type and grade their severity.

    Severity: none (legal), minor (a single row order fault), major
    (up to two faults), critical (more).
    """
    types: Counter[str] = Counter(v.code.value for v in violations)
    affected = sorted({int(s) for v in violations for s in v.slots
                       if isinstance(s, int)})

    total = len(violations)
    if total == 0:
        severity = "none"
    elif total == 1 and violations[0].code is ViolationCode.ROW_ORDER:
        severity = "minor"
    elif total <= 2:
        severity = "major"
    else:
        severity = "critical"

    return ViolationSummary(
        total_violations=total,
        violation_types=dict(types),
        affected_slots=affected,
        severity=severity,
    )


_TIPS = {
    ViolationCode.ROW_ORDER.value:
        "Tip: Players in the same row must be positioned left to right in their designated order.",
    ViolationCode.FRONT_BACK.value:
        "Tip: Front row players must be positioned closer to the net than their back row counterparts.",
    ViolationCode.MULTIPLE_SERVERS.value:
        "Tip: Only one player can be designated as the server at the moment of serve contact.",
}


def user_friendly_messages(violations: Sequence[Violation]) -> list[str]:
    """Numbered messages for display, followed by a tip per violation type."""
    if not violations:
        return ["All players are positioned correctly according to volleyball overlap rules."]

    summary = violation_summary(violations)
    noun = "violation" if summary.total_violations == 1 else "violations"
    messages = [f"{summary.total_violations} positioning {noun} detected:"]
    messages.extend(f"{i}. {v.message}" for i, v in enumerate(violations, start=1))
    messages.extend(tip for code, tip in _TIPS.items() if code in summary.violation_types)
    return messages


def suggested_fix(violation: Violation, players: Iterable[PlayerState]) -> Optional[str]:
    """One-line suggestion for resolving a violation."""
    by_slot = slot_map(players)
    code = violation.code

    if code in (ViolationCode.ROW_ORDER, ViolationCode.FRONT_BACK) and len(violation.slots) == 2:
        first_slot, second_slot = violation.slots
        first = by_slot.get(first_slot)
        second = by_slot.get(second_slot)
        if first is None or second is None:
            return None
        first_name = f"{_slot_name(first_slot)} ({first.display_name})"
        second_name = f"{_slot_name(second_slot)} ({second.display_name})"

        gap = abs(second.x - first.x) if code is ViolationCode.ROW_ORDER else abs(second.y - first.y)
        if gap < TOLERANCE:
            return f"Increase separation between {first_name} and {second_name} to at least 3cm."
        if code is ViolationCode.ROW_ORDER:
            return f"Move {first_name} to the left of {second_name}."
        return f"Move {first_name} closer to the net than {second_name}."

    if code is ViolationCode.MULTIPLE_SERVERS:
        return "Designate only one player as the server."
    if code is ViolationCode.INVALID_LINEUP:
        return "Ensure exactly 6 players with unique rotation slots (1-6)."
    return None
