"""Movement bounds for a player being repositioned.

Given where everybody else stands, compute the rectangle a slot can
occupy without creating an overlap fault. Each constraint comes from one
neighbor:

    left neighbor   -> min_x = neighbor.x + TOLERANCE
    right neighbor  -> max_x = neighbor.x - TOLERANCE
    back counterpart (for a front slot)  -> max_y = counterpart.y - TOLERANCE
    front counterpart (for a back slot)  -> min_y = counterpart.y + TOLERANCE

A neighbor who is the server imposes nothing, and the server itself may
go anywhere on the court or in the service zone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from volleyrules.core.enums import RotationSlot
from volleyrules.core.models import PlayerState, Point, PositionBounds, slot_map
from volleyrules.court.coordinate import (
    COURT_BOUNDS,
    EXTENDED_BOUNDS,
    TOLERANCE,
)
from volleyrules.court.neighbors import all_neighbors
from volleyrules.court.tolerance import (
    apply_tolerance,
    clamp_with_tolerance,
    is_less,
    is_within_range,
)

logger = logging.getLogger(__name__)

SERVER_EXEMPTION_REASON = "Server exemption: no overlap constraints apply"
CONFLICT_REASON = "Conflicting constraints detected"


class ConstraintKind(str, Enum):
    """Which side of the source player the moving player must stay on."""

    RIGHT_OF = "right_of"        # bounds min_x
    LEFT_OF = "left_of"          # bounds max_x
    IN_FRONT_OF = "in_front_of"  # bounds max_y
    BEHIND = "behind"            # bounds min_y


@dataclass(frozen=True)
class Constraint:
    """One neighbor's limit on the moving slot."""

    kind: ConstraintKind
    value: float          # the neighbor's coordinate on the constrained axis
    reason: str
    source_slot: RotationSlot

    @property
    def limit(self) -> float:
        """The bound this constraint puts on the moving slot."""
        if self.kind in (ConstraintKind.RIGHT_OF, ConstraintKind.BEHIND):
            return apply_tolerance(self.value, "max")
        return apply_tolerance(self.value, "min")

    def is_satisfied_by(self, point: Point) -> bool:
        if self.kind is ConstraintKind.RIGHT_OF:
            return is_less(self.value, point.x)
        if self.kind is ConstraintKind.LEFT_OF:
            return is_less(point.x, self.value)
        if self.kind is ConstraintKind.IN_FRONT_OF:
            return is_less(point.y, self.value)
        return is_less(self.value, point.y)


def _reason(kind: ConstraintKind, source: RotationSlot) -> str:
    phrase = {
        ConstraintKind.RIGHT_OF: "right of",
        ConstraintKind.LEFT_OF: "left of",
        ConstraintKind.IN_FRONT_OF: "in front of",
        ConstraintKind.BEHIND: "behind",
    }[kind]
    return f"Must be {phrase} {source.label} (slot {int(source)})"


def _as_slot_map(players: Iterable[PlayerState] | Mapping[int, PlayerState]) -> dict:
    if isinstance(players, Mapping):
        return dict(players)
    return slot_map(players)


# =============================================================================
# Constraint Collection
# =============================================================================

def collect_constraints(
    slot: int,
    players: Iterable[PlayerState] | Mapping[int, PlayerState],
) -> list[Constraint]:
    """List the constraints neighbors put on ``slot``.

    Neighbors missing from ``players`` and neighbors who are the server
    contribute nothing. The front/back constraint only applies when the
    player currently in ``slot`` is present in ``players`` and is not
    the server.

    Raises:
        InvalidSlotError: if slot is not 1-6
    """
    moving = RotationSlot.coerce(slot)
    by_slot = _as_slot_map(players)
    neighbors = all_neighbors(moving)
    constraints = []

    left = by_slot.get(neighbors.left) if neighbors.left is not None else None
    if left is not None and not left.is_server:
        constraints.append(Constraint(
            ConstraintKind.RIGHT_OF, left.x,
            _reason(ConstraintKind.RIGHT_OF, neighbors.left), neighbors.left,
        ))

    right = by_slot.get(neighbors.right) if neighbors.right is not None else None
    if right is not None and not right.is_server:
        constraints.append(Constraint(
            ConstraintKind.LEFT_OF, right.x,
            _reason(ConstraintKind.LEFT_OF, neighbors.right), neighbors.right,
        ))

    current = by_slot.get(moving)
    partner = by_slot.get(neighbors.counterpart)
    if (partner is not None and not partner.is_server and
            current is not None and not current.is_server):
        kind = ConstraintKind.IN_FRONT_OF if moving.is_front_row else ConstraintKind.BEHIND
        constraints.append(Constraint(
            kind, partner.y, _reason(kind, neighbors.counterpart), neighbors.counterpart,
        ))

    return constraints


# =============================================================================
# Bounds
# =============================================================================

def calculate_valid_bounds(
    slot: int,
    players: Iterable[PlayerState] | Mapping[int, PlayerState],
    is_server: bool = False,
) -> PositionBounds:
    """Rectangle ``slot`` may move within without creating a fault.

    Args:
        slot: The slot being moved (1-6)
        players: Current lineup; the moving player's own entry only decides
            whether the front/back constraint applies
        is_server: Treat the moving player as the server

    Returns:
        PositionBounds in rules-space meters

    Raises:
        InvalidSlotError: if slot is not 1-6
    """
    moving = RotationSlot.coerce(slot)

    if is_server:
        return PositionBounds(
            min_x=EXTENDED_BOUNDS.min_x,
            max_x=EXTENDED_BOUNDS.max_x,
            min_y=EXTENDED_BOUNDS.min_y,
            max_y=EXTENDED_BOUNDS.max_y,
            is_constrained=False,
            constraint_reasons=(SERVER_EXEMPTION_REASON,),
        )

    min_x, max_x = COURT_BOUNDS.min_x, COURT_BOUNDS.max_x
    min_y, max_y = COURT_BOUNDS.min_y, COURT_BOUNDS.max_y
    reasons = []

    constraints = collect_constraints(moving, players)
    for constraint in constraints:
        reasons.append(constraint.reason)
        if constraint.kind is ConstraintKind.RIGHT_OF:
            min_x = max(min_x, constraint.limit)
        elif constraint.kind is ConstraintKind.LEFT_OF:
            max_x = min(max_x, constraint.limit)
        elif constraint.kind is ConstraintKind.IN_FRONT_OF:
            max_y = min(max_y, constraint.limit)
        else:
            min_y = max(min_y, constraint.limit)

    x_conflict = min_x > max_x
    y_conflict = min_y > max_y
    if x_conflict or y_conflict:
        logger.warning(
            "Conflicting constraints for slot %d: x=[%.3f, %.3f] y=[%.3f, %.3f]",
            moving, min_x, max_x, min_y, max_y,
        )
        reasons.append(CONFLICT_REASON)
        if x_conflict:
            min_x = max_x = (min_x + max_x) / 2
        if y_conflict:
            min_y = max_y = (min_y + max_y) / 2

    return PositionBounds(
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        is_constrained=bool(constraints),
        constraint_reasons=tuple(reasons),
    )


def is_position_valid(
    slot: int,
    point: Point,
    players: Iterable[PlayerState] | Mapping[int, PlayerState],
    is_server: bool = False,
) -> bool:
    """Check a candidate point for ``slot`` against the court and its neighbors.

    The court check allows TOLERANCE of slack at the edges. The server
    may stand in the service zone and ignores neighbors.
    """
    RotationSlot.coerce(slot)
    area = EXTENDED_BOUNDS if is_server else COURT_BOUNDS
    if not (is_within_range(point.x, area.min_x, area.max_x) and
            is_within_range(point.y, area.min_y, area.max_y)):
        return False
    if is_server:
        return True
    return all(c.is_satisfied_by(point) for c in collect_constraints(slot, players))


def snap_to_valid_position(
    slot: int,
    target: Point,
    players: Iterable[PlayerState] | Mapping[int, PlayerState],
    is_server: bool = False,
) -> Point:
    """Nearest acceptable point to ``target``.

    Valid targets come back unchanged. Otherwise each axis is clamped
    into the slot's bounds: a coordinate more than TOLERANCE outside an
    edge lands on the edge, one within TOLERANCE of it is kept.
    """
    by_slot = _as_slot_map(players)
    if is_position_valid(slot, target, by_slot, is_server):
        return target

    bounds = calculate_valid_bounds(slot, by_slot, is_server)
    return Point(
        clamp_with_tolerance(target.x, bounds.min_x, bounds.max_x, TOLERANCE),
        clamp_with_tolerance(target.y, bounds.min_y, bounds.max_y, TOLERANCE),
    )
