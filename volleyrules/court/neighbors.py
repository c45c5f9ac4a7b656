"""Rotation slot topology and position helpers.

The neighbor relationships are fixed by the overlap rule and are
hardcoded here rather than derived:

    Front row (left to right):  4 (LF) - 3 (MF) - 2 (RF)
    Back row (left to right):   5 (LB) - 6 (MB) - 1 (RB)
    Counterparts (same column): 4-5, 3-6, 2-1

Rows are linear chains. LF has no left neighbor and RF has no right
neighbor; the ends never wrap around.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from volleyrules.core.enums import Column, RotationSlot, Row
from volleyrules.core.models.player import PlayerState
from volleyrules.court.coordinate import ENDLINE_Y

S = RotationSlot

FRONT_ROW: tuple[RotationSlot, ...] = (S.LF, S.MF, S.RF)
BACK_ROW: tuple[RotationSlot, ...] = (S.LB, S.MB, S.RB)
ALL_SLOTS: tuple[RotationSlot, ...] = (S.RB, S.RF, S.MF, S.LF, S.LB, S.MB)

# Front/back pairs, front slot first
COLUMN_PAIRS: tuple[tuple[RotationSlot, RotationSlot], ...] = (
    (S.LF, S.LB),
    (S.MF, S.MB),
    (S.RF, S.RB),
)

_LEFT: dict[RotationSlot, Optional[RotationSlot]] = {
    S.LF: None,
    S.MF: S.LF,
    S.RF: S.MF,
    S.LB: None,
    S.MB: S.LB,
    S.RB: S.MB,
}

_RIGHT: dict[RotationSlot, Optional[RotationSlot]] = {
    S.LF: S.MF,
    S.MF: S.RF,
    S.RF: None,
    S.LB: S.MB,
    S.MB: S.RB,
    S.RB: None,
}

_COUNTERPART: dict[RotationSlot, RotationSlot] = {
    S.LF: S.LB,
    S.LB: S.LF,
    S.MF: S.MB,
    S.MB: S.MF,
    S.RF: S.RB,
    S.RB: S.RF,
}


@dataclass(frozen=True)
class Neighbors:
    """All neighbor relationships of one slot."""
    left: Optional[RotationSlot]
    right: Optional[RotationSlot]
    counterpart: RotationSlot


@dataclass(frozen=True)
class PositionDescription:
    """Display information for a slot."""
    slot: RotationSlot
    label: str
    full_name: str
    column: Column
    row: Row


@dataclass(frozen=True)
class FormationPattern:
    """Coarse classification of a lineup's shape."""
    name: str
    description: str
    is_valid: bool
    characteristics: tuple[str, ...]


def _slot(slot: int) -> RotationSlot:
    return RotationSlot.coerce(slot)


# =============================================================================
# Neighbor Lookups
# =============================================================================

def left_neighbor(slot: int) -> Optional[RotationSlot]:
    """Slot immediately to the left in the same row, or None at the row's end."""
    return _LEFT[_slot(slot)]


def right_neighbor(slot: int) -> Optional[RotationSlot]:
    """Slot immediately to the right in the same row, or None at the row's end."""
    return _RIGHT[_slot(slot)]


def counterpart(slot: int) -> RotationSlot:
    """Front/back partner in the same column."""
    return _COUNTERPART[_slot(slot)]


def all_neighbors(slot: int) -> Neighbors:
    return Neighbors(
        left=left_neighbor(slot),
        right=right_neighbor(slot),
        counterpart=counterpart(slot),
    )


def is_front_row(slot: int) -> bool:
    return _slot(slot).is_front_row


def is_back_row(slot: int) -> bool:
    return _slot(slot).is_back_row


def are_adjacent(slot_a: int, slot_b: int) -> bool:
    """True when the two slots sit next to each other in the same row."""
    return _slot(slot_b) in (left_neighbor(slot_a), right_neighbor(slot_a))


def are_counterparts(slot_a: int, slot_b: int) -> bool:
    return counterpart(slot_a) == _slot(slot_b)


def constraint_dependencies(slot: int) -> tuple[RotationSlot, ...]:
    """Slots whose positions can bound this slot's movement."""
    n = all_neighbors(slot)
    return tuple(s for s in (n.left, n.right, n.counterpart) if s is not None)


def dependents_of(slot: int) -> tuple[RotationSlot, ...]:
    """Slots whose movement bounds change when this slot moves."""
    moved = _slot(slot)
    return tuple(s for s in ALL_SLOTS if moved in constraint_dependencies(s))


# =============================================================================
# Position Helpers
# =============================================================================

def slot_label(slot: int) -> str:
    return _slot(slot).label


def slot_full_name(slot: int) -> str:
    return _slot(slot).full_name


def slot_row(slot: int) -> Row:
    return _slot(slot).row


def slot_column(slot: int) -> Column:
    return _slot(slot).column


def describe_slot(slot: int) -> PositionDescription:
    s = _slot(slot)
    return PositionDescription(
        slot=s, label=s.label, full_name=s.full_name, column=s.column, row=s.row
    )


def slots_in_row(row: Row) -> tuple[RotationSlot, ...]:
    """Slots of a row, left to right."""
    return FRONT_ROW if row is Row.FRONT else BACK_ROW


def slots_in_column(column: Column) -> tuple[RotationSlot, ...]:
    """Slots of a column, front first."""
    for front, back in COLUMN_PAIRS:
        if front.column is column:
            return (front, back)
    raise ValueError(f"Unknown column: {column!r}")


def format_position_display(slot: int, include_slot_number: bool = True) -> str:
    """E.g. '4 - LF (Left Front)'."""
    s = _slot(slot)
    if include_slot_number:
        return f"{int(s)} - {s.label} ({s.full_name})"
    return f"{s.label} ({s.full_name})"


def format_compact_display(slot: int) -> str:
    """E.g. '4LF'."""
    s = _slot(slot)
    return f"{int(s)}{s.label}"


def analyze_formation_pattern(players: Iterable[PlayerState]) -> FormationPattern:
    """Classify a lineup as Spread, Compact, Standard or Custom.

    The classification looks at row membership, the server and the
    lateral spread of the players. It does not check overlap rules.
    """
    players = list(players)
    if len(players) != 6:
        return FormationPattern(
            name="Invalid",
            description="Formation must have exactly 6 players",
            is_valid=False,
            characteristics=(f"Player count: {len(players)}",),
        )

    characteristics = []
    valid_slots = [p for p in players if RotationSlot.is_valid(p.slot)]
    front = [p for p in valid_slots if is_front_row(p.slot)]
    back = [p for p in valid_slots if is_back_row(p.slot)]
    characteristics.append(f"Front row: {len(front)} players")
    characteristics.append(f"Back row: {len(back)} players")

    servers = [p for p in players if p.is_server]
    if len(servers) == 1:
        server = servers[0]
        if RotationSlot.is_valid(server.slot):
            desc = describe_slot(server.slot)
            characteristics.append(f"Server: {desc.label} ({desc.full_name})")
        if server.y > ENDLINE_Y:
            characteristics.append("Server in service zone")
    else:
        characteristics.append(f"Invalid server count: {len(servers)}")

    xs = sorted(p.x for p in players)
    ys = sorted(p.y for p in players)
    x_spread = xs[-1] - xs[0]
    y_spread = ys[-1] - ys[0]
    characteristics.append(f"X-axis spread: {x_spread:.2f}m")
    characteristics.append(f"Y-axis spread: {y_spread:.2f}m")

    name, description = "Custom", "Custom formation"
    if len(front) == 3 and len(back) == 3:
        if x_spread > 6.0:
            name, description = "Spread", "Wide spread formation covering full court width"
        elif x_spread < 3.0:
            name, description = "Compact", "Compact formation with players close together"
        else:
            name, description = "Standard", "Standard volleyball formation"

    return FormationPattern(
        name=name,
        description=description,
        is_valid=len(servers) == 1 and len(front) == 3 and len(back) == 3,
        characteristics=tuple(characteristics),
    )


