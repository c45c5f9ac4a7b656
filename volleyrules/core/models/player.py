"""Player state models.

Coordinates are rules-space meters:
    x: 0 (left sideline) to 9 (right sideline)
    y: 0 (net) to 9 (endline), up to 11 inside the service zone
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from volleyrules.core.enums import Role


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class PlayerState:
    """One player's placement at the moment of serve.

    ``slot`` is kept as a plain int so malformed lineups (slot 0, slot 7,
    duplicates) can still be represented and reported as violations.
    """

    id: str
    display_name: str
    slot: int
    x: float
    y: float
    role: Role = Role.UNKNOWN
    is_server: bool = False

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def moved_to(self, x: float, y: float) -> PlayerState:
        """Copy of this player at a new point."""
        return replace(self, x=x, y=y)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "role": self.role.value,
            "slot": int(self.slot),
            "x": self.x,
            "y": self.y,
            "is_server": self.is_server,
        }


def slot_map(players: Iterable[PlayerState]) -> dict[int, PlayerState]:
    """Build a slot -> player lookup. Later duplicates win."""
    return {player.slot: player for player in players}
