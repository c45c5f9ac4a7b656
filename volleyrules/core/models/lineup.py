"""Six-slot lineup model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from volleyrules.core.enums import RotationSlot
from volleyrules.core.models.player import PlayerState
from volleyrules.errors import InvalidSlotError, LineupShapeError


@dataclass(frozen=True)
class Lineup:
    """Exactly six players, one per rotation slot.

    Players are stored in a fixed tuple indexed by ``slot - 1`` so a slot
    lookup never misses once the lineup has been built.
    """

    players: tuple[PlayerState, ...]

    @classmethod
    def from_players(cls, players: Iterable[PlayerState]) -> Lineup:
        """Arrange players by slot.

        Raises:
            LineupShapeError: if the players do not cover slots 1-6 exactly once
        """
        players = list(players)
        if len(players) != 6:
            raise LineupShapeError(f"Expected 6 players, got {len(players)}")

        ordered: list[Optional[PlayerState]] = [None] * 6
        for player in players:
            if not RotationSlot.is_valid(player.slot):
                raise LineupShapeError(f"Invalid rotation slot: {player.slot!r}")
            index = player.slot - 1
            if ordered[index] is not None:
                raise LineupShapeError(f"Duplicate rotation slot: {player.slot}")
            ordered[index] = player
        return cls(players=tuple(ordered))

    def __getitem__(self, slot: int) -> PlayerState:
        if not RotationSlot.is_valid(slot):
            raise InvalidSlotError(slot)
        return self.players[slot - 1]

    def __iter__(self) -> Iterator[PlayerState]:
        return iter(self.players)

    def __len__(self) -> int:
        return len(self.players)

    @property
    def server(self) -> Optional[PlayerState]:
        """The serving player, or None when no single server is marked."""
        servers = [p for p in self.players if p.is_server]
        return servers[0] if len(servers) == 1 else None

    def with_player_at(self, slot: int, x: float, y: float) -> Lineup:
        """Copy of this lineup with one player moved."""
        moved = self[slot].moved_to(x, y)
        players = list(self.players)
        players[slot - 1] = moved
        return Lineup(players=tuple(players))
