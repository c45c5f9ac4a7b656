"""Rules engine facade.

One object that owns the configuration, the coordinate transformer and
an optional result cache, and forwards to the rules modules. UI code
typically holds a single RulesEngine for the lifetime of a court view.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from volleyrules.cache import PerformanceCache, build_cache
from volleyrules.config import EngineConfig, get_config
from volleyrules.convert import formation_to_lineup
from volleyrules.core.enums import RotationSlot
from volleyrules.core.models import (
    OverlapResult,
    PlayerState,
    Point,
    PositionBounds,
    Violation,
    slot_map,
)
from volleyrules.court.coordinate import CoordinateTransformer
from volleyrules.errors import SlotNotFoundError
from volleyrules.rules import constraints, overlap
from volleyrules.rules.lazy import LazyOverlapResult, analyze_lineup
from volleyrules.schemas import FormationSchema

logger = logging.getLogger(__name__)

FormationPayload = Union[FormationSchema, Mapping[str, Any]]


class RulesEngine:
    """Validation, constraint and conversion entry point.

    Args:
        config: Engine settings (global config if None)
        cache: Result cache to use. When omitted one is built from the
            config, or none at all if caching is disabled there.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        cache: Optional[PerformanceCache] = None,
    ):
        self.config = config or get_config()
        errors = self.config.validate()
        if errors:
            raise ValueError("Invalid engine configuration: " + "; ".join(errors))
        self.cache = cache if cache is not None else build_cache(self.config)
        self._transformer = CoordinateTransformer(
            self.config.screen_width, self.config.screen_height
        )
        logger.debug(
            "RulesEngine ready (%s, cache=%s)",
            self._transformer, "on" if self.cache is not None else "off",
        )

    @property
    def transformer(self) -> CoordinateTransformer:
        return self._transformer

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_lineup(self, players: Iterable[PlayerState]) -> OverlapResult:
        players = list(players)
        if self.cache is not None:
            return self.cache.get_validation(players, overlap.validate_lineup)
        return overlap.validate_lineup(players)

    def analyze_lineup(self, players: Iterable[PlayerState]) -> LazyOverlapResult:
        """Validate with explanations and fixes computed on demand."""
        return analyze_lineup(players, cache=self.cache)

    def explain_violation(self, violation: Violation, players: Iterable[PlayerState]) -> str:
        return overlap.explain_violation(violation, players)

    # =========================================================================
    # Constraints
    # =========================================================================

    def _player(self, slot: int, players: Iterable[PlayerState]) -> tuple[PlayerState, list]:
        RotationSlot.coerce(slot)
        players = list(players)
        player = slot_map(players).get(slot)
        if player is None:
            raise SlotNotFoundError(slot)
        return player, players

    def get_player_constraints(self, slot: int, players: Iterable[PlayerState]) -> PositionBounds:
        """Movable rectangle for the player in ``slot``.

        Raises:
            InvalidSlotError: if slot is not 1-6
            SlotNotFoundError: if no player occupies the slot
        """
        player, players = self._player(slot, players)
        if self.cache is not None:
            return self.cache.get_constraints(
                slot, players, player.is_server, constraints.calculate_valid_bounds
            )
        return constraints.calculate_valid_bounds(slot, players, player.is_server)

    def is_valid_position(self, slot: int, point: Point, players: Iterable[PlayerState]) -> bool:
        """Check whether moving ``slot`` to ``point`` keeps it within its constraints."""
        player, players = self._player(slot, players)
        return constraints.is_position_valid(slot, point, players, player.is_server)

    def snap_to_valid_position(
        self, slot: int, point: Point, players: Iterable[PlayerState]
    ) -> Point:
        player, players = self._player(slot, players)
        return constraints.snap_to_valid_position(slot, point, players, player.is_server)

    # =========================================================================
    # Formation Payloads
    # =========================================================================

    def lineup_from_formation(self, payload: FormationPayload) -> list[PlayerState]:
        """Parse a formation payload into rules-space players.

        Raises:
            pydantic.ValidationError: if the payload is malformed
        """
        formation = (payload if isinstance(payload, FormationSchema)
                     else FormationSchema.model_validate(payload))
        return formation_to_lineup(
            formation.formation_positions(),
            formation.rotation,
            server_slot=formation.server_slot,
            transformer=self._transformer,
        )

    def validate_formation(self, payload: FormationPayload) -> OverlapResult:
        return self.validate_lineup(self.lineup_from_formation(payload))

    def bounds_for_formation(self, payload: FormationPayload, slot: int) -> PositionBounds:
        return self.get_player_constraints(slot, self.lineup_from_formation(payload))

    # =========================================================================
    # Cache
    # =========================================================================

    def invalidate_slot(self, slot: int) -> None:
        """Forget cached results affected by a move of ``slot``."""
        if self.cache is not None:
            self.cache.invalidate_slot(slot)

    def cache_stats(self) -> Optional[dict]:
        return self.cache.stats() if self.cache is not None else None
