"""Conversion between the caller's formation data and rules-space lineups.

The caller stores a formation as screen positions keyed by player id
plus a rotation map (slot -> player id). The rules modules work on
PlayerState lists in meters. This module only translates between the
two; it never validates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Mapping, Optional

from volleyrules.core.enums import Role
from volleyrules.core.models import PlayerState, Point
from volleyrules.court.coordinate import (
    COURT_LENGTH,
    COURT_WIDTH,
    SERVICE_ZONE_END,
    TOLERANCE,
    CoordinateTransformer,
    default_transformer,
    is_valid_position,
    normalize_coordinates,
)


@dataclass
class FormationPosition:
    """A player's placement in rendering units, as the caller stores it."""
    x: float
    y: float
    is_custom: bool = True
    last_modified: datetime = field(default_factory=datetime.now)


@dataclass
class ScreenPlayerState:
    """PlayerState in rendering units, with the caller's free-form role string."""
    id: str
    display_name: str
    role: str
    slot: int
    x: float
    y: float
    is_server: bool = False
    is_custom: bool = True
    last_modified: datetime = field(default_factory=datetime.now)


# Keys are lowercase
_ROLE_MAP = {
    "setter": Role.SETTER,
    "opposite": Role.OPPOSITE,
    "outside-hitter": Role.OUTSIDE_HITTER_1,
    "outside-hitter-1": Role.OUTSIDE_HITTER_1,
    "outside-hitter-2": Role.OUTSIDE_HITTER_2,
    "middle-blocker": Role.MIDDLE_BLOCKER_1,
    "middle-blocker-1": Role.MIDDLE_BLOCKER_1,
    "middle-blocker-2": Role.MIDDLE_BLOCKER_2,
    "libero": Role.LIBERO,
    "defensive-specialist": Role.DEFENSIVE_SPECIALIST,
    **{role.value.lower(): role for role in Role if role is not Role.UNKNOWN},
}


def map_role(role: Optional[str]) -> Role:
    """Map a caller role string ('setter', 'OH1', 'middle-blocker-2', ...) to a Role."""
    if not role:
        return Role.UNKNOWN
    return _ROLE_MAP.get(role.strip().lower(), Role.UNKNOWN)


def _transformer(transformer: Optional[CoordinateTransformer]) -> CoordinateTransformer:
    return transformer if transformer is not None else default_transformer()


# =============================================================================
# Single Player Conversion
# =============================================================================

def to_rules_state(
    screen_state: ScreenPlayerState,
    slot: Optional[int] = None,
    is_server: Optional[bool] = None,
    transformer: Optional[CoordinateTransformer] = None,
) -> PlayerState:
    """Convert a screen-space player to rules space.

    ``slot`` and ``is_server`` override the values on ``screen_state``.
    """
    point = _transformer(transformer).screen_to_rules(screen_state.x, screen_state.y)
    return PlayerState(
        id=screen_state.id,
        display_name=screen_state.display_name,
        role=map_role(screen_state.role),
        slot=screen_state.slot if slot is None else slot,
        x=point.x,
        y=point.y,
        is_server=screen_state.is_server if is_server is None else is_server,
    )


def to_screen_state(
    state: PlayerState,
    transformer: Optional[CoordinateTransformer] = None,
) -> ScreenPlayerState:
    point = _transformer(transformer).rules_to_screen(state.x, state.y)
    return ScreenPlayerState(
        id=state.id,
        display_name=state.display_name,
        role=state.role.value,
        slot=state.slot,
        x=point.x,
        y=point.y,
        is_server=state.is_server,
    )


# =============================================================================
# Formation Conversion
# =============================================================================

def formation_to_lineup(
    positions: Mapping[str, FormationPosition],
    rotation: Mapping[int, str],
    server_slot: int = 1,
    transformer: Optional[CoordinateTransformer] = None,
) -> list[PlayerState]:
    """Build rules-space players from a stored formation.

    Args:
        positions: Screen positions keyed by player id
        rotation: Rotation map, slot -> player id
        server_slot: Slot that is serving
        transformer: Screen <-> rules mapping (configured default if None)

    Returns:
        One PlayerState per rotation entry that has a position. The
        display name is the player id and the role is Unknown.
    """
    tf = _transformer(transformer)
    players = []
    for slot, player_id in rotation.items():
        position = positions.get(player_id)
        if position is None:
            continue
        point = tf.screen_to_rules(position.x, position.y)
        slot = int(slot)
        players.append(PlayerState(
            id=player_id,
            display_name=player_id,
            slot=slot,
            x=point.x,
            y=point.y,
            role=Role.UNKNOWN,
            is_server=slot == server_slot,
        ))
    return players


def lineup_to_formation(
    players: Iterable[PlayerState],
    transformer: Optional[CoordinateTransformer] = None,
) -> dict[str, FormationPosition]:
    """Screen positions keyed by player id."""
    tf = _transformer(transformer)
    formation = {}
    for player in players:
        point = tf.rules_to_screen(player.x, player.y)
        formation[player.id] = FormationPosition(x=point.x, y=point.y)
    return formation


def create_rotation_map(players: Iterable[PlayerState]) -> dict[int, str]:
    return {player.slot: player.id for player in players}


def find_server_slot(players: Iterable[PlayerState]) -> int:
    """Slot of the first player marked as server, or 1 when none is."""
    for player in players:
        if player.is_server:
            return player.slot
    return 1


# =============================================================================
# Coordinate Helpers
# =============================================================================

def is_valid_coordinates(
    point: Point,
    rules_space: bool = True,
    allow_service_zone: bool = False,
    transformer: Optional[CoordinateTransformer] = None,
) -> bool:
    if rules_space:
        return is_valid_position(point.x, point.y, allow_service_zone)
    return _transformer(transformer).is_valid_screen_position(point.x, point.y)


def normalize_point(
    point: Point,
    rules_space: bool = True,
    allow_service_zone: bool = False,
    transformer: Optional[CoordinateTransformer] = None,
) -> Point:
    """Clamp a point into the court (rules space) or the rendering box."""
    if rules_space:
        return normalize_coordinates(point.x, point.y, allow_service_zone)
    return _transformer(transformer).screen_bounds.clamp(point.x, point.y)


def coordinate_system_info(transformer: Optional[CoordinateTransformer] = None) -> dict:
    """Describe both coordinate spaces, for debugging and display."""
    tf = _transformer(transformer)
    scale_x, scale_y = tf.scaling_factors()
    return {
        "rules": {
            "width": COURT_WIDTH,
            "height": COURT_LENGTH,
            "service_zone_end": SERVICE_ZONE_END,
            "tolerance": TOLERANCE,
        },
        "screen": {
            "width": tf.screen_width,
            "height": tf.screen_height,
        },
        "scaling_factors": {"x": scale_x, "y": scale_y},
    }
