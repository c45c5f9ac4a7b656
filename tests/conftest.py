"""Shared pytest fixtures for volleyrules tests."""

import pytest

from volleyrules.cache import PerformanceCache
from volleyrules.config import EngineConfig, reset_config
from volleyrules.core.enums import Role
from volleyrules.core.models import Lineup, PlayerState
from volleyrules.court.coordinate import CoordinateTransformer


# =============================================================================
# Lineup Fixtures
# =============================================================================


def make_player(slot, x, y, is_server=False, name=None, role=Role.UNKNOWN) -> PlayerState:
    """Build a player with an id derived from the slot."""
    return PlayerState(
        id=f"p{slot}",
        display_name=name or f"Player {slot}",
        slot=slot,
        x=x,
        y=y,
        role=role,
        is_server=is_server,
    )


# Base rotation: three columns at x = 1.5 / 4.5 / 7.5, front row at y = 2, back at y = 6
BASE_POSITIONS = {
    4: (1.5, 2.0),  # LF
    3: (4.5, 2.0),  # MF
    2: (7.5, 2.0),  # RF
    5: (1.5, 6.0),  # LB
    6: (4.5, 6.0),  # MB
    1: (7.5, 6.0),  # RB
}


def build_lineup(overrides=None, server_slot=1) -> list[PlayerState]:
    """Base rotation with some slots moved.

    Args:
        overrides: slot -> (x, y)
        server_slot: Slot flagged as server, or None for no server
    """
    positions = dict(BASE_POSITIONS)
    positions.update(overrides or {})
    return [
        make_player(slot, x, y, is_server=slot == server_slot)
        for slot, (x, y) in sorted(positions.items())
    ]


@pytest.fixture
def make_lineup():
    """Factory fixture wrapping build_lineup."""
    return build_lineup


@pytest.fixture
def player():
    """Factory fixture wrapping make_player."""
    return make_player


@pytest.fixture
def base_lineup() -> list[PlayerState]:
    """Legal base rotation with RB serving."""
    return build_lineup()


@pytest.fixture
def no_server_lineup() -> list[PlayerState]:
    """Base rotation where nobody is flagged as server."""
    return build_lineup(server_slot=None)


@pytest.fixture
def lineup_model(base_lineup) -> Lineup:
    return Lineup.from_players(base_lineup)


@pytest.fixture
def swapped_front_lineup() -> list[PlayerState]:
    """LF and MF x-coordinates swapped."""
    return build_lineup({4: (4.5, 2.0), 3: (1.5, 2.0)})


# =============================================================================
# Engine Fixtures
# =============================================================================


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> PerformanceCache:
    return PerformanceCache(max_size=50, ttl_seconds=30.0, clock=clock)


@pytest.fixture
def transformer() -> CoordinateTransformer:
    return CoordinateTransformer(600, 360)


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(
        screen_width=600.0,
        screen_height=360.0,
        cache_enabled=True,
        cache_max_size=100,
        cache_ttl_seconds=30.0,
    )


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Keep VOLLEYRULES_* environment and the config singleton isolated per test."""
    for name in (
        "VOLLEYRULES_SCREEN_WIDTH",
        "VOLLEYRULES_SCREEN_HEIGHT",
        "VOLLEYRULES_CACHE_SIZE",
        "VOLLEYRULES_CACHE_TTL",
        "VOLLEYRULES_CACHE_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
