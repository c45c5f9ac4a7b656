"""Bounded TTL cache for validation and constraint results.

During a drag the same lineup is validated many times per second and
the same slot's bounds are requested on every frame. Entries are looked
up by a digest of the relevant player coordinates (to the millimeter)
and carry the exact players they were computed from. A lookup only hits
when those players match the request field for field, so a cached
answer is always the answer the uncached call would give.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Optional

from volleyrules.config import EngineConfig, get_config
from volleyrules.core.models import OverlapResult, PlayerState, PositionBounds
from volleyrules.court.neighbors import constraint_dependencies, dependents_of

logger = logging.getLogger(__name__)

_VALIDATION = "validation"
_CONSTRAINTS = "constraints"


def _by_slot(players: Iterable[PlayerState]) -> list[PlayerState]:
    # repr keeps malformed slot values (None, strings) sortable
    return sorted(players, key=lambda p: repr(p.slot))


def _player_key(player: PlayerState, precision: int) -> str:
    return (f"{player.slot}:{player.x:.{precision}f},{player.y:.{precision}f},"
            f"{str(player.is_server).lower()}")


def lineup_hash(players: Iterable[PlayerState], precision: int = 3) -> str:
    """Stable digest of slots, coordinates (to the millimeter) and server flags."""
    raw = "|".join(_player_key(p, precision) for p in _by_slot(players))
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


def _relevant_players(slot: int, players: Iterable[PlayerState]) -> list[PlayerState]:
    relevant = {int(slot), *(int(s) for s in constraint_dependencies(slot))}
    return [p for p in players if p.slot in relevant]


def constraint_key(
    slot: int,
    players: Iterable[PlayerState],
    is_server: bool = False,
    precision: int = 3,
) -> tuple:
    """Key covering only the players that can bound ``slot``.

    The moving player's own entry is included since its presence and
    server flag decide whether the front/back constraint applies.
    """
    digest = lineup_hash(_relevant_players(slot, players), precision)
    return (_CONSTRAINTS, int(slot), bool(is_server), digest)


@dataclass
class _Entry:
    value: Any
    created_at: float
    players: tuple = ()
    access_count: int = 0


class PerformanceCache:
    """Thread-safe memo cache with a size bound and a time-to-live.

    When full, the entry with the fewest hits is evicted (oldest first
    among ties). Expired entries are dropped on access.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        precision: int = 3,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.precision = precision
        self._clock = clock
        self._entries: dict[Hashable, _Entry] = {}
        self._lock = threading.Lock()
        self._hits = {_VALIDATION: 0, _CONSTRAINTS: 0}
        self._misses = {_VALIDATION: 0, _CONSTRAINTS: 0}
        self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_validation(
        self,
        players: Iterable[PlayerState],
        compute: Callable[[list[PlayerState]], OverlapResult],
    ) -> OverlapResult:
        """Cached ``compute(players)`` keyed by the whole lineup."""
        players = list(players)
        key = (_VALIDATION, lineup_hash(players, self.precision))
        return self._get_or_compute(
            _VALIDATION, key, tuple(_by_slot(players)), lambda: compute(players)
        )

    def get_constraints(
        self,
        slot: int,
        players: Iterable[PlayerState],
        is_server: bool,
        compute: Callable[[int, list[PlayerState], bool], PositionBounds],
    ) -> PositionBounds:
        """Cached ``compute(slot, players, is_server)`` keyed by the slot's neighbors."""
        players = list(players)
        key = constraint_key(slot, players, is_server, self.precision)
        relevant = tuple(_by_slot(_relevant_players(slot, players)))
        return self._get_or_compute(
            _CONSTRAINTS, key, relevant, lambda: compute(slot, players, is_server)
        )

    def _get_or_compute(
        self,
        kind: str,
        key: Hashable,
        players: tuple,
        compute: Callable[[], Any],
    ) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if self._clock() - entry.created_at >= self.ttl_seconds:
                    del self._entries[key]
                    logger.debug("Cache entry expired: %s", kind)
                elif entry.players != players:
                    # Same rounded key, different lineup: recompute and replace
                    logger.debug("Cache key shared by a different lineup: %s", kind)
                else:
                    entry.access_count += 1
                    self._hits[kind] += 1
                    logger.debug("Cache hit: %s", kind)
                    return entry.value
            self._misses[kind] += 1

        logger.debug("Cache miss: %s", kind)
        value = compute()

        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                self._evict_one()
            self._entries[key] = _Entry(value=value, created_at=self._clock(), players=players)
        return value

    def _evict_one(self) -> None:
        # Caller holds the lock
        victim = min(
            self._entries,
            key=lambda k: (self._entries[k].access_count, self._entries[k].created_at),
        )
        del self._entries[victim]
        self._evictions += 1
        logger.debug("Cache eviction: %s", victim[0] if isinstance(victim, tuple) else victim)

    # =========================================================================
    # Invalidation
    # =========================================================================

    def invalidate_slot(self, slot: int) -> int:
        """Drop entries a move of ``slot`` can affect.

        Removes the constraint entries of the slot and of every slot it
        bounds, and all validation entries.

        Returns:
            Number of entries removed
        """
        affected = {int(slot), *(int(s) for s in dependents_of(slot))}
        with self._lock:
            stale = [
                key for key in self._entries
                if key[0] == _VALIDATION or (key[0] == _CONSTRAINTS and key[1] in affected)
            ]
            for key in stale:
                del self._entries[key]
        logger.debug("Invalidated %d cache entries for slot %s", len(stale), slot)
        return len(stale)

    def clear(self) -> None:
        """Remove every entry and reset the counters."""
        with self._lock:
            self._entries.clear()
            for counter in (self._hits, self._misses):
                for kind in counter:
                    counter[kind] = 0
            self._evictions = 0

    def stats(self) -> dict:
        """Get cache statistics for debugging."""
        with self._lock:
            validation_size = sum(1 for k in self._entries if k[0] == _VALIDATION)
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "ttl_seconds": self.ttl_seconds,
                "validation_size": validation_size,
                "constraint_size": len(self._entries) - validation_size,
                "validation_hits": self._hits[_VALIDATION],
                "validation_misses": self._misses[_VALIDATION],
                "validation_hit_rate": _rate(self._hits[_VALIDATION], self._misses[_VALIDATION]),
                "constraint_hits": self._hits[_CONSTRAINTS],
                "constraint_misses": self._misses[_CONSTRAINTS],
                "constraint_hit_rate": _rate(self._hits[_CONSTRAINTS], self._misses[_CONSTRAINTS]),
                "evictions": self._evictions,
            }


def _rate(hits: int, misses: int) -> float:
    total = hits + misses
    return hits / total if total else 0.0


def build_cache(config: Optional[EngineConfig] = None) -> Optional[PerformanceCache]:
    """Cache sized from EngineConfig, or None when caching is disabled."""
    config = config or get_config()
    if not config.cache_enabled:
        return None
    return PerformanceCache(
        max_size=config.cache_max_size,
        ttl_seconds=config.cache_ttl_seconds,
        precision=config.hash_precision,
    )
