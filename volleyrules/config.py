"""
Rules engine configuration.

Controls the caller's rendering box and the result cache.
All settings can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass
class EngineConfig:
    """Configuration for coordinate conversion and result caching."""

    # Rendering box of the caller (logical units, not meters)
    screen_width: float = field(
        default_factory=lambda: _env_float("VOLLEYRULES_SCREEN_WIDTH", 600.0)
    )
    screen_height: float = field(
        default_factory=lambda: _env_float("VOLLEYRULES_SCREEN_HEIGHT", 360.0)
    )

    # Cache settings
    cache_enabled: bool = field(
        default_factory=lambda: os.getenv("VOLLEYRULES_CACHE_ENABLED", "true").lower() == "true"
    )
    cache_max_size: int = field(
        default_factory=lambda: _env_int("VOLLEYRULES_CACHE_SIZE", 1000)
    )
    cache_ttl_seconds: float = field(
        default_factory=lambda: _env_float("VOLLEYRULES_CACHE_TTL", 30.0)
    )

    # Decimal places used when hashing coordinates into cache keys
    hash_precision: int = 3

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if self.screen_width <= 0:
            errors.append("VOLLEYRULES_SCREEN_WIDTH must be positive")
        if self.screen_height <= 0:
            errors.append("VOLLEYRULES_SCREEN_HEIGHT must be positive")
        if self.cache_max_size < 1:
            errors.append("VOLLEYRULES_CACHE_SIZE must be at least 1")
        if self.cache_ttl_seconds <= 0:
            errors.append("VOLLEYRULES_CACHE_TTL must be positive")
        if self.hash_precision < 0:
            errors.append("hash_precision cannot be negative")
        return errors


# Singleton config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global engine configuration."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
