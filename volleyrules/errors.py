"""Exceptions raised for caller contract violations.

Rule failures are never raised; they come back as Violation entries
inside an OverlapResult. These exceptions cover requests whose answer
would be meaningless.
"""

from typing import Any


class VolleyRulesError(Exception):
    """Base exception for rules engine errors."""
    pass


class InvalidSlotError(VolleyRulesError, ValueError):
    """Raised when a value that is not a rotation slot (1-6) is used as one."""

    def __init__(self, slot: Any):
        super().__init__(f"Invalid rotation slot: {slot!r} (expected 1-6)")
        self.slot = slot


class LineupShapeError(VolleyRulesError, ValueError):
    """Raised when building a Lineup from players that do not fill slots 1-6 once each."""
    pass


class SlotNotFoundError(VolleyRulesError, LookupError):
    """Raised when the requested slot has no player in the supplied lineup."""

    def __init__(self, slot: int):
        super().__init__(f"No player found in slot {slot}")
        self.slot = slot
