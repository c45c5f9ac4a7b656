"""Rotation slot and role definitions for volleyball players."""

from enum import Enum, IntEnum
from typing import Any

from volleyrules.errors import InvalidSlotError


class Row(str, Enum):
    """Court row a slot belongs to."""

    FRONT = "Front"
    BACK = "Back"


class Column(str, Enum):
    """Court column a slot belongs to (from the team's own perspective)."""

    LEFT = "Left"
    MIDDLE = "Middle"
    RIGHT = "Right"


class RotationSlot(IntEnum):
    """The six rotation positions.

    Numbering follows the serving order: slot 1 is the right back
    (the server's spot), then counter-clockwise around the court.
    """

    RB = 1  # Right Back
    RF = 2  # Right Front
    MF = 3  # Middle Front
    LF = 4  # Left Front
    LB = 5  # Left Back
    MB = 6  # Middle Back

    @property
    def label(self) -> str:
        """Short label, e.g. 'LF'."""
        return self.name

    @property
    def full_name(self) -> str:
        """Human readable name, e.g. 'Left Front'."""
        return _FULL_NAMES[self]

    @property
    def row(self) -> Row:
        if self in _FRONT_ROW:
            return Row.FRONT
        return Row.BACK

    @property
    def column(self) -> Column:
        return _COLUMNS[self]

    @property
    def is_front_row(self) -> bool:
        return self.row is Row.FRONT

    @property
    def is_back_row(self) -> bool:
        return self.row is Row.BACK

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Check whether a value names a slot (integers 1-6 only)."""
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 1 <= value <= 6

    @classmethod
    def coerce(cls, value: Any) -> "RotationSlot":
        """Convert an int (or slot) to a RotationSlot.

        Raises:
            InvalidSlotError: if the value is not an integer 1-6
        """
        if not cls.is_valid(value):
            raise InvalidSlotError(value)
        return cls(value)


_FULL_NAMES = {
    RotationSlot.RB: "Right Back",
    RotationSlot.RF: "Right Front",
    RotationSlot.MF: "Middle Front",
    RotationSlot.LF: "Left Front",
    RotationSlot.LB: "Left Back",
    RotationSlot.MB: "Middle Back",
}

_FRONT_ROW = frozenset({RotationSlot.RF, RotationSlot.MF, RotationSlot.LF})

_COLUMNS = {
    RotationSlot.RB: Column.RIGHT,
    RotationSlot.RF: Column.RIGHT,
    RotationSlot.MF: Column.MIDDLE,
    RotationSlot.MB: Column.MIDDLE,
    RotationSlot.LF: Column.LEFT,
    RotationSlot.LB: Column.LEFT,
}


class Role(str, Enum):
    """Player roles in indoor volleyball."""

    SETTER = "S"
    OPPOSITE = "OPP"
    OUTSIDE_HITTER_1 = "OH1"
    OUTSIDE_HITTER_2 = "OH2"
    MIDDLE_BLOCKER_1 = "MB1"
    MIDDLE_BLOCKER_2 = "MB2"
    LIBERO = "L"
    DEFENSIVE_SPECIALIST = "DS"
    UNKNOWN = "Unknown"
