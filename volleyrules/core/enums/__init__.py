"""Rules engine enumerations."""

from volleyrules.core.enums.slots import Column, Role, RotationSlot, Row

__all__ = [
    "Column",
    "Role",
    "RotationSlot",
    "Row",
]
