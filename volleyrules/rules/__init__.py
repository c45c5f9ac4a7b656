"""Overlap validation, movement constraints and deferred violation analysis."""

from volleyrules.rules.constraints import (
    Constraint,
    ConstraintKind,
    calculate_valid_bounds,
    collect_constraints,
    snap_to_valid_position,
)
from volleyrules.rules.lazy import LazyOverlapResult, LazyViolation, analyze_lineup
from volleyrules.rules.overlap import (
    ViolationSummary,
    detailed_violations,
    explain_violation,
    suggested_fix,
    user_friendly_messages,
    validate_lineup,
    violation_summary,
)

__all__ = [
    "Constraint",
    "ConstraintKind",
    "LazyOverlapResult",
    "LazyViolation",
    "ViolationSummary",
    "analyze_lineup",
    "calculate_valid_bounds",
    "collect_constraints",
    "detailed_violations",
    "explain_violation",
    "snap_to_valid_position",
    "suggested_fix",
    "user_friendly_messages",
    "validate_lineup",
    "violation_summary",
]
