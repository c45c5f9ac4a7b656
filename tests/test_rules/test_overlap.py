"""Tests for overlap validation and violation reporting."""

import dataclasses

import pytest

from volleyrules.core.models import Lineup, Point, Violation, ViolationCode
from volleyrules.rules.overlap import (
    detailed_violations,
    explain_violation,
    is_position_valid,
    suggested_fix,
    user_friendly_messages,
    validate_lineup,
    violation_summary,
)


class TestLegalLineups:
    """Tests for lineups that should pass."""

    def test_base_rotation_is_legal(self, base_lineup):
        result = validate_lineup(base_lineup)
        assert result.is_legal
        assert result.violations == ()

    def test_lineup_model_accepted(self, lineup_model):
        assert validate_lineup(lineup_model).is_legal

    def test_exact_tolerance_separation_is_legal(self, make_lineup):
        """MF exactly 3cm right of LF is enough."""
        lineup = make_lineup({4: (2.0, 2.0), 3: (2.03, 2.0)})
        assert validate_lineup(lineup).is_legal

    def test_diagonal_staggering_is_legal(self, make_lineup):
        """Only neighbors are compared; LF may be deeper than MB."""
        lineup = make_lineup({4: (1.5, 7.0), 5: (1.5, 8.0), 6: (4.5, 5.0)})
        assert validate_lineup(lineup).is_legal


class TestRowOrder:
    """Tests for left-to-right order within a row."""

    def test_swapped_front_pair(self, swapped_front_lineup):
        """Swapping LF and MF gives exactly one ROW_ORDER fault on [4, 3]."""
        result = validate_lineup(swapped_front_lineup)
        assert not result.is_legal
        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.code is ViolationCode.ROW_ORDER
        assert violation.slots == (4, 3)
        assert violation.coordinates[4] == Point(4.5, 2.0)
        assert violation.message.startswith("Front row order violation")

    def test_under_tolerance_is_violation(self, make_lineup):
        """MF only 2.9cm right of LF counts as level."""
        lineup = make_lineup({4: (2.0, 2.0), 3: (2.029, 2.0)})
        result = validate_lineup(lineup)
        assert result.codes() == [ViolationCode.ROW_ORDER]

    def test_back_row_order(self, make_lineup):
        result = validate_lineup(make_lineup({6: (7.6, 6.0)}, server_slot=2))
        assert [v.slots for v in result.violations] == [(6, 1)]
        assert result.violations[0].message.startswith("Back row order violation")

    def test_server_pair_skipped(self, make_lineup):
        """RB serving from the far left creates no back row fault."""
        result = validate_lineup(make_lineup({1: (0.5, 10.0)}))
        assert result.is_legal

    def test_server_exemption_is_pairwise(self, make_lineup):
        """Other pairs in the server's row are still checked."""
        lineup = make_lineup({5: (5.0, 6.0)})  # LB right of MB
        result = validate_lineup(lineup)
        assert [v.slots for v in result.violations] == [(5, 6)]


class TestFrontBack:
    """Tests for front player ahead of back counterpart."""

    def test_front_behind_back(self, make_lineup):
        result = validate_lineup(make_lineup({3: (4.5, 7.0)}))
        assert result.codes() == [ViolationCode.FRONT_BACK]
        assert result.violations[0].slots == (3, 6)

    def test_level_is_violation(self, make_lineup):
        result = validate_lineup(make_lineup({4: (1.5, 6.0)}))
        assert [v.slots for v in result.violations] == [(4, 5)]

    def test_server_counterpart_skipped(self, make_lineup):
        """RF may stand anywhere relative to a serving RB."""
        result = validate_lineup(make_lineup({2: (7.5, 8.0), 1: (7.5, 4.0)}))
        assert result.is_legal

    def test_server_anywhere_in_service_zone(self, make_lineup):
        for x, y in [(0.0, 11.0), (9.0, 9.5), (4.5, 10.0)]:
            assert validate_lineup(make_lineup({1: (x, y)})).is_legal

    def test_multiple_categories_reported(self, make_lineup):
        """All checks run; faults accumulate."""
        lineup = make_lineup({4: (4.5, 2.0), 3: (1.5, 7.0)})
        result = validate_lineup(lineup)
        assert result.codes() == [ViolationCode.ROW_ORDER, ViolationCode.FRONT_BACK]
        assert [v.slots for v in result.violations] == [(4, 3), (3, 6)]


class TestStructural:
    """Tests for malformed lineups."""

    def test_wrong_count(self, base_lineup):
        result = validate_lineup(base_lineup[:5])
        assert len(result.violations) == 1
        assert result.violations[0].code is ViolationCode.INVALID_LINEUP
        assert "expected 6 players, got 5" in result.violations[0].message

    def test_empty_lineup(self):
        result = validate_lineup([])
        assert result.codes() == [ViolationCode.INVALID_LINEUP]

    def test_duplicate_slots(self, base_lineup):
        players = list(base_lineup)
        players[1] = dataclasses.replace(players[1], slot=3)  # two MFs, no RF
        result = validate_lineup(players)
        assert result.codes() == [ViolationCode.INVALID_LINEUP]
        assert result.violations[0].slots == (3,)
        assert "duplicate" in result.violations[0].message

    def test_out_of_range_slot(self, base_lineup):
        players = list(base_lineup)
        players[1] = dataclasses.replace(players[1], slot=7)
        result = validate_lineup(players)
        assert result.codes() == [ViolationCode.INVALID_LINEUP]
        assert result.violations[0].slots == (7,)

    def test_mixed_type_bad_slots_reported(self, base_lineup):
        """Unorderable slot values are still reported, not raised."""
        players = list(base_lineup)
        players[1] = dataclasses.replace(players[1], slot=None)
        players[2] = dataclasses.replace(players[2], slot=7)
        result = validate_lineup(players)
        assert result.codes() == [ViolationCode.INVALID_LINEUP]
        assert result.violations[0].slots == (7, None)
        assert result.violations[0].message.endswith("7, None")

    def test_mixed_type_duplicate_slots_reported(self, base_lineup):
        players = list(base_lineup)
        players[0] = dataclasses.replace(players[0], slot="x")
        players[1] = dataclasses.replace(players[1], slot="x")
        players[2] = dataclasses.replace(players[2], slot=4)
        result = validate_lineup(players)
        assert not result.is_legal
        assert result.violations[0].slots == ("x", 4)

    def test_no_server(self, no_server_lineup):
        """Missing server is reported, position checks still run."""
        result = validate_lineup(no_server_lineup)
        assert result.codes() == [ViolationCode.MULTIPLE_SERVERS]
        assert result.violations[0].slots == ()

    def test_two_servers_plus_position_fault(self, make_lineup):
        lineup = [
            dataclasses.replace(p, is_server=p.slot in (1, 4))
            for p in make_lineup({5: (5.0, 6.0)})
        ]
        result = validate_lineup(lineup)
        assert result.codes() == [ViolationCode.MULTIPLE_SERVERS, ViolationCode.ROW_ORDER]
        assert result.violations[0].slots == (1, 4)

    def test_is_legal_matches_violations(self, base_lineup, swapped_front_lineup, no_server_lineup):
        for lineup in (base_lineup, swapped_front_lineup, no_server_lineup, base_lineup[:3]):
            result = validate_lineup(lineup)
            assert result.is_legal == (len(result.violations) == 0)


class TestExplanations:
    """Tests for explanations and detailed messages."""

    def test_explain_row_order(self, swapped_front_lineup):
        violation = validate_lineup(swapped_front_lineup).violations[0]
        text = explain_violation(violation, swapped_front_lineup)
        assert text == (
            "Left Front Player 4 (slot 4) at (4.50, 2.00) must be to the left of "
            "Middle Front Player 3 (slot 3) at (1.50, 2.00)"
        )

    def test_explain_front_back(self, make_lineup):
        lineup = make_lineup({3: (4.5, 7.0)})
        violation = validate_lineup(lineup).violations[0]
        assert "must be in front of Middle Back" in explain_violation(violation, lineup)

    def test_explain_servers(self, base_lineup):
        violation = Violation(ViolationCode.MULTIPLE_SERVERS, (1, 4), "x")
        text = explain_violation(violation, base_lineup)
        assert text == (
            "Only one player can be the server. "
            "Currently serving: Player 1 (slot 1), Player 4 (slot 4)"
        )

    def test_explain_invalid_lineup_uses_message(self, base_lineup):
        violation = Violation(ViolationCode.INVALID_LINEUP, (), "Invalid lineup: nope")
        assert explain_violation(violation, base_lineup) == "Invalid lineup: nope"

    def test_detailed_violations_report_separation(self, make_lineup):
        lineup = make_lineup({4: (2.0, 2.0), 3: (2.01, 2.0)})
        detailed = detailed_violations(lineup)
        assert len(detailed) == 1
        assert "Current separation: 0.010m" in detailed[0].message
        assert "minimum required: 0.030m" in detailed[0].message


class TestSummaries:
    """Tests for severity and display messages."""

    def test_no_violations(self):
        summary = violation_summary([])
        assert summary.severity == "none"
        assert user_friendly_messages([]) == [
            "All players are positioned correctly according to volleyball overlap rules."
        ]

    def test_single_row_order_is_minor(self, swapped_front_lineup):
        violations = validate_lineup(swapped_front_lineup).violations
        summary = violation_summary(violations)
        assert summary.severity == "minor"
        assert summary.affected_slots == [3, 4]
        assert summary.violation_types == {"ROW_ORDER": 1}

    def test_single_front_back_is_major(self, make_lineup):
        violations = validate_lineup(make_lineup({3: (4.5, 7.0)})).violations
        assert violation_summary(violations).severity == "major"

    def test_many_is_critical(self, make_lineup):
        lineup = make_lineup({3: (4.5, 7.0), 4: (1.5, 7.0), 6: (1.0, 6.0)})
        violations = validate_lineup(lineup).violations
        assert len(violations) == 3
        assert violation_summary(violations).severity == "critical"

    def test_user_friendly_messages(self, swapped_front_lineup):
        violations = validate_lineup(swapped_front_lineup).violations
        messages = user_friendly_messages(violations)
        assert messages[0] == "1 positioning violation detected:"
        assert messages[1].startswith("1. Front row order violation")
        assert messages[2].startswith("Tip: Players in the same row")


class TestSuggestedFix:
    """Tests for fix suggestions."""

    def test_move_left(self, swapped_front_lineup):
        violation = validate_lineup(swapped_front_lineup).violations[0]
        assert suggested_fix(violation, swapped_front_lineup) == (
            "Move Left Front (Player 4) to the left of Middle Front (Player 3)."
        )

    def test_increase_separation(self, make_lineup):
        lineup = make_lineup({4: (2.0, 2.0), 3: (2.01, 2.0)})
        violation = validate_lineup(lineup).violations[0]
        assert suggested_fix(violation, lineup).startswith("Increase separation between")

    def test_structural_fixes(self, base_lineup):
        servers = Violation(ViolationCode.MULTIPLE_SERVERS, (), "x")
        invalid = Violation(ViolationCode.INVALID_LINEUP, (), "x")
        assert suggested_fix(servers, base_lineup) == "Designate only one player as the server."
        assert suggested_fix(invalid, base_lineup) == (
            "Ensure exactly 6 players with unique rotation slots (1-6)."
        )


class TestIsPositionValid:
    """Tests for what-if checks with one player moved."""

    def test_legal_move(self, base_lineup):
        assert is_position_valid(3, Point(4.0, 1.0), base_lineup)

    def test_illegal_move(self, base_lineup):
        assert not is_position_valid(3, Point(1.0, 2.0), base_lineup)

    def test_incomplete_lineup_allows_anything(self, base_lineup):
        others = [p for p in base_lineup if p.slot not in (3, 6)]
        assert is_position_valid(3, Point(0.0, 9.0), others)

    def test_moving_server_is_exempt(self, base_lineup):
        assert is_position_valid(1, Point(0.5, 10.5), base_lineup, is_server=True)

    def test_works_with_lineup_model(self, lineup_model):
        assert is_position_valid(4, Point(1.0, 1.0), Lineup.from_players(lineup_model))
