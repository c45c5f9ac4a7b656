"""Tests for deferred violation analysis."""

from unittest.mock import patch

from volleyrules.core.models import ViolationCode
from volleyrules.rules import overlap
from volleyrules.rules.lazy import LazyOverlapResult, analyze_lineup


class TestAnalyzeLineup:
    """Tests for LazyOverlapResult."""

    def test_legal_lineup(self, base_lineup):
        result = analyze_lineup(base_lineup)
        assert isinstance(result, LazyOverlapResult)
        assert result.is_legal
        assert result.violations == []
        assert result.summary.severity == "none"

    def test_eager_fields(self, swapped_front_lineup):
        result = analyze_lineup(swapped_front_lineup)
        assert not result.is_legal
        assert [v.code for v in result.violations] == [ViolationCode.ROW_ORDER]
        assert result.violations[0].slots == (4, 3)

    def test_matches_plain_validation(self, swapped_front_lineup):
        lazy = analyze_lineup(swapped_front_lineup)
        plain = overlap.validate_lineup(swapped_front_lineup)
        assert lazy.result == plain

    def test_explanations_not_built_until_accessed(self, swapped_front_lineup):
        with patch.object(overlap, "explain_violation", wraps=overlap.explain_violation) as spy:
            result = analyze_lineup(swapped_front_lineup)
            assert spy.call_count == 0
            violation = result.violations[0]
            first = violation.message
            second = violation.message
            assert spy.call_count == 1
            assert first == second

    def test_summary_and_messages(self, swapped_front_lineup):
        result = analyze_lineup(swapped_front_lineup)
        assert result.summary.severity == "minor"
        assert result.user_friendly_messages[0] == "1 positioning violation detected:"
        assert result.affected_slots == [3, 4]

    def test_uses_cache(self, base_lineup, cache):
        analyze_lineup(base_lineup, cache=cache)
        analyze_lineup(base_lineup, cache=cache)
        assert cache.stats()["validation_hits"] == 1

    def test_violations_for_slot(self, swapped_front_lineup):
        result = analyze_lineup(swapped_front_lineup)
        assert len(result.violations_for_slot(3)) == 1
        assert result.violations_for_slot(6) == []


class TestLazyViolation:
    """Tests for deferred per-violation fields."""

    def test_fields(self, swapped_front_lineup):
        violation = analyze_lineup(swapped_front_lineup).violations[0]
        assert violation.message.startswith("Left Front Player 4 (slot 4) at (4.50, 2.00)")
        assert "Current separation" in violation.detailed_message
        assert violation.suggested_fix == (
            "Move Left Front (Player 4) to the left of Middle Front (Player 3)."
        )
        assert [p.slot for p in violation.affected_players] == [4, 3]
        assert set(violation.coordinates) == {3, 4}
        assert violation.severity == "minor"

    def test_front_back_severity(self, make_lineup):
        violation = analyze_lineup(make_lineup({3: (4.5, 7.0)})).violations[0]
        assert violation.severity == "major"

    def test_to_dict(self, swapped_front_lineup):
        data = analyze_lineup(swapped_front_lineup).to_dict()
        assert data["is_legal"] is False
        assert data["violations"][0]["code"] == "ROW_ORDER"
        assert data["violations"][0]["severity"] == "minor"
        assert data["summary"]["total_violations"] == 1
