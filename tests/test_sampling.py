"""
Unit tests for AQL plan selection and lot evaluation.
"""

import pytest

from rugqc.sampling import (
    AQL_PLAN_TABLE,
    InvalidInspectionInput,
    evaluate,
    evaluate_hundred_percent,
    evaluate_inspection,
    select_plan,
)


class TestSelectPlan:
    """Tests for sampling-plan lookup."""

    @pytest.mark.parametrize("lot_size", [0, 1, 25, 50])
    def test_smallest_lots_use_first_row(self, lot_size):
        """Lots up to 50 (and an empty lot) sample 8 pieces with limits 0/1."""
        plan = select_plan(lot_size)

        assert plan.sample_size == 8
        assert plan.major_defect_limit == 0
        assert plan.minor_defect_limit == 1

    @pytest.mark.parametrize("lot_size", [10001, 50000, 10 ** 9])
    def test_large_lots_use_unbounded_row(self, lot_size):
        """Lots over 10000 fall into the open-ended last row."""
        plan = select_plan(lot_size)

        assert plan.is_unbounded
        assert plan.sample_size == 315
        assert plan.major_defect_limit == 14
        assert plan.minor_defect_limit == 21

    @pytest.mark.parametrize(
        "lot_size,expected_sample",
        [
            (50, 8), (51, 13),
            (90, 13), (91, 20),
            (150, 20), (151, 32),
            (280, 32), (281, 50),
            (500, 50), (501, 80),
            (1200, 80), (1201, 125),
            (3200, 125), (3201, 200),
            (10000, 200), (10001, 315),
        ]
    )
    def test_breakpoints_are_inclusive(self, lot_size, expected_sample):
        """Each upper bound belongs to its own row; one more moves to the next."""
        assert select_plan(lot_size).sample_size == expected_sample

    def test_limits_never_decrease_with_lot_size(self):
        """Sample size and accept numbers are monotonic over the table."""
        previous = None
        for plan in AQL_PLAN_TABLE:
            if previous is not None:
                assert plan.sample_size > previous.sample_size
                assert plan.major_defect_limit >= previous.major_defect_limit
                assert plan.minor_defect_limit >= previous.minor_defect_limit
            previous = plan

    def test_only_last_row_is_unbounded(self):
        """The table is total: exactly the final row has no upper bound."""
        assert AQL_PLAN_TABLE[-1].is_unbounded
        assert not any(plan.is_unbounded for plan in AQL_PLAN_TABLE[:-1])

    @pytest.mark.parametrize("bad", [-1, 1.5, "120", None, True])
    def test_rejects_malformed_lot_size(self, bad):
        """Negative, fractional, string, missing and boolean lot sizes raise."""
        with pytest.raises(InvalidInspectionInput):
            select_plan(bad)

    def test_invalid_input_is_value_error(self):
        """Callers catching ValueError also catch rejected input."""
        with pytest.raises(ValueError):
            select_plan(-5)


class TestEvaluate:
    """Tests for the pass/fail decision."""

    def test_sample_lot_passes(self):
        """Lot of 120 with 1 major and 2 minor is within 1/3."""
        result = evaluate(120, 1, 2)

        assert result.result == "pass"
        assert result.passed
        assert result.sample_size == 20
        assert result.major_limit == 1
        assert result.minor_limit == 3

    def test_major_over_limit_fails(self):
        """Lot of 120 with 2 majors exceeds the major accept number."""
        assert evaluate(120, 2, 0).result == "fail"

    def test_minor_over_limit_fails(self):
        """Lot of 120 with 4 minors exceeds the minor accept number."""
        assert evaluate(120, 0, 4).result == "fail"

    def test_lot_500_at_limits_passes(self):
        """Counts equal to the limits pass."""
        result = evaluate(500, 3, 7)

        assert result.result == "pass"
        assert result.sample_size == 50

    def test_lot_500_one_over_fails(self):
        """One defect over either limit fails."""
        assert evaluate(500, 4, 7).result == "fail"
        assert evaluate(500, 3, 8).result == "fail"

    def test_smallest_lot_allows_no_major(self):
        """First row tolerates zero majors."""
        assert evaluate(30, 1, 0).result == "fail"
        assert evaluate(30, 0, 1).result == "pass"

    def test_rejects_negative_counts(self):
        """Defect counts must be non-negative integers."""
        with pytest.raises(InvalidInspectionInput):
            evaluate(120, -1, 0)
        with pytest.raises(InvalidInspectionInput):
            evaluate(120, 0, 2.0)

    @pytest.mark.parametrize("lot_size", [1, 50, 51, 120, 500, 501, 10000, 10001])
    def test_more_defects_never_turn_fail_into_pass(self, lot_size):
        """Adding a major or a minor defect to a failing lot keeps it failing."""
        for major in range(0, 17):
            for minor in range(0, 25):
                if evaluate(lot_size, major, minor).passed:
                    continue
                assert evaluate(lot_size, major + 1, minor).result == "fail"
                assert evaluate(lot_size, major, minor + 1).result == "fail"


class TestEvaluateInspection:
    """Tests for the combined verdict."""

    def test_verdict_carries_both_outputs(self):
        """AQL result and risk level are exposed side by side."""
        verdict = evaluate_inspection(120, 1, 2)

        assert verdict.result == "pass"
        assert verdict.risk_level == "green"
        assert verdict.sample_size == 20

    def test_critical_only_affects_risk(self):
        """A critical defect leaves the AQL result alone but flags red."""
        verdict = evaluate_inspection(120, 0, 0, critical_defect_count=1)

        assert verdict.result == "pass"
        assert verdict.risk_level == "red"

    def test_pass_with_amber_risk(self):
        """Large lot within limits can still need review."""
        verdict = evaluate_inspection(500, 2, 0)

        assert verdict.passed
        assert verdict.risk_level == "amber"

    def test_reports_every_bad_count(self):
        """All malformed counts are named in one error."""
        with pytest.raises(InvalidInspectionInput) as exc_info:
            evaluate_inspection(-1, "x", 0)

        message = str(exc_info.value)
        assert "lot_size" in message
        assert "major_defects" in message

    def test_hundred_percent_mode(self):
        """Full inspection samples the whole lot and tolerates nothing."""
        verdict = evaluate_inspection(120, 0, 1, inspection_mode="hundred_percent")

        assert verdict.result == "fail"
        assert verdict.sample_size == 120
        assert (verdict.major_limit, verdict.minor_limit) == (0, 0)
        assert verdict.risk_level == "green"

    def test_rejects_unknown_mode(self):
        with pytest.raises(InvalidInspectionInput) as exc_info:
            evaluate_inspection(120, 0, 0, inspection_mode="skip_lot")

        assert "inspection_mode" in str(exc_info.value)


class TestHundredPercent:
    """Tests for full (100%) inspection."""

    def test_clean_lot_passes(self):
        """Zero defects of every severity passes."""
        result = evaluate_hundred_percent(120, 0, 0, 0)

        assert result.passed
        assert result.sample_size == 120
        assert result.major_limit == 0
        assert result.minor_limit == 0

    @pytest.mark.parametrize(
        "major,minor,critical",
        [(0, 1, 0), (1, 0, 0), (0, 0, 1)]
    )
    def test_any_defect_fails(self, major, minor, critical):
        """A single defect of any severity fails the lot."""
        assert evaluate_hundred_percent(120, major, minor, critical).result == "fail"

    def test_counts_within_aql_limits_still_fail(self):
        """Counts the sampling plan would accept are rejected under 100%."""
        assert evaluate(500, 3, 7).passed
        assert not evaluate_hundred_percent(500, 3, 7).passed

    def test_empty_lot(self):
        assert evaluate_hundred_percent(0, 0, 0).sample_size == 0

    def test_rejects_negative_counts(self):
        with pytest.raises(InvalidInspectionInput):
            evaluate_hundred_percent(120, 0, 0, -1)
