"""
Unit tests for risk triage.
"""

import pytest

from rugqc.sampling import InvalidInspectionInput, classify_risk, summarize_risk


class TestClassifyRisk:
    """Tests for classify_risk rule ordering."""

    @pytest.mark.parametrize(
        "major,minor,critical,expected",
        [
            (0, 0, 0, "green"),
            (1, 5, 0, "green"),
            (0, 6, 0, "amber"),
            (2, 0, 0, "amber"),
            (3, 10, 0, "amber"),
            (4, 0, 0, "red"),
            (0, 0, 1, "red"),
            (1, 2, 1, "red"),
        ]
    )
    def test_levels(self, major, minor, critical, expected):
        """First matching rule wins."""
        assert classify_risk(major, minor, critical) == expected

    def test_critical_defaults_to_zero(self):
        """Omitting critical count behaves as zero criticals."""
        assert classify_risk(1, 2) == "green"

    def test_minors_alone_never_red(self):
        """Minor defects can raise risk to amber at most."""
        assert classify_risk(0, 500) == "amber"

    def test_rejects_bad_counts(self):
        """Negative or non-integer counts raise."""
        with pytest.raises(InvalidInspectionInput):
            classify_risk(-1, 0)
        with pytest.raises(InvalidInspectionInput):
            classify_risk(0, 0, critical_defect_count=False)


class TestSummarizeRisk:
    """Tests for dashboard triage counts."""

    def test_counts_per_bucket(self):
        """red -> critical, amber -> review, green -> clear."""
        stats = summarize_risk(["red", "green", "amber", "green", "green"])

        assert stats.critical == 1
        assert stats.review == 1
        assert stats.clear == 3
        assert stats.total == 5

    def test_empty(self):
        """No inspections gives all zeros."""
        stats = summarize_risk([])

        assert (stats.critical, stats.review, stats.clear, stats.total) == (0, 0, 0, 0)

    def test_unknown_level_counts_in_total_only(self):
        """Unrecognised levels are not dropped from the total."""
        stats = summarize_risk(["green", "purple"])

        assert stats.clear == 1
        assert stats.total == 2
