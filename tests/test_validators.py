"""
Unit tests for input validators.
"""

import pytest

from utils.validators import (
    sanitize_filename,
    validate_count,
    validate_defect_code,
    validate_inspection_counts,
    validate_inspection_type,
    validate_severity,
)


class TestValidateCount:
    """Tests for count validation."""

    def test_valid(self):
        assert validate_count(12, "lot_size") == (True, None, 12)

    def test_zero_is_valid(self):
        assert validate_count(0)[0] is True

    @pytest.mark.parametrize("bad", [-1, 2.5, "3", None, True, False])
    def test_invalid(self, bad):
        valid, error, _ = validate_count(bad, "lot_size")

        assert valid is False
        assert "lot_size" in error

    def test_inspection_counts_collects_errors(self):
        valid, errors, counts = validate_inspection_counts(120, -1, "two")

        assert valid is False
        assert len(errors) == 2
        assert counts == {"lot_size": 120, "critical_defects": 0}


class TestLabelValidators:
    """Tests for severity, type and code validation."""

    def test_severity_normalized(self):
        assert validate_severity("  Major ") == (True, None, "major")

    def test_unknown_severity(self):
        valid, error, normalized = validate_severity("cosmetic")

        assert valid is False
        assert normalized == "cosmetic"

    @pytest.mark.parametrize("value,expected", [("Final", "final"), ("on-loom", "on_loom"), ("INLINE", "inline")])
    def test_inspection_type(self, value, expected):
        assert validate_inspection_type(value) == (True, None, expected)

    def test_unknown_inspection_type(self):
        assert validate_inspection_type("random")[0] is False

    def test_defect_code(self):
        assert validate_defect_code(" bnd-4in ") == (True, None, "BND-4IN")

    def test_empty_defect_code(self):
        assert validate_defect_code("") == (True, None, None)

    def test_malformed_defect_code(self):
        assert validate_defect_code("BINDING")[0] is False


class TestSanitizeFilename:
    """Tests for report filename sanitisation."""

    def test_document_number_slashes(self):
        assert sanitize_filename("ST/IP/2026-0215") == "ST-IP-2026-0215"

    def test_spaces_and_reserved_characters(self):
        assert sanitize_filename("lot 12:final?.pdf") == "lot_12_final_.pdf"
