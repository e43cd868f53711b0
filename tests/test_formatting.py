"""
Unit tests for display formatting helpers.
"""

import random
import re
from datetime import date, datetime

from utils.formatting import INSPECTION_ID_ALPHABET, format_date, generate_inspection_id


class TestGenerateInspectionId:
    """Tests for inspection reference IDs."""

    def test_format(self):
        reference = generate_inspection_id(today=date(2026, 2, 20))

        assert re.fullmatch(r"INS-20260220-[A-Z2-9]{4}", reference)

    def test_suffix_alphabet(self):
        reference = generate_inspection_id(rng=random.Random(7))
        suffix = reference.rsplit("-", 1)[1]

        assert all(ch in INSPECTION_ID_ALPHABET for ch in suffix)
        assert not set(suffix) & set("01IO")

    def test_seeded_rng_is_repeatable(self):
        day = date(2026, 1, 1)

        first = generate_inspection_id(today=day, rng=random.Random(42))
        second = generate_inspection_id(today=day, rng=random.Random(42))

        assert first == second


class TestFormatDate:
    """Tests for format_date input handling."""

    def test_date(self):
        assert format_date(date(2026, 2, 15)) == "15 Feb 2026"

    def test_datetime_custom_format(self):
        assert format_date(datetime(2026, 2, 15, 9, 30), "%d %B %Y") == "15 February 2026"

    def test_iso_string_with_z(self):
        assert format_date("2026-02-15T10:00:00Z") == "15 Feb 2026"

    def test_seconds_mapping(self):
        # 2026-02-15T00:00:00Z
        assert format_date({"_seconds": 1771113600}) == "15 Feb 2026"

    def test_missing(self):
        assert format_date(None) == "N/A"
        assert format_date("") == "N/A"

    def test_unparseable(self):
        assert format_date("not a date") == "N/A"
        assert format_date(12345) == "N/A"
