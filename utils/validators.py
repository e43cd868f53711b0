"""
Input validators for RugQC.
Provides validation functions for inspection inputs.
"""

from numbers import Integral
from pathlib import Path
from typing import Any, Optional, Tuple
import re

from rugqc.schemas.models import KNOWN_SEVERITIES


INSPECTION_TYPES = ["final", "inline", "on_loom", "bazar"]


def validate_count(value: Any, field_name: str = "count") -> Tuple[bool, Optional[str], int]:
    """
    Validate a lot size or defect count.

    Args:
        value: Candidate value
        field_name: Name used in the error message

    Returns:
        Tuple of (is_valid, error_message, normalized_value)
    """
    # bool is an Integral subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, Integral):
        return False, f"{field_name} must be a non-negative integer, got {value!r}", 0

    if value < 0:
        return False, f"{field_name} must be a non-negative integer, got {value}", 0

    return True, None, int(value)


def validate_inspection_counts(
    lot_size: Any,
    major_defects: Any,
    minor_defects: Any,
    critical_defects: Any = 0
) -> Tuple[bool, list, dict]:
    """
    Validate the numeric inputs of an inspection verdict.

    Returns:
        Tuple of (is_valid, errors, validated_counts)
    """
    errors = []
    counts = {}

    for name, value in (
        ("lot_size", lot_size),
        ("major_defects", major_defects),
        ("minor_defects", minor_defects),
        ("critical_defects", critical_defects),
    ):
        valid, error, normalized = validate_count(value, name)
        if not valid:
            errors.append(error)
        else:
            counts[name] = normalized

    return len(errors) == 0, errors, counts


def validate_severity(value: Optional[str]) -> Tuple[bool, Optional[str], str]:
    """
    Validate defect severity.

    Returns:
        Tuple of (is_valid, error_message, normalized_value)
    """
    normalized = (value or "").strip().lower()

    if normalized not in KNOWN_SEVERITIES:
        return False, f"Invalid severity. Must be one of: {list(KNOWN_SEVERITIES)}", normalized

    return True, None, normalized


def validate_inspection_type(value: str) -> Tuple[bool, Optional[str], str]:
    """
    Validate inspection type input.

    Returns:
        Tuple of (is_valid, error_message, normalized_value)
    """
    normalized = value.lower().strip().replace("-", "_")

    if normalized not in INSPECTION_TYPES:
        return False, f"Invalid inspection type. Must be one of: {INSPECTION_TYPES}", value

    return True, None, normalized


def validate_defect_code(value: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Validate a defect code such as ``BND-4IN``.

    Returns:
        Tuple of (is_valid, error_message, normalized_value)
    """
    if not value:
        return True, None, None

    normalized = value.strip().upper()

    if not re.fullmatch(r"[A-Z0-9]{2,4}-[A-Z0-9]{2,4}", normalized):
        return False, f"Invalid defect code format: {value}", value

    return True, None, normalized


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for safe storage.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    # Document numbers like ST/IP/2026-0215 keep all of their parts
    filename = filename.replace("/", "-").replace("\\", "-")
    filename = Path(filename).name

    # Replace dangerous characters
    sanitized = re.sub(r'[<>:"|?*\s]', '_', filename)

    # Limit length
    name = Path(sanitized).stem[:50]
    ext = Path(sanitized).suffix[:10]

    return f"{name}{ext}"
