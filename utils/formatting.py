"""
Display formatting helpers: inspection reference IDs and report dates.
"""

import random
from datetime import date, datetime, timezone
from typing import Any, Optional

# No 0/O or 1/I so references can be read aloud on the shop floor
INSPECTION_ID_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INSPECTION_ID_SUFFIX_LENGTH = 4

DEFAULT_DATE_FORMAT = "%d %b %Y"


def generate_inspection_id(
    today: Optional[date] = None,
    rng: Optional[random.Random] = None
) -> str:
    """
    Create an inspection reference like ``INS-20260220-A3K9``.

    Args:
        today: Date stamped into the reference (defaults to the local date)
        rng: Random source for the suffix

    Returns:
        Inspection reference string
    """
    today = today or date.today()
    rng = rng or random.Random()
    suffix = "".join(
        rng.choice(INSPECTION_ID_ALPHABET) for _ in range(INSPECTION_ID_SUFFIX_LENGTH)
    )
    return f"INS-{today:%Y%m%d}-{suffix}"


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, dict) and "_seconds" in value:
        return datetime.fromtimestamp(value["_seconds"], tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    return None


def format_date(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Format a date for display.

    Accepts ``date``/``datetime`` objects, ISO strings and Firestore-style
    ``{"_seconds": n}`` timestamps. Missing or unparseable input yields "N/A".
    """
    if not value:
        return "N/A"

    try:
        parsed = _coerce_datetime(value)
    except (TypeError, ValueError, OverflowError, OSError):
        return "N/A"

    if parsed is None:
        return "N/A"
    return parsed.strftime(fmt)
