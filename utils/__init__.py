"""
Utility modules for RugQC.
"""

from utils.config import config
from utils.logger import setup_logger
from utils.formatting import format_date, generate_inspection_id
from utils.validators import (
    validate_count,
    validate_inspection_counts,
    validate_severity,
    validate_inspection_type,
    validate_defect_code,
    sanitize_filename,
)

__all__ = [
    "config",
    "setup_logger",
    "format_date",
    "generate_inspection_id",
    "validate_count",
    "validate_inspection_counts",
    "validate_severity",
    "validate_inspection_type",
    "validate_defect_code",
    "sanitize_filename",
]
