"""
AQL sampling-plan evaluator.

Single sampling, normal severity, General Inspection Level II
(ANSI Z1.4-2008). Lot size selects one row of a fixed table; the row gives
the sample size and the accept numbers for major and minor defects.
Critical defects are not part of the AQL decision; see ``rugqc.sampling.risk``.
"""

from typing import Any, Tuple

from rugqc.schemas.models import AQLResult, LotSamplingPlan
from utils.config import config
from utils.logger import setup_logger
from utils.validators import validate_count

logger = setup_logger(__name__, level=config.log_level, component="SAMPLING")


# ============================================================================
# SAMPLING TABLE
# ============================================================================

AQL_PLAN_TABLE: Tuple[LotSamplingPlan, ...] = (
    LotSamplingPlan(max_lot_size=50, sample_size=8, major_defect_limit=0, minor_defect_limit=1),
    LotSamplingPlan(max_lot_size=90, sample_size=13, major_defect_limit=1, minor_defect_limit=2),
    LotSamplingPlan(max_lot_size=150, sample_size=20, major_defect_limit=1, minor_defect_limit=3),
    LotSamplingPlan(max_lot_size=280, sample_size=32, major_defect_limit=2, minor_defect_limit=5),
    LotSamplingPlan(max_lot_size=500, sample_size=50, major_defect_limit=3, minor_defect_limit=7),
    LotSamplingPlan(max_lot_size=1200, sample_size=80, major_defect_limit=5, minor_defect_limit=10),
    LotSamplingPlan(max_lot_size=3200, sample_size=125, major_defect_limit=7, minor_defect_limit=14),
    LotSamplingPlan(max_lot_size=10000, sample_size=200, major_defect_limit=10, minor_defect_limit=21),
    LotSamplingPlan(max_lot_size=None, sample_size=315, major_defect_limit=14, minor_defect_limit=21),
)

# Any critical defect rejects its severity row on the report
CRITICAL_DEFECT_LIMIT = 0

# 100% inspection accepts no defect of any severity
HUNDRED_PERCENT_DEFECT_LIMIT = 0


class InvalidInspectionInput(ValueError):
    """Raised when a lot size or defect count is not a non-negative integer."""


def require_count(value: Any, field_name: str) -> int:
    """Return ``value`` as an int or raise ``InvalidInspectionInput``."""
    valid, error, normalized = validate_count(value, field_name)
    if not valid:
        logger.error(f"Rejected inspection input: {error}")
        raise InvalidInspectionInput(error)
    return normalized


# ============================================================================
# OPERATIONS
# ============================================================================

def select_plan(lot_size: int) -> LotSamplingPlan:
    """
    Select the sampling plan for a lot.

    Args:
        lot_size: Units in the lot (0 matches the first row)

    Returns:
        First table row whose upper bound is >= lot_size

    Raises:
        InvalidInspectionInput: lot_size is negative or not an integer
    """
    lot_size = require_count(lot_size, "lot_size")

    for plan in AQL_PLAN_TABLE:
        if plan.covers(lot_size):
            return plan

    # Unreachable: the last row is unbounded
    return AQL_PLAN_TABLE[-1]


def evaluate(lot_size: int, major_defect_count: int, minor_defect_count: int) -> AQLResult:
    """
    Decide pass/fail for a lot against its sampling plan.

    The lot passes only when both the major and the minor count are within
    their accept numbers.

    Args:
        lot_size: Units in the lot
        major_defect_count: Major defects found in the sample
        minor_defect_count: Minor defects found in the sample

    Returns:
        AQLResult with the verdict and the plan numbers used
    """
    plan = select_plan(lot_size)
    major = require_count(major_defect_count, "major_defect_count")
    minor = require_count(minor_defect_count, "minor_defect_count")

    passed = major <= plan.major_defect_limit and minor <= plan.minor_defect_limit

    logger.debug(
        f"AQL lot={lot_size} sample={plan.sample_size} "
        f"major={major}/{plan.major_defect_limit} minor={minor}/{plan.minor_defect_limit} "
        f"-> {'pass' if passed else 'fail'}"
    )

    return AQLResult(
        result="pass" if passed else "fail",
        sample_size=plan.sample_size,
        major_limit=plan.major_defect_limit,
        minor_limit=plan.minor_defect_limit,
    )


def evaluate_hundred_percent(
    lot_size: int,
    major_defect_count: int,
    minor_defect_count: int,
    critical_defect_count: int = 0
) -> AQLResult:
    """
    Decide pass/fail when every piece in the lot is inspected.

    The sample is the whole lot and nothing is tolerated: the lot passes
    only with zero critical, major and minor defects.
    """
    lot_size = require_count(lot_size, "lot_size")
    major = require_count(major_defect_count, "major_defect_count")
    minor = require_count(minor_defect_count, "minor_defect_count")
    critical = require_count(critical_defect_count, "critical_defect_count")

    passed = critical == 0 and major == 0 and minor == 0

    logger.debug(
        f"100% lot={lot_size} critical={critical} major={major} minor={minor} "
        f"-> {'pass' if passed else 'fail'}"
    )

    return AQLResult(
        result="pass" if passed else "fail",
        sample_size=lot_size,
        major_limit=HUNDRED_PERCENT_DEFECT_LIMIT,
        minor_limit=HUNDRED_PERCENT_DEFECT_LIMIT,
    )
