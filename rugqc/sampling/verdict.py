"""
Inspection verdict: the AQL decision and the risk level side by side.
"""

from rugqc.sampling.aql import InvalidInspectionInput, evaluate, evaluate_hundred_percent
from rugqc.sampling.risk import classify_risk
from rugqc.schemas.models import InspectionVerdict
from utils.config import config
from utils.logger import setup_logger
from utils.validators import validate_inspection_counts

logger = setup_logger(__name__, level=config.log_level, component="SAMPLING")

INSPECTION_MODES = ("aql", "hundred_percent")


def evaluate_inspection(
    lot_size: int,
    major_defect_count: int,
    minor_defect_count: int,
    critical_defect_count: int = 0,
    inspection_mode: str = "aql"
) -> InspectionVerdict:
    """
    Evaluate a lot and classify its risk.

    In ``aql`` mode critical defects only feed the risk level; the AQL
    result is computed from major and minor counts alone. In
    ``hundred_percent`` mode every piece is checked and any defect fails
    the lot.

    Raises:
        InvalidInspectionInput: listing every malformed count at once,
            or naming an unsupported inspection mode
    """
    if inspection_mode not in INSPECTION_MODES:
        logger.error(f"Rejected inspection mode: {inspection_mode!r}")
        raise InvalidInspectionInput(
            f"inspection_mode must be one of {', '.join(INSPECTION_MODES)}, got {inspection_mode!r}"
        )

    valid, errors, _ = validate_inspection_counts(
        lot_size, major_defect_count, minor_defect_count, critical_defect_count
    )
    if not valid:
        logger.error(f"Rejected inspection input: {'; '.join(errors)}")
        raise InvalidInspectionInput("; ".join(errors))

    if inspection_mode == "hundred_percent":
        aql = evaluate_hundred_percent(
            lot_size, major_defect_count, minor_defect_count, critical_defect_count
        )
    else:
        aql = evaluate(lot_size, major_defect_count, minor_defect_count)
    risk_level = classify_risk(major_defect_count, minor_defect_count, critical_defect_count)

    return InspectionVerdict(
        sample_size=aql.sample_size,
        major_limit=aql.major_limit,
        minor_limit=aql.minor_limit,
        result=aql.result,
        risk_level=risk_level,
    )
