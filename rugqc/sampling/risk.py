"""
Risk triage for inspections.

A business heuristic kept separate from the AQL decision: a lot can pass
sampling and still be flagged amber or red for owner attention.
"""

from typing import Iterable

from rugqc.sampling.aql import require_count
from rugqc.schemas.models import DashboardStats, RiskLevel
from utils.config import config
from utils.logger import setup_logger

logger = setup_logger(__name__, level=config.log_level, component="RISK")

RED_MAJOR_THRESHOLD = 4
AMBER_MAJOR_THRESHOLD = 2
AMBER_MINOR_THRESHOLD = 6


def classify_risk(
    major_defect_count: int,
    minor_defect_count: int,
    critical_defect_count: int = 0
) -> RiskLevel:
    """
    Classify an inspection as green, amber or red.

    Rules are checked in order, first match wins:
    red on any critical defect or 4+ majors, amber on 2+ majors or
    6+ minors, green otherwise.
    """
    major = require_count(major_defect_count, "major_defect_count")
    minor = require_count(minor_defect_count, "minor_defect_count")
    critical = require_count(critical_defect_count, "critical_defect_count")

    if critical > 0 or major >= RED_MAJOR_THRESHOLD:
        return "red"
    if major >= AMBER_MAJOR_THRESHOLD or minor >= AMBER_MINOR_THRESHOLD:
        return "amber"
    return "green"


def summarize_risk(risk_levels: Iterable[str]) -> DashboardStats:
    """
    Count inspections per triage bucket for the owner dashboard.

    Args:
        risk_levels: Risk level of each inspection

    Returns:
        DashboardStats (red -> critical, amber -> review, green -> clear)
    """
    counts = {"red": 0, "amber": 0, "green": 0}
    total = 0

    for level in risk_levels:
        total += 1
        if level in counts:
            counts[level] += 1
        else:
            logger.warning(f"Unknown risk level '{level}' counted in total only")

    return DashboardStats(
        critical=counts["red"],
        review=counts["amber"],
        clear=counts["green"],
        total=total,
    )
