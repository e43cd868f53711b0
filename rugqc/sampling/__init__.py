"""
Sampling and risk module for RugQC.
"""

from rugqc.sampling.aql import (
    AQL_PLAN_TABLE,
    CRITICAL_DEFECT_LIMIT,
    HUNDRED_PERCENT_DEFECT_LIMIT,
    InvalidInspectionInput,
    select_plan,
    evaluate,
    evaluate_hundred_percent,
)
from rugqc.sampling.risk import classify_risk, summarize_risk
from rugqc.sampling.verdict import evaluate_inspection

__all__ = [
    "AQL_PLAN_TABLE",
    "CRITICAL_DEFECT_LIMIT",
    "HUNDRED_PERCENT_DEFECT_LIMIT",
    "InvalidInspectionInput",
    "select_plan",
    "evaluate",
    "evaluate_hundred_percent",
    "classify_risk",
    "summarize_risk",
    "evaluate_inspection",
]
