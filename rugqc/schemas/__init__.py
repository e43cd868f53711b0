"""
Pydantic schemas for RugQC.
"""

from rugqc.schemas.models import (
    LotSamplingPlan,
    AQLResult,
    InspectionVerdict,
    DashboardStats,
    DefectRecord,
    ChecklistItemResult,
    PhotoRecord,
    InspectionHeader,
    ReportModel,
)

__all__ = [
    "LotSamplingPlan",
    "AQLResult",
    "InspectionVerdict",
    "DashboardStats",
    "DefectRecord",
    "ChecklistItemResult",
    "PhotoRecord",
    "InspectionHeader",
    "ReportModel",
]
