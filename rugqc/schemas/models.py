"""
Pydantic schemas for data validation.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


KNOWN_SEVERITIES = ("critical", "major", "minor")
KNOWN_ITEM_STATUSES = ("pass", "minor", "major", "critical")
UNKNOWN_BUCKET = "unknown"

AQLOutcome = Literal["pass", "fail"]
RiskLevel = Literal["green", "amber", "red"]
SectionStatus = Literal["ALL PASS", "MINOR ISSUE", "ISSUES NOTED"]
InspectionMode = Literal["aql", "hundred_percent"]


def _normalize_label(value: Optional[str]) -> str:
    """Lowercase and strip a free-form classification label."""
    normalized = (value or "").strip().lower()
    return normalized or UNKNOWN_BUCKET


# ============================================================================
# SAMPLING
# ============================================================================

class LotSamplingPlan(BaseModel):
    """One row of the single-sampling lookup table."""
    model_config = ConfigDict(frozen=True)

    max_lot_size: Optional[int] = Field(
        ..., description="Inclusive lot-size upper bound; None marks the unbounded last row"
    )
    sample_size: int = Field(..., ge=1)
    major_defect_limit: int = Field(..., ge=0)
    minor_defect_limit: int = Field(..., ge=0)

    @property
    def is_unbounded(self) -> bool:
        return self.max_lot_size is None

    def covers(self, lot_size: int) -> bool:
        """Check if a lot of this size falls under the row."""
        return self.is_unbounded or lot_size <= self.max_lot_size


class AQLResult(BaseModel):
    """Pass/fail decision of a lot against its sampling plan."""
    model_config = ConfigDict(frozen=True)

    result: AQLOutcome
    sample_size: int
    major_limit: int
    minor_limit: int

    @property
    def passed(self) -> bool:
        return self.result == "pass"


class InspectionVerdict(BaseModel):
    """AQL verdict plus the independent risk triage level."""
    model_config = ConfigDict(frozen=True)

    sample_size: int
    major_limit: int
    minor_limit: int
    result: AQLOutcome
    risk_level: RiskLevel

    @property
    def passed(self) -> bool:
        return self.result == "pass"


class DashboardStats(BaseModel):
    """Triage counts for dashboard list views."""
    model_config = ConfigDict(frozen=True)

    critical: int = 0
    review: int = 0
    clear: int = 0
    total: int = 0


# ============================================================================
# INSPECTION INPUTS
# ============================================================================

class DefectRecord(BaseModel):
    """A defect recorded by the inspector."""
    model_config = ConfigDict(frozen=True)

    defect_id: Optional[str] = Field(None, description="Reference used by checklist items")
    severity: Optional[str] = Field(
        None,
        validate_default=True,
        description="critical, major or minor; missing or other labels go to the unknown bucket"
    )
    code: str = Field(default="", description="Defect code, e.g. BND-4IN")
    description: str = Field(default="")
    quantity_affected: int = Field(default=1, ge=1, description="Pieces affected")

    @field_validator("severity")
    @classmethod
    def normalize_severity(cls, v: Optional[str]) -> str:
        return _normalize_label(v)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def has_known_severity(self) -> bool:
        return self.severity in KNOWN_SEVERITIES


class ChecklistItemResult(BaseModel):
    """Outcome of a single checkpoint on the inspection checklist."""
    model_config = ConfigDict(frozen=True)

    section: str = Field(default="", description="Checklist section (category)")
    name: str = Field(..., description="Checkpoint name")
    status: str = Field(default="pass", description="pass, minor, major or critical")
    note: Optional[str] = None
    linked_defects: List[str] = Field(default_factory=list, description="defect_id references")

    @field_validator("status")
    @classmethod
    def normalize_status(cls, v: str) -> str:
        return _normalize_label(v)

    @property
    def has_known_status(self) -> bool:
        return self.status in KNOWN_ITEM_STATUSES


class PhotoRecord(BaseModel):
    """Inspection photo reference."""
    model_config = ConfigDict(frozen=True)

    path: str
    label: str = ""
    group: Optional[str] = None
    width: Optional[int] = Field(None, gt=0, description="Pixel width if known")
    height: Optional[int] = Field(None, gt=0, description="Pixel height if known")


class InspectionHeader(BaseModel):
    """Inspection header record used for the report."""
    model_config = ConfigDict(frozen=True)

    company_name: str = ""
    document_no: str = ""
    buyer_name: str = ""
    po_number: Optional[str] = None
    article_code: str = ""
    article_description: Optional[str] = None
    inspection_type: str = "final"
    inspection_mode: InspectionMode = Field(
        default="aql", description="aql samples per the plan table; hundred_percent checks every piece"
    )
    lot_size: int = Field(..., ge=0)
    order_quantity: Optional[int] = Field(None, ge=0)
    sample_size: Optional[int] = Field(None, ge=0, description="Falls back to the plan sample size")
    aql_label: Optional[str] = None
    inspector_name: str = ""
    remarks: Optional[str] = None
    ai_summary: Optional[str] = None
    photos: List[PhotoRecord] = Field(default_factory=list)

    @field_validator("inspection_type")
    @classmethod
    def normalize_inspection_type(cls, v: str) -> str:
        return v.strip().lower().replace("-", "_")


# ============================================================================
# REPORT MODEL
# ============================================================================

class ReportHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    company_name: str
    document_no: str
    title: str
    date_label: str


class DetailRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class DetailsTable(BaseModel):
    """Two-column inspection details block."""
    model_config = ConfigDict(frozen=True)

    left: List[DetailRow]
    right: List[DetailRow]


class ResultBanner(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    tone: AQLOutcome
    risk_level: RiskLevel
    accepted: int
    rejected: int
    subtitle: str


class DefectSummaryRow(BaseModel):
    """Found vs. limit for one severity bucket."""
    model_config = ConfigDict(frozen=True)

    severity: str
    label: str
    found: int
    limit: Optional[int]
    status: Literal["Pass", "Fail", "Review"]
    known: bool = True


class ChecklistRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    status: str
    known_status: bool
    tone: str
    badge_text: str


class ChecklistSection(BaseModel):
    """Checklist items of one section; unknown sections keep their raw label."""
    model_config = ConfigDict(frozen=True)

    name: str
    known: bool
    items: List[ChecklistRow]
    section_status: SectionStatus


class SeverityBadge(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    color: str
    background: str


class DefectDetailRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    severity: str
    badge: SeverityBadge
    description: str
    code: str
    quantity: int
    quantity_label: str


class PhotoCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    label: str
    width: Optional[int] = None
    height: Optional[int] = None


class PhotoGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    rows: List[List[PhotoCell]]

    @property
    def photo_count(self) -> int:
        return sum(len(row) for row in self.rows)


class InspectorBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    remarks: str


class ReportModel(BaseModel):
    """Layout-ready projection of an inspection consumed by the PDF renderer."""
    model_config = ConfigDict(frozen=True)

    header: ReportHeader
    details_table: DetailsTable
    verdict: InspectionVerdict
    banner: ResultBanner
    defect_summary_by_severity: Dict[str, DefectSummaryRow]
    checklist_sections: List[ChecklistSection]
    defect_detail_rows: List[DefectDetailRow]
    photo_groups: List[PhotoGroup]
    inspector: InspectorBlock

    @property
    def photo_count(self) -> int:
        return sum(group.photo_count for group in self.photo_groups)


__all__ = [
    "KNOWN_SEVERITIES",
    "KNOWN_ITEM_STATUSES",
    "UNKNOWN_BUCKET",
    "InspectionMode",
    "LotSamplingPlan",
    "AQLResult",
    "InspectionVerdict",
    "DashboardStats",
    "DefectRecord",
    "ChecklistItemResult",
    "PhotoRecord",
    "InspectionHeader",
    "ReportHeader",
    "DetailRow",
    "DetailsTable",
    "ResultBanner",
    "DefectSummaryRow",
    "ChecklistRow",
    "ChecklistSection",
    "SeverityBadge",
    "DefectDetailRow",
    "PhotoCell",
    "PhotoGroup",
    "InspectorBlock",
    "ReportModel",
]
