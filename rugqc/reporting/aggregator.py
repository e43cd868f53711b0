"""
Inspection report aggregation.
Projects an inspection's checklist and defects into the layout-ready
ReportModel consumed by the PDF renderer.
"""

from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from rugqc.catalog import Catalog, load_catalog
from rugqc.reporting.layout import chunk, quantity_label, truncate_label
from rugqc.sampling.aql import CRITICAL_DEFECT_LIMIT
from rugqc.sampling.verdict import evaluate_inspection
from rugqc.schemas.models import (
    KNOWN_SEVERITIES,
    UNKNOWN_BUCKET,
    ChecklistItemResult,
    ChecklistRow,
    ChecklistSection,
    DefectDetailRow,
    DefectRecord,
    DefectSummaryRow,
    DetailRow,
    DetailsTable,
    InspectionHeader,
    InspectionVerdict,
    InspectorBlock,
    PhotoCell,
    PhotoGroup,
    ReportHeader,
    ReportModel,
    ResultBanner,
    SeverityBadge,
)
from utils.config import Config, config
from utils.logger import setup_logger
from utils.validators import validate_defect_code, validate_inspection_type, validate_severity

logger = setup_logger(__name__, level=config.log_level, component="REPORT_MODEL")

M = TypeVar("M", bound=BaseModel)


# ============================================================================
# DISPLAY CONSTANTS
# ============================================================================

REPORT_TITLE = "Quality Inspection Report"

SECTION_ALL_PASS = "ALL PASS"
SECTION_MINOR_ISSUE = "MINOR ISSUE"
SECTION_ISSUES_NOTED = "ISSUES NOTED"
UNKNOWN_SECTION_LABEL = "Unknown"
DEFAULT_PHOTO_GROUP = "Inspection Photos"
HUNDRED_PERCENT_LABEL = "100% Inspection"

SEVERITY_BADGES = {
    "critical": SeverityBadge(label="Critical", color="red", background="red_light"),
    "major": SeverityBadge(label="Major", color="red", background="red_light"),
    "minor": SeverityBadge(label="Minor", color="amber", background="amber_light"),
}
UNKNOWN_BADGE = SeverityBadge(label="Unknown", color="gray", background="gray_light")

ITEM_TONES = {
    "pass": "emerald",
    "minor": "amber",
    "major": "red",
    "critical": "red",
}

INSPECTION_TYPE_LABELS = {
    "final": "Final (Pre-shipment)",
    "inline": "Inline",
    "on_loom": "On-Loom",
    "bazar": "Bazar",
}


def _coerce(model_cls: Type[M], value: Any) -> M:
    if isinstance(value, model_cls):
        return value
    return model_cls.model_validate(value)


def section_status(statuses: Iterable[str]) -> str:
    """
    Aggregate status of a checklist section.

    Any major or critical item -> ISSUES NOTED; all items pass -> ALL PASS;
    anything else (minor or unknown statuses) -> MINOR ISSUE.
    """
    statuses = list(statuses)
    if any(s in ("major", "critical") for s in statuses):
        return SECTION_ISSUES_NOTED
    if all(s == "pass" for s in statuses):
        return SECTION_ALL_PASS
    return SECTION_MINOR_ISSUE


class ReportModelBuilder:
    """Builds ReportModel instances; holds no per-report state."""

    def __init__(self, catalog: Optional[Catalog] = None, settings: Optional[Config] = None):
        self.logger = logger
        self.catalog = catalog or load_catalog()
        self.settings = settings or config

    def build(
        self,
        inspection: Any,
        checklist_items: Iterable[Any],
        defects: Iterable[Any],
        today_label: Optional[str] = None
    ) -> ReportModel:
        """
        Build the report model for one inspection.

        Args:
            inspection: InspectionHeader (or dict)
            checklist_items: ChecklistItemResult items (or dicts) in checklist order
            defects: DefectRecord items (or dicts) in entry order
            today_label: Display date supplied by the caller

        Returns:
            ReportModel
        """
        header = _coerce(InspectionHeader, inspection)
        items = [_coerce(ChecklistItemResult, item) for item in checklist_items]
        defect_list = [_coerce(DefectRecord, d) for d in defects]

        self.logger.info(
            f"Building report model for {header.document_no or 'inspection'}: "
            f"{len(items)} checklist items, {len(defect_list)} defects"
        )

        totals = self._tally_severities(defect_list)
        verdict = evaluate_inspection(
            header.lot_size,
            totals["major"],
            totals["minor"],
            totals["critical"],
            inspection_mode=header.inspection_mode,
        )
        sample_size = header.sample_size if header.sample_size is not None else verdict.sample_size

        return ReportModel(
            header=ReportHeader(
                company_name=header.company_name or self.settings.default_company_name,
                document_no=header.document_no,
                title=REPORT_TITLE,
                date_label=today_label or "",
            ),
            details_table=self._build_details(header, sample_size),
            verdict=verdict,
            banner=self._build_banner(header, verdict, totals, sample_size),
            defect_summary_by_severity=self._build_defect_summary(verdict, totals),
            checklist_sections=self._build_checklist_sections(items, defect_list),
            defect_detail_rows=self._build_defect_rows(defect_list),
            photo_groups=self._build_photo_groups(header),
            inspector=InspectorBlock(
                name=header.inspector_name,
                remarks=header.remarks or header.ai_summary or "",
            ),
        )

    # ------------------------------------------------------------------
    # Defect counts
    # ------------------------------------------------------------------

    def _tally_severities(self, defects: List[DefectRecord]) -> Dict[str, int]:
        """Sum quantity_affected per severity; unknown labels share one bucket."""
        totals = {severity: 0 for severity in KNOWN_SEVERITIES}
        totals[UNKNOWN_BUCKET] = 0

        for defect in defects:
            valid, _, severity = validate_severity(defect.severity)
            if valid:
                totals[severity] += defect.quantity_affected
            else:
                self.logger.warning(
                    f"Defect {defect.code or defect.defect_id or '?'} has unknown severity "
                    f"'{defect.severity}' - routed to unknown bucket"
                )
                totals[UNKNOWN_BUCKET] += defect.quantity_affected

        return totals

    def _build_defect_summary(
        self,
        verdict: InspectionVerdict,
        totals: Dict[str, int]
    ) -> Dict[str, DefectSummaryRow]:
        limits = {
            "critical": CRITICAL_DEFECT_LIMIT,
            "major": verdict.major_limit,
            "minor": verdict.minor_limit,
        }

        summary = {}
        for severity in KNOWN_SEVERITIES:
            found = totals[severity]
            summary[severity] = DefectSummaryRow(
                severity=severity,
                label=severity.title(),
                found=found,
                limit=limits[severity],
                status="Pass" if found <= limits[severity] else "Fail",
            )

        if totals[UNKNOWN_BUCKET]:
            summary[UNKNOWN_BUCKET] = DefectSummaryRow(
                severity=UNKNOWN_BUCKET,
                label=UNKNOWN_SECTION_LABEL,
                found=totals[UNKNOWN_BUCKET],
                limit=None,
                status="Review",
                known=False,
            )

        return summary

    # ------------------------------------------------------------------
    # Header blocks
    # ------------------------------------------------------------------

    def _build_details(self, header: InspectionHeader, sample_size: int) -> DetailsTable:
        valid, _, inspection_type = validate_inspection_type(header.inspection_type)
        if valid:
            type_label = INSPECTION_TYPE_LABELS[inspection_type]
        else:
            self.logger.warning(f"Unknown inspection type '{header.inspection_type}'")
            type_label = header.inspection_type.replace("_", " ").title() or "-"

        design = header.article_code or "-"
        if header.article_description:
            design = f"{design} ({header.article_description})"

        order_quantity = header.order_quantity if header.order_quantity is not None else header.lot_size
        aql_label = header.aql_label or self.settings.default_aql_label
        if header.inspection_mode == "hundred_percent":
            aql_value = HUNDRED_PERCENT_LABEL
        else:
            aql_value = f"{aql_label} / Level II"

        return DetailsTable(
            left=[
                DetailRow(label="Buyer", value=header.buyer_name or "-"),
                DetailRow(label="OPS Number", value=header.po_number or "-"),
                DetailRow(label="Design No", value=design),
                DetailRow(label="Inspection Type", value=type_label),
            ],
            right=[
                DetailRow(label="Lot Size", value=quantity_label(header.lot_size)),
                DetailRow(label="Order Qty", value=quantity_label(order_quantity)),
                DetailRow(label="Sample Size", value=quantity_label(sample_size)),
                DetailRow(label="AQL Level", value=aql_value),
            ],
        )

    def _build_banner(
        self,
        header: InspectionHeader,
        verdict: InspectionVerdict,
        totals: Dict[str, int],
        sample_size: int
    ) -> ResultBanner:
        # Pieces carrying a critical or major defect are rejected
        rejected = min(totals["critical"] + totals["major"], sample_size)
        accepted = sample_size - rejected
        if header.inspection_mode == "hundred_percent":
            standard = HUNDRED_PERCENT_LABEL
        else:
            standard = f"AQL {header.aql_label or self.settings.default_aql_label}"
        within = "Within" if verdict.passed else "Exceeds"

        return ResultBanner(
            title="PASSED" if verdict.passed else "FAILED",
            tone=verdict.result,
            risk_level=verdict.risk_level,
            accepted=accepted,
            rejected=rejected,
            subtitle=f"Accepted: {accepted}  |  Rejected: {rejected}  |  {within} {standard}",
        )

    # ------------------------------------------------------------------
    # Checklist
    # ------------------------------------------------------------------

    def _badge_text(self, item: ChecklistItemResult, defects_by_id: Dict[str, DefectRecord]) -> str:
        return truncate_label(
            self._badge_source(item, defects_by_id), self.settings.badge_max_chars
        )

    def _badge_source(self, item: ChecklistItemResult, defects_by_id: Dict[str, DefectRecord]) -> str:
        if item.note:
            return item.note.strip()

        linked: Dict[str, int] = {}
        for defect_id in item.linked_defects:
            defect = defects_by_id.get(defect_id)
            if defect is None:
                self.logger.debug(f"Checklist item '{item.name}' links unknown defect {defect_id}")
                continue
            linked[defect.severity] = linked.get(defect.severity, 0) + defect.quantity_affected

        if linked:
            return ", ".join(f"{qty} {severity}" for severity, qty in linked.items())
        return item.status.title()

    def _build_checklist_sections(
        self,
        items: List[ChecklistItemResult],
        defects: List[DefectRecord]
    ) -> List[ChecklistSection]:
        defects_by_id = {d.defect_id: d for d in defects if d.defect_id}
        grouped: Dict[str, List[ChecklistItemResult]] = {}

        for item in items:
            name = item.section.strip() or UNKNOWN_SECTION_LABEL
            grouped.setdefault(name, []).append(item)

        sections = []
        for name, section_items in grouped.items():
            known = name != UNKNOWN_SECTION_LABEL and self.catalog.is_known_section(name)
            if not known:
                self.logger.warning(f"Checklist section '{name}' not in catalog - shown as unknown")

            rows = []
            for item in section_items:
                if not item.has_known_status:
                    self.logger.warning(f"Checklist item '{item.name}' has unknown status '{item.status}'")
                rows.append(ChecklistRow(
                    name=truncate_label(item.name, self.settings.item_name_max_chars),
                    status=item.status,
                    known_status=item.has_known_status,
                    tone=ITEM_TONES.get(item.status, "amber"),
                    badge_text=self._badge_text(item, defects_by_id),
                ))

            sections.append(ChecklistSection(
                name=name,
                known=known,
                items=rows,
                section_status=section_status(item.status for item in section_items),
            ))

        return sections

    # ------------------------------------------------------------------
    # Defect detail
    # ------------------------------------------------------------------

    def _build_defect_rows(self, defects: List[DefectRecord]) -> List[DefectDetailRow]:
        rows = []
        for number, defect in enumerate(defects, start=1):
            valid, _, code = validate_defect_code(defect.code)
            if not valid:
                self.logger.warning(f"Defect #{number} has non-standard code '{defect.code}'")

            description = defect.description.strip()
            if not description and defect.code:
                description = self.catalog.defect_name(defect.code) or ""

            known = defect.severity in SEVERITY_BADGES
            rows.append(DefectDetailRow(
                number=number,
                severity=defect.severity if known else UNKNOWN_BUCKET,
                badge=SEVERITY_BADGES.get(defect.severity, UNKNOWN_BADGE),
                description=truncate_label(description, self.settings.description_max_chars) or "-",
                code=code or defect.code or "-",
                quantity=defect.quantity_affected,
                quantity_label=quantity_label(defect.quantity_affected),
            ))
        return rows

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def _build_photo_groups(self, header: InspectionHeader) -> List[PhotoGroup]:
        grouped: Dict[str, List[PhotoCell]] = {}
        for photo in header.photos:
            title = (photo.group or "").strip() or DEFAULT_PHOTO_GROUP
            grouped.setdefault(title, []).append(PhotoCell(
                path=photo.path,
                label=truncate_label(photo.label, self.settings.photo_label_max_chars),
                width=photo.width,
                height=photo.height,
            ))

        return [
            PhotoGroup(title=title, rows=chunk(cells))
            for title, cells in grouped.items()
            if cells
        ]


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def build_report_model(
    inspection: Any,
    checklist_items: Iterable[Any],
    defects: Iterable[Any],
    today_label: Optional[str] = None
) -> ReportModel:
    """Build the layout-ready report model for an inspection."""
    builder = ReportModelBuilder()
    return builder.build(inspection, checklist_items, defects, today_label=today_label)
