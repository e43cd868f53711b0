"""
Sample report command.
Builds a realistic final inspection for a hand-tufted wool rug lot and
renders it to PDF, for demos and for checking the report layout.
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from rugqc import __version__
from rugqc.reporting import build_report_model, generate_report
from rugqc.sampling import InvalidInspectionInput
from rugqc.schemas.models import ChecklistItemResult, DefectRecord, InspectionHeader, PhotoRecord
from utils.config import config
from utils.formatting import format_date, generate_inspection_id
from utils.logger import print_banner, print_error, print_summary_panel, set_request_id, setup_logger

logger = setup_logger(
    __name__,
    level=config.log_level,
    log_file=config.get_log_dir() / "rugqc.log" if config.log_to_file else None,
    component="SAMPLE"
)


# ============================================================================
# SAMPLE DATA
# ============================================================================

SAMPLE_REMARKS = (
    "Overall quality is good. Minor binding issue noted on one piece, within "
    "acceptable limits. Color variation is negligible and within buyer tolerance. "
    "Lot is recommended for shipment."
)

# (file name, label, group)
SAMPLE_PHOTOS = [
    ("sizeFrontPhoto.jpg", "Size Measurement (Front)", "Measurements & Construction"),
    ("sizeSidePhoto.jpg", "Size Measurement (Side)", "Measurements & Construction"),
    ("moisturePhoto.jpg", "Moisture Check", "Measurements & Construction"),
    ("pileHeightPhoto.jpg", "Pile Height Check", "Measurements & Construction"),
    ("metalCheckingPhoto.jpg", "Metal Detection", "Equipment & Goods"),
    ("metalCheckingCloseup.jpg", "Metal Detection (Close-up)", "Equipment & Goods"),
    ("productNetWeightPhoto.jpg", "Product Net Weight", "Equipment & Goods"),
    ("stackedGoodsPhoto.jpg", "Stacked Goods", "Equipment & Goods"),
]


def _sample_photos(photos_dir: Optional[Path]) -> List[PhotoRecord]:
    if photos_dir is None:
        return []

    photos = []
    for filename, label, group in SAMPLE_PHOTOS:
        path = photos_dir / filename
        if path.exists():
            photos.append(PhotoRecord(path=str(path), label=label, group=group))
        else:
            logger.debug(f"Sample photo not found: {path}")

    logger.info(f"Using {len(photos)} of {len(SAMPLE_PHOTOS)} sample photos from {photos_dir}")
    return photos


def build_sample_inspection(
    photos_dir: Optional[Path] = None
) -> Tuple[InspectionHeader, List[ChecklistItemResult], List[DefectRecord]]:
    """
    Sample final inspection: lot of 120, one major and two minor defects.

    Returns:
        Tuple of (header, checklist_items, defects)
    """
    header = InspectionHeader(
        company_name="Sunrise Textiles Pvt. Ltd.",
        document_no="ST/IP/2026-0215",
        buyer_name="West Elm",
        po_number="ST-26-832",
        article_code="SW-442",
        article_description="Hand Tufted Wool",
        inspection_type="final",
        lot_size=120,
        order_quantity=120,
        aql_label="2.5",
        inspector_name="Ramesh Kumar",
        remarks=SAMPLE_REMARKS,
        photos=_sample_photos(photos_dir),
    )

    defects = [
        DefectRecord(defect_id="d1", severity="major", code="BND-4IN",
                     description="Binding loose at corner", quantity_affected=1),
        DefectRecord(defect_id="d2", severity="minor", code="CLR-VAR",
                     description="Slight color variation", quantity_affected=1),
        DefectRecord(defect_id="d3", severity="minor", code="FRG-LEN",
                     description="Fringe length uneven", quantity_affected=1),
    ]

    checklist_items = [
        ChecklistItemResult(section="Construction", name="Warp Count (per 6 inches)"),
        ChecklistItemResult(section="Construction", name="Weft Count (per 6 inches)"),
        ChecklistItemResult(section="Construction", name="Pile Height"),
        ChecklistItemResult(section="Construction", name="GSM"),
        ChecklistItemResult(section="Visual", name="Color Matching", status="minor", linked_defects=["d2"]),
        ChecklistItemResult(section="Visual", name="Pattern Alignment"),
        ChecklistItemResult(section="Dimensions", name="Length"),
        ChecklistItemResult(section="Dimensions", name="Width"),
        ChecklistItemResult(section="Dimensions", name="Corner Squareness"),
        ChecklistItemResult(section="Finishing", name="Binding", status="major", linked_defects=["d1"]),
        ChecklistItemResult(section="Finishing", name="Fringe", status="minor", linked_defects=["d3"]),
        ChecklistItemResult(section="Finishing", name="Backing"),
        ChecklistItemResult(section="Packing", name="Labels"),
        ChecklistItemResult(section="Packing", name="Poly Bag"),
        ChecklistItemResult(section="Packing", name="Carton"),
    ]

    return header, checklist_items, defects


# ============================================================================
# COMMAND
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Render the sample inspection report."""
    parser = argparse.ArgumentParser(description="Render the sample rug inspection report")
    parser.add_argument("--output", type=Path, default=None,
                        help="PDF path (defaults to the configured report directory)")
    parser.add_argument("--photos-dir", type=Path, default=None,
                        help="Directory holding the sample inspection photos")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="Report date as YYYY-MM-DD (defaults to today)")

    args = parser.parse_args(argv)

    print_banner(__version__)

    today_label = format_date(args.date or date.today(), "%d %B %Y")
    reference = generate_inspection_id()
    set_request_id(reference)
    logger.info(f"Rendering sample inspection {reference}")

    try:
        header, checklist_items, defects = build_sample_inspection(args.photos_dir)
        model = build_report_model(header, checklist_items, defects, today_label=today_label)
        output_path = generate_report(model, args.output)
    except (InvalidInspectionInput, ValidationError) as e:
        logger.error(f"Sample inspection rejected: {e}")
        print_error("Invalid inspection", str(e))
        return 1
    except OSError as e:
        logger.error(f"Failed to write report: {e}")
        print_error("Report generation failed", str(e))
        return 1

    verdict = model.verdict
    print_summary_panel(
        "Sample Inspection",
        {
            "Reference": reference,
            "Document": model.header.document_no,
            "Result": model.banner.title,
            "Sample Size": verdict.sample_size,
            "Accepted / Rejected": f"{model.banner.accepted} / {model.banner.rejected}",
            "Risk Level": verdict.risk_level.upper(),
            "Photos": model.photo_count,
            "PDF": output_path,
        },
        style="green" if verdict.passed else "red"
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
