"""
Branded PDF rendering of inspection reports.
Lays out a ReportModel with reportlab platypus: details, result banner,
defect summary, checklist, defect detail, remarks, signatures and photos.
"""

from pathlib import Path
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape

from PIL import Image
from reportlab.lib.colors import HexColor, white
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    Flowable, KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
)

from rugqc.reporting.layout import PHOTO_GRID_COLUMNS, fit_contain
from rugqc.schemas.models import (
    ChecklistSection,
    PhotoCell,
    PhotoGroup,
    ReportModel,
    ResultBanner,
)
from utils.config import config
from utils.logger import setup_logger
from utils.validators import sanitize_filename

logger = setup_logger(__name__, level=config.log_level, component="REPORTS")


# ============================================================================
# COLORS
# ============================================================================

PALETTE = {
    "emerald": HexColor("#10b981"),
    "emerald_dark": HexColor("#059669"),
    "emerald_light": HexColor("#d1fae5"),
    "red": HexColor("#ef4444"),
    "red_light": HexColor("#fee2e2"),
    "amber": HexColor("#f59e0b"),
    "amber_light": HexColor("#fef3c7"),
    "gray": HexColor("#6b7280"),
    "gray_light": HexColor("#f3f4f6"),
    "border": HexColor("#e5e7eb"),
    "dark": HexColor("#1f2937"),
}

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 14 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

PHOTO_CELL_HEIGHT = 32 * mm
PHOTO_CELL_GAP = 3 * mm

SECTION_STATUS_TONES = {
    "ALL PASS": "emerald",
    "MINOR ISSUE": "amber",
    "ISSUES NOTED": "red",
}

SUMMARY_STATUS_TONES = {
    "Pass": "emerald",
    "Fail": "red",
    "Review": "amber",
}


def _color(key: str) -> HexColor:
    return PALETTE.get(key, PALETTE["gray"])


def _text(value: Optional[str]) -> str:
    """Escape free text for Paragraph markup."""
    return escape(value or "")


# ============================================================================
# CUSTOM FLOWABLES
# ============================================================================

class ResultBannerFlowable(Flowable):
    """Full-width PASSED/FAILED banner with accepted and rejected counts."""

    def __init__(self, banner: ResultBanner, width: float = CONTENT_WIDTH, height: float = 18 * mm):
        Flowable.__init__(self)
        self.banner = banner
        self.width = width
        self.height = height

    def wrap(self, availWidth, availHeight):
        return (self.width, self.height)

    def draw(self):
        fill = PALETTE["emerald"] if self.banner.tone == "pass" else PALETTE["red"]

        self.canv.setFillColor(fill)
        self.canv.setStrokeColor(fill)
        self.canv.roundRect(0, 0, self.width, self.height, 3 * mm, fill=1, stroke=0)

        self.canv.setFillColor(white)
        self.canv.setFont("Helvetica-Bold", 18)
        self.canv.drawString(6 * mm, self.height / 2 - 2 * mm, self.banner.title)

        self.canv.setFont("Helvetica", 9)
        self.canv.drawRightString(self.width - 6 * mm, self.height / 2 - 1.5 * mm, self.banner.subtitle)


class PhotoFlowable(Flowable):
    """Photo drawn with contain-fit inside a fixed cell, or a placeholder."""

    def __init__(self, photo: PhotoCell, width: float, height: float):
        Flowable.__init__(self)
        self.photo = photo
        self.width = width
        self.height = height
        self.image_size = self._resolve_size()

    def _resolve_size(self) -> Optional[Tuple[int, int]]:
        if not Path(self.photo.path).exists():
            logger.warning(f"Photo not found, drawing placeholder: {self.photo.path}")
            return None

        if self.photo.width and self.photo.height:
            return self.photo.width, self.photo.height

        try:
            with Image.open(self.photo.path) as img:
                return img.size
        except OSError as e:
            logger.warning(f"Unreadable photo {self.photo.path}: {e}")
            return None

    def wrap(self, availWidth, availHeight):
        return (self.width, self.height)

    def draw(self):
        self.canv.setStrokeColor(PALETTE["border"])
        self.canv.setFillColor(PALETTE["gray_light"])
        self.canv.rect(0, 0, self.width, self.height, fill=1, stroke=1)

        if self.image_size is None:
            self.canv.setFillColor(PALETTE["gray"])
            self.canv.setFont("Helvetica-Oblique", 8)
            self.canv.drawCentredString(self.width / 2, self.height / 2, "Photo unavailable")
            return

        x, y, w, h = fit_contain(self.image_size[0], self.image_size[1], self.width, self.height)
        self.canv.drawImage(str(self.photo.path), x, y, width=w, height=h, mask="auto")


# ============================================================================
# PDF HEADER/FOOTER
# ============================================================================

class BrandedCanvas(canvas.Canvas):
    """Canvas with accent bar, branded footer and page numbers."""

    def __init__(self, *args, brand_name=None, brand_tagline=None, footer_text=None, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []
        self.brand_name = brand_name or config.brand_name
        self.brand_tagline = brand_tagline or config.brand_tagline
        self.footer_text = footer_text or config.report_footer

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        num_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_accent_bar()
            self._draw_footer(num_pages)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_accent_bar(self):
        self.saveState()
        self.setFillColor(PALETTE["emerald"])
        self.rect(0, PAGE_HEIGHT - 2 * mm, PAGE_WIDTH, 2 * mm, fill=1, stroke=0)
        self.restoreState()

    def _draw_footer(self, page_count):
        """Draw brand, confidentiality line and page numbers."""
        self.saveState()

        footer_y = 10 * mm

        self.setStrokeColor(PALETTE["border"])
        self.line(MARGIN, footer_y + 5 * mm, PAGE_WIDTH - MARGIN, footer_y + 5 * mm)

        self.setFont("Helvetica-Bold", 8)
        self.setFillColor(PALETTE["emerald_dark"])
        self.drawString(MARGIN, footer_y + 1 * mm, self.brand_name)

        brand_width = self.stringWidth(self.brand_name, "Helvetica-Bold", 8)
        self.setFont("Helvetica", 7)
        self.setFillColor(PALETTE["gray"])
        self.drawString(MARGIN + brand_width + 2 * mm, footer_y + 1 * mm, self.brand_tagline)

        self.drawCentredString(PAGE_WIDTH / 2, footer_y - 3 * mm, self.footer_text)

        self.drawRightString(
            PAGE_WIDTH - MARGIN,
            footer_y + 1 * mm,
            f"Page {self._pageNumber} of {page_count}"
        )

        self.restoreState()


# ============================================================================
# PDF REPORT GENERATOR
# ============================================================================

class InspectionReport:
    """Renders a ReportModel into a branded PDF."""

    def __init__(self):
        self.logger = logger
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles."""

        def safe_add(style):
            if style.name not in self.styles:
                self.styles.add(style)

        safe_add(ParagraphStyle(
            name="CompanyName",
            parent=self.styles["Normal"],
            fontSize=15,
            leading=18,
            textColor=PALETTE["dark"],
            fontName="Helvetica-Bold"
        ))

        safe_add(ParagraphStyle(
            name="ReportTitle",
            parent=self.styles["Normal"],
            fontSize=10,
            textColor=PALETTE["emerald_dark"],
            fontName="Helvetica-Bold"
        ))

        safe_add(ParagraphStyle(
            name="HeaderMeta",
            parent=self.styles["Normal"],
            fontSize=8,
            leading=11,
            textColor=PALETTE["gray"],
            alignment=TA_RIGHT
        ))

        safe_add(ParagraphStyle(
            name="SectionHeader",
            parent=self.styles["Heading2"],
            fontSize=11,
            textColor=PALETTE["dark"],
            spaceBefore=10,
            spaceAfter=5,
            fontName="Helvetica-Bold"
        ))

        safe_add(ParagraphStyle(
            name="Cell",
            parent=self.styles["Normal"],
            fontSize=8,
            leading=10,
            textColor=PALETTE["dark"]
        ))

        safe_add(ParagraphStyle(
            name="CellMuted",
            parent=self.styles["Normal"],
            fontSize=7,
            leading=9,
            textColor=PALETTE["gray"]
        ))

        safe_add(ParagraphStyle(
            name="Remarks",
            parent=self.styles["Normal"],
            fontSize=9,
            leading=12,
            textColor=PALETTE["dark"]
        ))

        safe_add(ParagraphStyle(
            name="PhotoLabel",
            parent=self.styles["Normal"],
            fontSize=7,
            leading=9,
            textColor=PALETTE["gray"],
            alignment=TA_CENTER
        ))

    def _cell(self, text: str, style: str = "Cell") -> Paragraph:
        return Paragraph(_text(text), self.styles[style])

    def generate(self, model: ReportModel, output_path: Optional[Path] = None) -> Path:
        """
        Generate the PDF for a report model.

        Args:
            model: Layout-ready report model
            output_path: Optional output path (defaults to the report directory)

        Returns:
            Path to generated PDF
        """
        self.logger.info(f"Generating PDF report for {model.header.document_no or 'inspection'}...")

        if output_path is None:
            stem = sanitize_filename(model.header.document_no or "report")
            output_path = config.get_report_dir() / f"inspection_{stem}.pdf"

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=A4,
            rightMargin=MARGIN,
            leftMargin=MARGIN,
            topMargin=12 * mm,
            bottomMargin=20 * mm,
            title=model.header.title,
            author=model.header.company_name
        )

        story = []
        story.extend(self._build_header(model))
        story.extend(self._build_details(model))
        story.extend(self._build_banner(model))
        story.extend(self._build_defect_summary(model))
        story.extend(self._build_checklist(model))
        story.extend(self._build_defect_details(model))
        story.extend(self._build_inspector(model))
        story.extend(self._build_signatures(model))
        story.extend(self._build_photos(model))

        doc.build(story, canvasmaker=BrandedCanvas)

        self.logger.info(f"PDF report generated: {output_path}")

        return output_path

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _build_header(self, model: ReportModel) -> List:
        header = model.header

        left = [
            Paragraph(_text(header.company_name or config.brand_name), self.styles["CompanyName"]),
            Paragraph(_text(header.title), self.styles["ReportTitle"]),
        ]
        meta = []
        if header.document_no:
            meta.append(f"Doc No: <b>{_text(header.document_no)}</b>")
        if header.date_label:
            meta.append(f"Date: {_text(header.date_label)}")
        right = Paragraph("<br/>".join(meta), self.styles["HeaderMeta"])

        table = Table([[left, right]], colWidths=[CONTENT_WIDTH * 0.65, CONTENT_WIDTH * 0.35])
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LINEBELOW", (0, 0), (-1, 0), 1, PALETTE["emerald"]),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ]))

        return [table, Spacer(1, 4 * mm)]

    def _build_details(self, model: ReportModel) -> List:
        details = model.details_table
        rows = []
        for index in range(max(len(details.left), len(details.right))):
            row = []
            for side in (details.left, details.right):
                if index < len(side):
                    row.extend([self._cell(side[index].label, "CellMuted"), self._cell(side[index].value)])
                else:
                    row.extend(["", ""])
            rows.append(row)

        if not rows:
            return []

        column = CONTENT_WIDTH / 2
        table = Table(rows, colWidths=[column * 0.35, column * 0.65, column * 0.35, column * 0.65])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), PALETTE["gray_light"]),
            ("BOX", (0, 0), (-1, -1), 0.5, PALETTE["border"]),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]))

        return [table, Spacer(1, 4 * mm)]

    def _build_banner(self, model: ReportModel) -> List:
        return [ResultBannerFlowable(model.banner), Spacer(1, 4 * mm)]

    def _build_defect_summary(self, model: ReportModel) -> List:
        elements = [Paragraph("Defect Summary", self.styles["SectionHeader"])]

        data = [["Severity", "Found", "Allowed", "Status"]]
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), PALETTE["dark"]),
            ("TEXTCOLOR", (0, 0), (-1, 0), white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (1, 0), (-1, -1), "CENTER"),
            ("GRID", (0, 0), (-1, -1), 0.5, PALETTE["border"]),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]

        for row_index, row in enumerate(model.defect_summary_by_severity.values(), start=1):
            data.append([
                row.label,
                str(row.found),
                "-" if row.limit is None else str(row.limit),
                row.status,
            ])
            tone = SUMMARY_STATUS_TONES.get(row.status, "gray")
            style.append(("TEXTCOLOR", (3, row_index), (3, row_index), _color(tone)))
            style.append(("FONTNAME", (3, row_index), (3, row_index), "Helvetica-Bold"))

        table = Table(data, colWidths=[CONTENT_WIDTH * 0.4, CONTENT_WIDTH * 0.2, CONTENT_WIDTH * 0.2, CONTENT_WIDTH * 0.2])
        table.setStyle(TableStyle(style))
        elements.append(table)

        return elements

    def _build_section_table(self, section: ChecklistSection) -> Table:
        tone = SECTION_STATUS_TONES.get(section.section_status, "gray")
        title = _text(section.name)
        if not section.known:
            title += " <font color='#6b7280'>(unrecognised)</font>"

        data = [[
            Paragraph(f"<b>{title}</b>", self.styles["Cell"]),
            section.section_status,
        ]]
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), PALETTE["gray_light"]),
            ("TEXTCOLOR", (1, 0), (1, 0), _color(tone)),
            ("FONTNAME", (1, 0), (1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("BOX", (0, 0), (-1, -1), 0.5, PALETTE["border"]),
            ("LINEBELOW", (0, 0), (-1, -2), 0.25, PALETTE["border"]),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]

        for row_index, item in enumerate(section.items, start=1):
            data.append([self._cell(item.name), item.badge_text])
            style.append(("TEXTCOLOR", (1, row_index), (1, row_index), _color(item.tone)))

        table = Table(data, colWidths=[CONTENT_WIDTH * 0.7, CONTENT_WIDTH * 0.3])
        table.setStyle(TableStyle(style))
        return table

    def _build_checklist(self, model: ReportModel) -> List:
        if not model.checklist_sections:
            return []

        elements = [Paragraph("Checklist Results", self.styles["SectionHeader"])]
        for section in model.checklist_sections:
            elements.append(KeepTogether([self._build_section_table(section), Spacer(1, 2 * mm)]))
        return elements

    def _build_defect_details(self, model: ReportModel) -> List:
        elements = [Paragraph("Defect Details", self.styles["SectionHeader"])]

        if not model.defect_detail_rows:
            elements.append(self._cell("No defects recorded.", "CellMuted"))
            return elements

        data = [["#", "Severity", "Description", "Code", "Qty"]]
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), PALETTE["dark"]),
            ("TEXTCOLOR", (0, 0), (-1, 0), white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (0, 0), (1, -1), "CENTER"),
            ("ALIGN", (4, 0), (4, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, PALETTE["border"]),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]

        for row_index, row in enumerate(model.defect_detail_rows, start=1):
            data.append([
                str(row.number),
                row.badge.label,
                self._cell(row.description),
                row.code,
                row.quantity_label,
            ])
            style.append(("BACKGROUND", (1, row_index), (1, row_index), _color(row.badge.background)))
            style.append(("TEXTCOLOR", (1, row_index), (1, row_index), _color(row.badge.color)))
            style.append(("FONTNAME", (1, row_index), (1, row_index), "Helvetica-Bold"))

        table = Table(
            data,
            colWidths=[
                CONTENT_WIDTH * 0.06,
                CONTENT_WIDTH * 0.14,
                CONTENT_WIDTH * 0.5,
                CONTENT_WIDTH * 0.16,
                CONTENT_WIDTH * 0.14,
            ],
            repeatRows=1
        )
        table.setStyle(TableStyle(style))
        elements.append(table)

        return elements

    def _build_inspector(self, model: ReportModel) -> List:
        elements = [Paragraph("Inspector Remarks", self.styles["SectionHeader"])]

        remarks = model.inspector.remarks.strip() or "No remarks."
        paragraphs = [Paragraph(_text(line), self.styles["Remarks"]) for line in remarks.splitlines() if line.strip()]

        table = Table([[paragraphs]], colWidths=[CONTENT_WIDTH])
        table.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 0.5, PALETTE["border"]),
            ("BACKGROUND", (0, 0), (-1, -1), PALETTE["gray_light"]),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]))
        elements.append(table)

        return elements

    def _build_signatures(self, model: ReportModel) -> List:
        column = CONTENT_WIDTH / 2
        data = [
            ["", ""],
            [
                [self._cell("Inspector Signature", "CellMuted"), self._cell(model.inspector.name or "-")],
                self._cell("Client Representative", "CellMuted"),
            ],
        ]
        table = Table(data, colWidths=[column, column], rowHeights=[14 * mm, None])
        table.setStyle(TableStyle([
            ("LINEBELOW", (0, 0), (0, 0), 0.5, PALETTE["gray"]),
            ("LINEBELOW", (1, 0), (1, 0), 0.5, PALETTE["gray"]),
            ("LEFTPADDING", (0, 0), (-1, -1), 4 * mm),
            ("RIGHTPADDING", (0, 0), (-1, -1), 4 * mm),
        ]))

        return [Spacer(1, 6 * mm), KeepTogether([table])]

    def _build_photo_group(self, group: PhotoGroup) -> List:
        cell_width = (CONTENT_WIDTH - PHOTO_CELL_GAP * (PHOTO_GRID_COLUMNS - 1)) / PHOTO_GRID_COLUMNS

        data = []
        for row in group.rows:
            photos = [PhotoFlowable(cell, cell_width, PHOTO_CELL_HEIGHT) for cell in row]
            labels = [Paragraph(_text(cell.label), self.styles["PhotoLabel"]) for cell in row]
            padding = [""] * (PHOTO_GRID_COLUMNS - len(row))
            data.append(photos + padding)
            data.append(labels + padding)

        column_widths = [cell_width + PHOTO_CELL_GAP] * (PHOTO_GRID_COLUMNS - 1) + [cell_width]
        table = Table(data, colWidths=column_widths)
        table.setStyle(TableStyle([
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-2, -1), PHOTO_CELL_GAP),
            ("RIGHTPADDING", (-1, 0), (-1, -1), 0),
            ("TOPPADDING", (0, 0), (-1, -1), 1),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))

        return [
            Paragraph(f"<b>{_text(group.title)}</b> ({group.photo_count})", self.styles["Cell"]),
            Spacer(1, 1 * mm),
            table,
            Spacer(1, 3 * mm),
        ]

    def _build_photos(self, model: ReportModel) -> List:
        if not model.photo_groups:
            return []

        elements = [Paragraph("Photo Documentation", self.styles["SectionHeader"])]
        for group in model.photo_groups:
            elements.extend(self._build_photo_group(group))
        return elements


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def generate_report(model: ReportModel, output_path: Optional[Path] = None) -> Path:
    """
    Render a report model to PDF.

    Args:
        model: Layout-ready report model
        output_path: Optional output path

    Returns:
        Path to generated PDF
    """
    report = InspectionReport()
    return report.generate(model, output_path)
