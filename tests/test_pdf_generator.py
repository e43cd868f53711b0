"""
Tests for PDF rendering.
Reports are written into pytest's tmp_path.
"""

from rugqc.reporting import build_report_model, generate_report
from rugqc.reporting.pdf_generator import InspectionReport, PhotoFlowable
from rugqc.schemas.models import InspectionHeader, PhotoCell, PhotoRecord


def _is_pdf(path):
    with open(path, "rb") as f:
        return f.read(5) == b"%PDF-"


class TestInspectionReport:
    """Tests for InspectionReport.generate."""

    def test_sample_report(self, sample_inspection, tmp_path):
        """Sample inspection renders a PDF at the requested path."""
        header, items, defects = sample_inspection
        model = build_report_model(header, items, defects, today_label="15 February 2026")

        output = generate_report(model, tmp_path / "sample.pdf")

        assert output == tmp_path / "sample.pdf"
        assert output.exists()
        assert _is_pdf(output)

    def test_creates_parent_directories(self, basic_header, tmp_path):
        model = build_report_model(basic_header, [], [])

        output = InspectionReport().generate(model, tmp_path / "nested" / "dir" / "r.pdf")

        assert _is_pdf(output)

    def test_failed_lot_with_unknowns(self, basic_header, make_defect, make_item, tmp_path):
        """Unknown buckets and a failing banner still render."""
        items = [make_item(section="Polishing", status="skipped"), make_item(section="")]
        defects = [make_defect("major", quantity=3), make_defect("cosmetic", description="<odd> & text")]
        model = build_report_model(basic_header, items, defects)

        output = generate_report(model, tmp_path / "failed.pdf")

        assert model.banner.title == "FAILED"
        assert _is_pdf(output)

    def test_photos_and_placeholders(self, photo_file, tmp_path):
        """Existing photos are embedded; missing files become placeholders."""
        header = InspectionHeader(
            lot_size=120,
            photos=[
                PhotoRecord(path=str(photo_file), label="Pile Height Check", group="Measurements"),
                PhotoRecord(path=str(tmp_path / "missing.jpg"), label="Missing"),
            ],
        )
        model = build_report_model(header, [], [])

        output = generate_report(model, tmp_path / "photos.pdf")

        assert _is_pdf(output)

    def test_default_path_uses_report_dir(self, basic_header, tmp_path, monkeypatch):
        from utils.config import config

        monkeypatch.setattr(config, "report_dir", str(tmp_path / "reports"))
        model = build_report_model(basic_header, [], [])

        output = generate_report(model)

        assert output.parent == tmp_path / "reports"
        assert output.name == "inspection_TR-001.pdf"


class TestPhotoFlowable:
    """Tests for photo cell sizing."""

    def test_reads_size_from_file(self, photo_file):
        flowable = PhotoFlowable(PhotoCell(path=str(photo_file), label="x"), 40, 30)

        assert flowable.image_size == (64, 32)

    def test_prefers_recorded_size(self, photo_file):
        cell = PhotoCell(path=str(photo_file), label="x", width=300, height=200)

        assert PhotoFlowable(cell, 40, 30).image_size == (300, 200)

    def test_missing_file(self, tmp_path):
        cell = PhotoCell(path=str(tmp_path / "nope.jpg"), label="x")

        assert PhotoFlowable(cell, 40, 30).image_size is None

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"not an image")

        assert PhotoFlowable(PhotoCell(path=str(path), label="x"), 40, 30).image_size is None
