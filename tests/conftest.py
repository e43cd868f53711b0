"""
Shared fixtures for RugQC tests.
"""

from pathlib import Path

import pytest

from rugqc.catalog import load_catalog
from rugqc.sample import build_sample_inspection
from rugqc.schemas.models import ChecklistItemResult, DefectRecord, InspectionHeader


@pytest.fixture
def catalog():
    """Bundled defect-code catalog."""
    return load_catalog()


@pytest.fixture
def sample_inspection():
    """Sample final inspection: (header, checklist_items, defects)."""
    return build_sample_inspection()


@pytest.fixture
def basic_header():
    """Minimal header for a lot of 120."""
    return InspectionHeader(
        company_name="Test Rugs",
        document_no="TR-001",
        buyer_name="Buyer",
        article_code="AR-1",
        inspection_type="final",
        lot_size=120,
        inspector_name="Tester",
    )


@pytest.fixture
def make_defect():
    """Factory for defect records."""
    def _make(severity="minor", code="", description="", quantity=1, defect_id=None):
        return DefectRecord(
            defect_id=defect_id,
            severity=severity,
            code=code,
            description=description,
            quantity_affected=quantity,
        )
    return _make


@pytest.fixture
def make_item():
    """Factory for checklist item results."""
    def _make(section="Finishing", name="Binding", status="pass", note=None, linked=None):
        return ChecklistItemResult(
            section=section,
            name=name,
            status=status,
            note=note,
            linked_defects=linked or [],
        )
    return _make


@pytest.fixture
def photo_file(tmp_path) -> Path:
    """Small landscape JPEG on disk."""
    from PIL import Image

    path = tmp_path / "photo.jpg"
    Image.new("RGB", (64, 32), color=(120, 90, 60)).save(path, "JPEG")
    return path
