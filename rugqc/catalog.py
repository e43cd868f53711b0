"""
Defect-code catalog and default checklist template.
Loaded from the bundled YAML so organisations can ship their own copy.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from rugqc.schemas.models import ChecklistItemResult
from utils.config import config
from utils.logger import setup_logger

logger = setup_logger(__name__, level=config.log_level, component="CATALOG")

CATALOG_PATH = Path(__file__).parent / "config" / "catalog.yaml"


class DefectCodeInfo(BaseModel):
    code: str
    name: str
    category: str
    default_severity: str


class ChecklistTemplateItem(BaseModel):
    category: str
    checkpoint: str
    order: int


class Catalog(BaseModel):
    """Known defect codes and checklist sections."""
    defect_codes: Dict[str, DefectCodeInfo] = Field(default_factory=dict)
    checklist: List[ChecklistTemplateItem] = Field(default_factory=list)
    extra_sections: List[str] = Field(default_factory=list)

    @property
    def known_sections(self) -> List[str]:
        """Template categories in order, then configured extras."""
        sections: List[str] = []
        for name in [item.category for item in self.checklist] + self.extra_sections:
            if name not in sections:
                sections.append(name)
        return sections

    def is_known_section(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(s.lower() == wanted for s in self.known_sections)

    def defect_name(self, code: str) -> Optional[str]:
        info = self.defect_codes.get(code.strip().upper())
        return info.name if info else None

    def blank_checklist(self) -> List[ChecklistItemResult]:
        """Draft checklist items for a new inspection, all passing."""
        return [
            ChecklistItemResult(section=item.category, name=item.checkpoint, status="pass")
            for item in sorted(self.checklist, key=lambda i: i.order)
        ]


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """
    Load the catalog YAML.

    Args:
        path: Alternative catalog file (defaults to the bundled one)

    Returns:
        Catalog; empty when the file is missing or unreadable
    """
    path = path or CATALOG_PATH
    extra_sections = config.extra_known_sections_list

    if not path.exists():
        logger.warning(f"Catalog file not found: {path}")
        return Catalog(extra_sections=extra_sections)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Could not load catalog {path}: {e}")
        return Catalog(extra_sections=extra_sections)

    if not isinstance(raw, dict):
        logger.warning(f"Catalog {path} is not a mapping, ignoring it")
        return Catalog(extra_sections=extra_sections)

    defect_codes = {
        code: DefectCodeInfo(code=code, **info)
        for code, info in (raw.get("defect_codes") or {}).items()
    }
    checklist = [
        ChecklistTemplateItem(order=index, **item)
        for index, item in enumerate(raw.get("checklist") or [], start=1)
    ]

    logger.debug(f"Loaded {len(defect_codes)} defect codes, {len(checklist)} checkpoints")

    return Catalog(defect_codes=defect_codes, checklist=checklist, extra_sections=extra_sections)
