"""
Deterministic layout helpers shared by the report model and the PDF renderer.
"""

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

TRUNCATION_MARKER = ".."
PHOTO_GRID_COLUMNS = 4


def truncate_label(text: str, max_chars: int, marker: str = TRUNCATION_MARKER) -> str:
    """
    Shorten a display label to ``max_chars`` including the marker.

    Only the returned display copy is shortened.
    """
    text = (text or "").strip()
    if len(text) <= max_chars:
        return text
    keep = max(max_chars - len(marker), 1)
    return text[:keep].rstrip() + marker


def chunk(items: Sequence[T], size: int = PHOTO_GRID_COLUMNS) -> List[List[T]]:
    """Split items into consecutive rows of at most ``size``."""
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def fit_contain(
    image_width: float,
    image_height: float,
    cell_width: float,
    cell_height: float
) -> Tuple[float, float, float, float]:
    """
    Fit an image inside a cell keeping its aspect ratio (CSS ``object-fit: contain``).

    Returns:
        Tuple of (offset_x, offset_y, draw_width, draw_height) relative to the cell
    """
    if image_width <= 0 or image_height <= 0:
        return 0.0, 0.0, float(cell_width), float(cell_height)

    image_aspect = image_width / image_height
    cell_aspect = cell_width / cell_height

    if image_aspect > cell_aspect:
        # Wider than the cell: fit width, centre vertically
        draw_width = float(cell_width)
        draw_height = cell_width / image_aspect
        return 0.0, (cell_height - draw_height) / 2, draw_width, draw_height

    draw_height = float(cell_height)
    draw_width = cell_height * image_aspect
    return (cell_width - draw_width) / 2, 0.0, draw_width, draw_height


def quantity_label(quantity: int) -> str:
    return f"{quantity} pc" if quantity == 1 else f"{quantity} pcs"
