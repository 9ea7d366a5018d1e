"""
PNG2PDF — Page geometry table.

Sizes are in millimetres, stored portrait (width <= height).
"""

from __future__ import annotations

PAGE_SIZES: dict[str, tuple[float, float]] = {
    "a3": (297.0, 420.0),
    "a4": (210.0, 297.0),
    "a5": (148.0, 210.0),
    "letter": (215.9, 279.4),
    "legal": (215.9, 355.6),
    "tabloid": (279.4, 431.8),
}

ORIENTATIONS = ("portrait", "landscape")

FIT_MODES = ("fit", "fill", "original")

UNIT = "mm"
POINTS_PER_MM = 72 / 25.4


def page_dimensions(page_size: str, orientation: str) -> tuple[float, float]:
    """(width, height) in mm for a known size name and orientation."""
    width, height = PAGE_SIZES[page_size]
    if orientation == "landscape":
        return height, width
    return width, height
