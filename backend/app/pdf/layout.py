"""
PNG2PDF — Image placement on a page.

Pure geometry, no PDF objects. All lengths in millimetres, origin at
the top-left corner of the page.

  fit       scale uniformly into the printable area, centred on the page
  fill      stretch to the printable area exactly
  original  72 dpi physical size, clamped to the printable area, centred
"""

from __future__ import annotations

from app.models.layout import PlacementRect
from app.utils.logging import logger

MARGIN_MM = 10.0
PX_TO_MM = 0.352778  # one pixel at 72 dpi


def printable_area(page_w: float, page_h: float, margin: float = MARGIN_MM) -> tuple[float, float]:
    return page_w - 2 * margin, page_h - 2 * margin


def compute_placement(
    img_w: float,
    img_h: float,
    page_w: float,
    page_h: float,
    fit_mode: str,
    margin: float = MARGIN_MM,
) -> PlacementRect:
    """
    Compute the rect for an img_w x img_h pixel image on a page_w x page_h page.

    Unknown fit modes are laid out like ``fill``.
    """
    if img_w <= 0 or img_h <= 0:
        raise ValueError(f"Image dimensions must be positive, got {img_w}x{img_h}")

    avail_w, avail_h = printable_area(page_w, page_h, margin)

    if fit_mode == "fit":
        scale = min(avail_w / img_w, avail_h / img_h)
        width = img_w * scale
        height = img_h * scale
        return _centred(width, height, page_w, page_h)

    if fit_mode == "original":
        width = min(img_w * PX_TO_MM, avail_w)
        height = min(img_h * PX_TO_MM, avail_h)
        return _centred(width, height, page_w, page_h)

    if fit_mode != "fill":
        logger.warning("  Unknown fit mode %r, using fill", fit_mode)
    return PlacementRect(x=margin, y=margin, width=avail_w, height=avail_h)


def _centred(width: float, height: float, page_w: float, page_h: float) -> PlacementRect:
    return PlacementRect(
        x=(page_w - width) / 2,
        y=(page_h - height) / 2,
        width=width,
        height=height,
    )
