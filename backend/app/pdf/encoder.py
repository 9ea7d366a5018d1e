"""
PNG2PDF — PDF encoder backed by pymupdf (fitz).

The assembly engine only sees the small document interface below
(page_width / page_height / add_page / place_image / serialize), so
tests can swap in a recording fake.

A new document already holds its first page.
"""

from __future__ import annotations

from typing import Protocol

from app.errors import EncoderUnavailableError, InvalidConfigurationError
from app.pdf.page_sizes import POINTS_PER_MM, UNIT, page_dimensions
from app.utils.logging import logger


class PDFDocument(Protocol):
    def page_width(self) -> float: ...

    def page_height(self) -> float: ...

    def add_page(self) -> None: ...

    def place_image(
        self, data: bytes, fmt: str, x: float, y: float, w: float, h: float
    ) -> None: ...

    def serialize(self) -> bytes: ...

    def close(self) -> None: ...


class DocumentEncoder(Protocol):
    def create_document(
        self, page_size: str, orientation: str, unit: str = UNIT
    ) -> PDFDocument: ...


class PyMuPDFDocument:
    """Millimetre-based page API on top of a fitz.Document."""

    def __init__(self, width_mm: float, height_mm: float):
        import fitz

        self._fitz = fitz
        self._width = width_mm
        self._height = height_mm
        self._doc = fitz.open()
        self.add_page()

    def page_width(self) -> float:
        return self._width

    def page_height(self) -> float:
        return self._height

    @property
    def page_count(self) -> int:
        return len(self._doc)

    def add_page(self) -> None:
        self._doc.new_page(
            width=self._width * POINTS_PER_MM,
            height=self._height * POINTS_PER_MM,
        )

    def place_image(self, data: bytes, fmt: str, x: float, y: float, w: float, h: float) -> None:
        """Draw the image stretched to the rect on the most recent page."""
        k = POINTS_PER_MM
        rect = self._fitz.Rect(x * k, y * k, (x + w) * k, (y + h) * k)
        page = self._doc[-1]
        page.insert_image(rect, stream=data, keep_proportion=False)
        logger.debug("  Placed %s on page %d at %s", fmt, len(self._doc), rect)

    def serialize(self) -> bytes:
        return self._doc.tobytes()

    def close(self) -> None:
        self._doc.close()


class PyMuPDFEncoder:
    """Factory for PyMuPDFDocument. Only millimetres are supported."""

    unit = UNIT

    def create_document(self, page_size: str, orientation: str, unit: str = UNIT) -> PyMuPDFDocument:
        if unit != UNIT:
            raise InvalidConfigurationError("unit", unit, [UNIT])
        width, height = page_dimensions(page_size, orientation)
        return PyMuPDFDocument(width, height)


def load_encoder() -> PyMuPDFEncoder:
    """
    Resolve the PDF encoder once, at startup.

    Raises EncoderUnavailableError when pymupdf is not installed.
    """
    try:
        import fitz
    except ImportError as exc:
        raise EncoderUnavailableError(str(exc)) from exc

    logger.info("  PDF encoder: pymupdf %s", getattr(fitz, "VersionBind", "?"))
    return PyMuPDFEncoder()
