"""Shared test configuration and fixtures for the PNG2PDF test suite."""

import io
import struct
import sys
import zlib
from pathlib import Path

import pytest
from PIL import Image

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


def make_png(width: int, height: int, color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def make_broken_png(width: int = 4, height: int = 4) -> bytes:
    """A PNG with a valid signature and IHDR but an IDAT that is not zlib data."""
    def chunk(tag: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + tag + body + struct.pack(">I", zlib.crc32(tag + body))

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", b"this is not deflate data")
        + chunk(b"IEND", b"")
    )


class RecordingDocument:
    """Stand-in PDF document that records every call the engine makes."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.pages: list[list[tuple]] = [[]]
        self.calls: list[str] = []
        self.closed = False

    def page_width(self) -> float:
        return self.width

    def page_height(self) -> float:
        return self.height

    def add_page(self) -> None:
        self.calls.append("add_page")
        self.pages.append([])

    def place_image(self, data, fmt, x, y, w, h) -> None:
        self.calls.append("place_image")
        self.pages[-1].append((data, fmt, x, y, w, h))

    def serialize(self) -> bytes:
        return b"%PDF-fake " + str(len(self.pages)).encode()

    def close(self) -> None:
        self.closed = True


class RecordingEncoder:
    def __init__(self):
        self.documents: list[RecordingDocument] = []

    def create_document(self, page_size, orientation, unit="mm"):
        from app.pdf.page_sizes import page_dimensions

        doc = RecordingDocument(*page_dimensions(page_size, orientation))
        self.documents.append(doc)
        return doc


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def png_800x600():
    return make_png(800, 600)


@pytest.fixture
def broken_png():
    return make_broken_png()


@pytest.fixture
def eps_payload():
    return b"%!PS-Adobe-3.0 EPSF-3.0\n%%BoundingBox: 0 0 10 10\nnewpath 0 0 moveto 10 10 lineto stroke\n%%EOF\n"


@pytest.fixture
def recording_encoder():
    return RecordingEncoder()


@pytest.fixture
def fitz_module():
    return pytest.importorskip("fitz")
