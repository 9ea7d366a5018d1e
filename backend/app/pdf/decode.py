"""
PNG2PDF — Image decoding with Pillow.

Only PNG is accepted, whatever media type the caller declared. The
pixel data is decoded in full so that a valid header over a broken
body is rejected here rather than inside the encoder.
"""

from __future__ import annotations

import io

from PIL import Image


async def decode_image_dimensions(data: bytes) -> tuple[int, int]:
    """Return (width, height) in pixels. Raises on unreadable data."""
    with Image.open(io.BytesIO(data), formats=["PNG"]) as img:
        img.load()
        width, height = img.size
    if width <= 0 or height <= 0:
        raise ValueError(f"image reports an empty size {width}x{height}")
    return width, height
