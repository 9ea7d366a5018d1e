"""
PNG2PDF — Human-readable formatting helpers.
"""

from pathlib import PurePath

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

DEFAULT_PDF_NAME = "converted-images.pdf"


def format_file_size(num_bytes: int) -> str:
    """Render a byte count as e.g. ``"1.5 KB"`` (base 1024, at most 2 decimals)."""
    if num_bytes <= 0:
        return "0 Bytes"
    i = 0
    while num_bytes >= 1024 ** (i + 1) and i < len(SIZE_UNITS) - 1:
        i += 1
    value = round(num_bytes / (1024 ** i), 2)
    return f"{value:g} {SIZE_UNITS[i]}"


def suggested_filename(names: list[str]) -> str:
    """
    Download name for a converted batch.

    A single image keeps its own name with a .pdf extension; anything
    else gets the generic name.
    """
    if len(names) == 1:
        stem = PurePath(names[0]).stem
        if stem:
            return f"{stem}.pdf"
    return DEFAULT_PDF_NAME
