"""
PNG2PDF — Structured error catalog.

Every error has a code, human message, and suggested fix.
No raw exceptions leak to the HTTP layer.
"""

from __future__ import annotations

from typing import Any


class ConverterError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class NoValidFilesError(ConverterError):
    def __init__(self, rejected: list[str] | None = None):
        self.rejected = rejected or []
        super().__init__(
            code="NO_VALID_FILES",
            message="Please select only PNG files.",
            suggestion="Only files with media type image/png are accepted.",
            detail=self.rejected or None,
        )


class IndexOutOfRangeError(ConverterError, IndexError):
    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(
            code="INDEX_OUT_OF_RANGE",
            message=f"No image at position {index} (batch holds {size})",
            suggestion="Use a position between 0 and the batch size minus one.",
        )


class EmptyBatchError(ConverterError):
    def __init__(self):
        super().__init__(
            code="EMPTY_BATCH",
            message="Please select at least one PNG file.",
            suggestion="Add images to the batch before converting.",
        )


class InvalidConfigurationError(ConverterError):
    def __init__(self, field: str, value: Any, allowed: list[str]):
        self.field = field
        self.value = value
        super().__init__(
            code="INVALID_CONFIGURATION",
            message=f"Unsupported {field}: {value!r}",
            suggestion=f"Allowed values: {', '.join(allowed)}.",
            detail=allowed,
        )


class ImageDecodeError(ConverterError):
    def __init__(self, name: str, index: int, reason: str = ""):
        self.name = name
        self.index = index
        super().__init__(
            code="IMAGE_DECODE_FAILED",
            message=f"Could not read image #{index + 1} ({name})"
            + (f": {reason}" if reason else ""),
            suggestion="Remove or replace the image and convert again.",
            detail={"name": name, "index": index},
        )


class EncoderUnavailableError(ConverterError):
    def __init__(self, reason: str = ""):
        super().__init__(
            code="ENCODER_UNAVAILABLE",
            message="PDF encoder is not available" + (f": {reason}" if reason else ""),
            suggestion="Install PyMuPDF: pip install pymupdf",
        )


class AssemblyInProgressError(ConverterError):
    def __init__(self):
        super().__init__(
            code="ASSEMBLY_IN_PROGRESS",
            message="A conversion is already running for this batch",
            suggestion="Wait for the current conversion to finish.",
        )


class NothingToDownloadError(ConverterError):
    def __init__(self):
        super().__init__(
            code="NOTHING_TO_DOWNLOAD",
            message="No converted PDF is available",
            suggestion="Convert the batch before downloading.",
        )


class FileTooLargeError(ConverterError):
    def __init__(self, name: str, size_mb: float, limit_mb: float):
        super().__init__(
            code="FILE_TOO_LARGE",
            message=f"File exceeds {limit_mb:g}MB limit: {name} ({size_mb:.1f}MB)",
            suggestion="Compress or resize the image before uploading.",
        )


class BatchTooLargeError(ConverterError):
    def __init__(self, count: int, limit: int):
        super().__init__(
            code="BATCH_TOO_LARGE",
            message=f"Too many files: {count} (limit {limit})",
            suggestion="Split the images into smaller batches.",
        )
