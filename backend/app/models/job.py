"""
PNG2PDF — Batch state and conversion output contracts.

Every conversion returns a ConversionResult with full traceability:
timings, placements, hashes, and verification results.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from app.models.layout import PageConfiguration, PlacementRect


class BatchState(str, enum.Enum):
    EMPTY = "EMPTY"
    ACCUMULATING = "ACCUMULATING"
    ASSEMBLING = "ASSEMBLING"
    ASSEMBLED = "ASSEMBLED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class PagePlacement(BaseModel):
    """One assembled page: which image went where."""

    page: int  # 1-based
    name: str
    pixel_width: int
    pixel_height: int
    rect: PlacementRect


class ArtifactMetadata(BaseModel):
    filename: str
    size_bytes: int
    pages: int = 0
    content_hash: str = ""  # SHA-256 of final PDF


class VerificationResult(BaseModel):
    page_count: int = 0
    images_per_page: list[int] = Field(default_factory=list)
    is_encrypted: bool = False
    file_size: int = 0
    content_hash: str = ""
    checks_passed: int = 0
    checks_total: int = 0
    passed: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page_count": 2,
                "images_per_page": [1, 1],
                "is_encrypted": False,
                "checks_passed": 4,
                "checks_total": 4,
                "passed": True,
            }
        }
    )


class ConversionResult(BaseModel):
    """Complete output contract for every conversion."""

    job_id: str
    config: PageConfiguration
    artifact: ArtifactMetadata
    placements: list[PagePlacement] = Field(default_factory=list)
    timings: list[StepTiming] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    verification: VerificationResult | None = None
