"""PNG2PDF data models — typed contracts for the whole converter."""

from app.models.image import (
    ImageCandidate,
    PendingImage,
)
from app.models.layout import (
    FitMode,
    Orientation,
    PageConfiguration,
    PlacementRect,
)
from app.models.job import (
    BatchState,
    StepTiming,
    PagePlacement,
    ArtifactMetadata,
    VerificationResult,
    ConversionResult,
)

__all__ = [
    "ImageCandidate",
    "PendingImage",
    "FitMode",
    "Orientation",
    "PageConfiguration",
    "PlacementRect",
    "BatchState",
    "StepTiming",
    "PagePlacement",
    "ArtifactMetadata",
    "VerificationResult",
    "ConversionResult",
]
