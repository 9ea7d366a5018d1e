"""
PNG2PDF — Image payload contracts.
"""

from __future__ import annotations

from dataclasses import dataclass, field

PNG_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class ImageCandidate:
    """A file offered for the batch, before media-type filtering."""
    data: bytes = field(repr=False)
    media_type: str
    name: str
    size: int = -1

    def __post_init__(self):
        if self.size < 0:
            object.__setattr__(self, "size", len(self.data))

    @property
    def is_png(self) -> bool:
        media_type = (self.media_type or "").split(";", 1)[0].strip().lower()
        return media_type == PNG_MEDIA_TYPE


@dataclass(frozen=True)
class PendingImage:
    """
    An accepted image waiting in the batch.

    Pixel dimensions are not known here; assembly decodes them and
    records them on the resulting page, leaving this object untouched.
    """
    data: bytes = field(repr=False)
    name: str
    size: int

    @classmethod
    def from_candidate(cls, candidate: ImageCandidate) -> PendingImage:
        return cls(data=candidate.data, name=candidate.name, size=candidate.size)
