"""
PNG2PDF — Ordered set of images waiting to be converted.

Only PNG files are accepted. Order is arrival order; removal shifts
later images down by one.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from app.errors import IndexOutOfRangeError, NoValidFilesError
from app.models.image import ImageCandidate, PendingImage
from app.utils.formatting import format_file_size
from app.utils.logging import logger


class ImageSetManager:
    """Holds the current batch. Snapshots handed out are never live views."""

    def __init__(self):
        self._images: list[PendingImage] = []

    def append(self, candidates: Iterable[ImageCandidate]) -> list[PendingImage]:
        """
        Add the PNG candidates to the end of the batch.

        Raises NoValidFilesError, without touching the batch, when none
        of the candidates is a PNG.
        """
        candidates = list(candidates)
        accepted = [PendingImage.from_candidate(c) for c in candidates if c.is_png]
        rejected = [c.name for c in candidates if not c.is_png]

        if not accepted:
            logger.warning("  Rejected %d file(s): no PNG among them", len(candidates))
            raise NoValidFilesError(rejected)

        if rejected:
            logger.info("  Skipped %d non-PNG file(s): %s", len(rejected), ", ".join(rejected))

        self._images.extend(accepted)
        for image in accepted:
            logger.info("  Added %s (%s)", image.name, format_file_size(image.size))
        return accepted

    def remove_at(self, index: int) -> PendingImage:
        if not 0 <= index < len(self._images):
            raise IndexOutOfRangeError(index, len(self._images))
        removed = self._images.pop(index)
        logger.info("  Removed %s (position %d)", removed.name, index)
        return removed

    def clear(self) -> None:
        self._images = []

    def is_empty(self) -> bool:
        return not self._images

    def size(self) -> int:
        return len(self._images)

    def to_ordered_list(self) -> list[PendingImage]:
        return list(self._images)

    def total_bytes(self) -> int:
        return sum(image.size for image in self._images)

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[PendingImage]:
        return iter(self.to_ordered_list())
