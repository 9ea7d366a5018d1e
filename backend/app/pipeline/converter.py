"""
PNG2PDF — Conversion session.

Owns one batch and walks it through its states:

  EMPTY → ACCUMULATING → ASSEMBLING → ASSEMBLED → (reset) → EMPTY

A failed conversion goes from ASSEMBLING back to ACCUMULATING with the
batch untouched, so the caller can adjust the configuration and retry.
Only one conversion may be in flight at a time.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from typing import Iterable

from app.errors import AssemblyInProgressError, NothingToDownloadError
from app.models.image import ImageCandidate, PendingImage
from app.models.job import (
    ArtifactMetadata,
    BatchState,
    ConversionResult,
    StepTiming,
    VerificationResult,
)
from app.models.layout import PageConfiguration
from app.pdf.image_to_pdf import AssembledDocument, AssemblyEngine
from app.pdf.verify import PDFVerifier, VerifyExpectations
from app.pipeline.image_set import ImageSetManager
from app.utils.formatting import format_file_size
from app.utils.logging import logger


class ConversionSession:
    """
    State-machine wrapper around the image set and the assembly engine.

    Tracks every step's timing and status and produces a complete
    ConversionResult for each successful run.
    """

    def __init__(self, engine: AssemblyEngine, verifier: PDFVerifier | None = None):
        self.session_id = uuid.uuid4().hex[:12]
        self.engine = engine
        self.verifier = verifier
        self.image_set = ImageSetManager()
        self.state = BatchState.EMPTY
        self.document: AssembledDocument | None = None
        self.last_error: Exception | None = None
        self.timings: list[StepTiming] = []

    @property
    def is_ready(self) -> bool:
        return not self.image_set.is_empty()

    @property
    def images(self) -> list[PendingImage]:
        return self.image_set.to_ordered_list()

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    def _ensure_idle(self) -> None:
        if self.state == BatchState.ASSEMBLING:
            raise AssemblyInProgressError()

    def _drop_document(self) -> None:
        if self.document is not None:
            self.document.close()
            self.document = None

    def _settle(self) -> None:
        self.state = BatchState.EMPTY if self.image_set.is_empty() else BatchState.ACCUMULATING

    def add_files(self, candidates: Iterable[ImageCandidate]) -> list[PendingImage]:
        self._ensure_idle()
        added = self.image_set.append(candidates)
        self._drop_document()
        self.state = BatchState.ACCUMULATING
        return added

    def remove_file(self, index: int) -> PendingImage:
        self._ensure_idle()
        removed = self.image_set.remove_at(index)
        self._drop_document()
        self._settle()
        return removed

    async def convert(self, config: PageConfiguration, verify: bool = True) -> ConversionResult:
        """Assemble the current batch. Returns a complete ConversionResult."""
        self._ensure_idle()
        self._drop_document()

        job_id = uuid.uuid4().hex[:12]
        snapshot = self.image_set.to_ordered_list()
        self.state = BatchState.ASSEMBLING
        self.timings = []
        warnings: list[str] = []

        logger.info("=" * 60)
        logger.info(
            "[%s] Conversion starting (%d images, %s)",
            job_id, len(snapshot), format_file_size(self.image_set.total_bytes()),
        )
        logger.info("=" * 60)
        started = time.perf_counter()

        assembled: AssembledDocument | None = None
        t = time.perf_counter()
        try:
            assembled = await self.engine.assemble(snapshot, config)
            self._record_step("assemble", t, detail=f"{assembled.page_count} pages")

            t = time.perf_counter()
            pdf_bytes = assembled.to_bytes()
            self._record_step("serialize", t, detail=f"{len(pdf_bytes)} bytes")

            verification: VerificationResult | None = None
            t = time.perf_counter()
            if verify and self.verifier is not None:
                verification = self.verifier.verify(
                    pdf_bytes, VerifyExpectations(expected_pages=len(snapshot))
                )
                self._record_step(
                    "verify", t,
                    detail=f"{verification.checks_passed}/{verification.checks_total} checks",
                )
                if not verification.passed:
                    warnings.append(
                        f"Verification: {verification.checks_passed}/"
                        f"{verification.checks_total} checks passed"
                    )
            else:
                self._record_step("verify", t, "skipped")

        except Exception as exc:
            self._record_step("convert", t, "failed", type(exc).__name__)
            self.last_error = exc
            if assembled is not None:
                assembled.close()
            self._settle()
            logger.warning("[%s] Conversion failed, batch kept (%d images)", job_id, len(snapshot))
            raise

        self.document = assembled
        self.last_error = None
        self.state = BatchState.ASSEMBLED

        result = ConversionResult(
            job_id=job_id,
            config=assembled.config,
            artifact=ArtifactMetadata(
                filename=assembled.filename,
                size_bytes=len(pdf_bytes),
                pages=assembled.page_count,
                content_hash=(
                    verification.content_hash if verification is not None
                    else _sha256(pdf_bytes)
                ),
            ),
            placements=assembled.placements,
            timings=self.timings,
            warnings=warnings,
            verification=verification,
        )

        total_ms = int((time.perf_counter() - started) * 1000)
        logger.info("=" * 60)
        logger.info(
            "[%s] Conversion complete — %s, %d bytes, %d pages, %dms",
            job_id, result.artifact.filename, len(pdf_bytes), assembled.page_count, total_ms,
        )
        logger.info("=" * 60)
        return result

    def download(self) -> tuple[str, bytes]:
        """(suggested filename, PDF bytes) of the last successful conversion."""
        if self.state != BatchState.ASSEMBLED or self.document is None:
            raise NothingToDownloadError()
        return self.document.filename, self.document.to_bytes()

    def reset(self) -> None:
        self._ensure_idle()
        self._drop_document()
        self.image_set.clear()
        self.last_error = None
        self.timings = []
        self.state = BatchState.EMPTY


def _sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
