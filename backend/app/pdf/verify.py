"""
PNG2PDF — PDF verification module.

Inspects an assembled PDF locally to confirm it has the expected shape.
Uses pymupdf (fitz) for parsing.

Checks:
  1. PDF opens and has pages
  2. Page count matches the number of input images
  3. Every page carries exactly one image
  4. Document is not encrypted
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from app.errors import EncoderUnavailableError
from app.models.job import VerificationResult
from app.utils.logging import logger, step_timer


@dataclass
class VerifyExpectations:
    expected_pages: int | None = None
    images_per_page: int = 1


class PDFVerifier:
    """Local PDF inspection using pymupdf."""

    def verify(self, pdf_bytes: bytes, expectations: VerifyExpectations) -> VerificationResult:
        try:
            import fitz
        except ImportError as exc:
            raise EncoderUnavailableError(str(exc)) from exc

        with step_timer("Verify PDF"):
            checks: dict[str, bool] = {}

            with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
                page_count = len(doc)
                is_encrypted = bool(doc.is_encrypted)

                # 1. Opens and parses
                checks["opens_and_parses"] = page_count > 0

                # 2. Page count
                if expectations.expected_pages is not None:
                    checks["page_count_matches"] = page_count == expectations.expected_pages
                else:
                    checks["page_count_matches"] = True

                # 3. One image per page
                images_per_page = [len(page.get_images(full=True)) for page in doc]
                checks["one_image_per_page"] = bool(images_per_page) and all(
                    n == expectations.images_per_page for n in images_per_page
                )

                # 4. Encryption
                checks["not_encrypted"] = not is_encrypted

            passed_count = sum(checks.values())
            total_count = len(checks)

            result = VerificationResult(
                page_count=page_count,
                images_per_page=images_per_page,
                is_encrypted=is_encrypted,
                file_size=len(pdf_bytes),
                content_hash=hashlib.sha256(pdf_bytes).hexdigest(),
                checks_passed=passed_count,
                checks_total=total_count,
                passed=passed_count == total_count,
            )

            failed = [name for name, ok in checks.items() if not ok]
            logger.info(
                "  Verification: %d/%d checks passed %s%s",
                passed_count, total_count,
                "✓" if result.passed else "✗",
                f" (failed: {', '.join(failed)})" if failed else "",
            )
            return result
