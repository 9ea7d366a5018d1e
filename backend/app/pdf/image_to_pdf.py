"""
PNG2PDF — Image to PDF assembly.

Turns an ordered batch of PNG images into a single PDF document.
Each image becomes one page, placed according to the page
configuration's fit mode. Images are decoded and placed strictly in
order; image i+1 is not touched before image i is on its page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence

from app.errors import EmptyBatchError, ImageDecodeError
from app.models.image import PendingImage
from app.models.job import PagePlacement
from app.models.layout import PageConfiguration, PlacementRect
from app.pdf.decode import decode_image_dimensions
from app.pdf.encoder import DocumentEncoder, PDFDocument, load_encoder
from app.pdf.layout import compute_placement
from app.utils.formatting import suggested_filename
from app.utils.logging import logger, step_timer

ImageDecoder = Callable[[bytes], Awaitable[tuple[int, int]]]


@dataclass
class AssembledDocument:
    """A finished document: one page per input image, in input order."""

    document: PDFDocument
    config: PageConfiguration
    placements: list[PagePlacement] = field(default_factory=list)
    _pdf_bytes: bytes | None = field(default=None, repr=False)

    @property
    def page_count(self) -> int:
        return len(self.placements)

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.placements]

    @property
    def filename(self) -> str:
        return suggested_filename(self.names)

    def to_bytes(self) -> bytes:
        """Serialize once; later calls return the same bytes."""
        if self._pdf_bytes is None:
            self._pdf_bytes = self.document.serialize()
        return self._pdf_bytes

    def close(self) -> None:
        self.document.close()


class AssemblyEngine:
    """
    Drives the encoder to build a document from an ordered image list.

    The encoder and the decoder are injected so the engine never probes
    for libraries itself.
    """

    def __init__(self, encoder: DocumentEncoder, decoder: ImageDecoder = decode_image_dimensions):
        self.encoder = encoder
        self.decoder = decoder

    async def assemble(
        self,
        ordered_images: Sequence[PendingImage],
        config: PageConfiguration,
    ) -> AssembledDocument:
        """
        Build the document for ``ordered_images`` under ``config``.

        Raises EmptyBatchError or InvalidConfigurationError before any work,
        and ImageDecodeError if any image cannot be read or placed. No partial
        document is ever returned.
        """
        images = list(ordered_images)
        if not images:
            raise EmptyBatchError()
        cfg = config.validated()

        with step_timer(f"Assemble {len(images)} image(s) → PDF"):
            doc = self.encoder.create_document(cfg.page_size, cfg.orientation)
            page_w, page_h = doc.page_width(), doc.page_height()
            logger.info(
                "  Page %s %s (%.1f x %.1f mm), fit=%s",
                cfg.page_size, cfg.orientation, page_w, page_h, cfg.fit_mode,
            )

            placements: list[PagePlacement] = []
            try:
                for i, image in enumerate(images):
                    iw, ih = await self._decode(image, i)
                    rect = compute_placement(iw, ih, page_w, page_h, cfg.fit_mode)

                    if i > 0:
                        doc.add_page()
                    self._place(doc, image, i, rect)

                    placements.append(
                        PagePlacement(
                            page=i + 1,
                            name=image.name,
                            pixel_width=iw,
                            pixel_height=ih,
                            rect=rect,
                        )
                    )
                    logger.info(
                        "  Page %d: %s %dx%d px → %.2f x %.2f mm at (%.2f, %.2f)",
                        i + 1, image.name, iw, ih, rect.width, rect.height, rect.x, rect.y,
                    )
            except Exception:
                doc.close()
                raise

        return AssembledDocument(document=doc, config=cfg, placements=placements)

    async def _decode(self, image: PendingImage, index: int) -> tuple[int, int]:
        try:
            width, height = await self.decoder(image.data)
        except Exception as exc:
            raise ImageDecodeError(image.name, index, str(exc)) from exc
        if width <= 0 or height <= 0:
            raise ImageDecodeError(image.name, index, f"empty size {width}x{height}")
        return int(width), int(height)

    @staticmethod
    def _place(doc: PDFDocument, image: PendingImage, index: int, rect: PlacementRect) -> None:
        try:
            doc.place_image(image.data, "PNG", rect.x, rect.y, rect.width, rect.height)
        except Exception as exc:
            raise ImageDecodeError(image.name, index, str(exc)) from exc


async def images_to_pdf(
    image_list: list[bytes],
    page_size: str = "a4",
    orientation: str = "portrait",
    fit_mode: str = "fit",
    encoder: DocumentEncoder | None = None,
) -> bytes:
    """
    Convert a list of PNG byte arrays into a single PDF.

    Returns the raw PDF bytes.
    """
    images = [
        PendingImage(data=data, name=f"image-{i + 1}.png", size=len(data))
        for i, data in enumerate(image_list)
    ]
    engine = AssemblyEngine(encoder or load_encoder())
    config = PageConfiguration(page_size=page_size, orientation=orientation, fit_mode=fit_mode)
    assembled = await engine.assemble(images, config)
    try:
        pdf_bytes = assembled.to_bytes()
    finally:
        assembled.close()

    logger.info("  Created %d-page PDF (%d bytes)", assembled.page_count, len(pdf_bytes))
    return pdf_bytes
