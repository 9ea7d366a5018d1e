"""
PNG2PDF — FastAPI Backend

Endpoints:
  POST /v1/png-to-pdf   — PNG image(s) → single PDF, one image per page
  GET  /v1/page-sizes   — Supported page sizes (mm)
  GET  /v1/options      — Orientations, fit modes and configured defaults
  GET  /health          — Health check
"""

import base64
import time
import uuid
from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from app.core.config import settings
from app.errors import BatchTooLargeError, ConverterError, FileTooLargeError
from app.models.image import ImageCandidate
from app.models.layout import PageConfiguration
from app.pdf.encoder import PyMuPDFEncoder, load_encoder
from app.pdf.image_to_pdf import AssemblyEngine
from app.pdf.page_sizes import FIT_MODES, ORIENTATIONS, PAGE_SIZES
from app.pdf.verify import PDFVerifier
from app.pipeline.converter import ConversionSession
from app.utils.formatting import DEFAULT_PDF_NAME
from app.utils.logging import logger, set_debug

VERSION = "1.0.0"

app = FastAPI(
    title="PNG2PDF API",
    description="Combine PNG images into a single PDF, one image per page.",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[
        "Content-Disposition", "X-Conversion-Job", "X-Page-Count",
        "X-Pipeline-Duration-Ms", "X-Request-Id",
    ],
)

_encoder: PyMuPDFEncoder | None = None


def get_encoder() -> PyMuPDFEncoder:
    """The process-wide encoder, resolved on first use."""
    global _encoder
    if _encoder is None:
        _encoder = load_encoder()
    return _encoder


@app.on_event("startup")
async def _startup_banner():
    set_debug(settings.debug)
    get_encoder()
    logger.info("")
    logger.info("╔══════════════════════════════════════════════════╗")
    logger.info("║            PNG2PDF  ·  API Server v1             ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  POST /v1/png-to-pdf  → PNG(s) → PDF             ║")
    logger.info("║  GET  /v1/page-sizes  → Page size table          ║")
    logger.info("║  GET  /v1/options     → Layout options           ║")
    logger.info("║  GET  /health         → Health check             ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info(
        "║  Defaults : %-37s║",
        f"{settings.layout.page_size} {settings.layout.orientation} {settings.layout.fit_mode}",
    )
    logger.info(
        "║  Limits   : %-37s║",
        f"{settings.limits.max_file_size_mb:g}MB/file, {settings.limits.max_batch_files} files",
    )
    logger.info("║  Encoder  : ✓ loaded                             ║")
    logger.info("╚══════════════════════════════════════════════════╝")
    logger.info("")


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name plus the UTF-8 original."""
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "")
    if not fallback.strip(" .") or fallback == ".pdf":
        fallback = DEFAULT_PDF_NAME
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "png2pdf-api", "version": VERSION}


@app.get("/v1/page-sizes")
async def get_page_sizes():
    """List supported page sizes with portrait dimensions in mm."""
    return [
        {"name": name, "width_mm": w, "height_mm": h}
        for name, (w, h) in PAGE_SIZES.items()
    ]


@app.get("/v1/options")
async def get_options():
    return {
        "orientations": list(ORIENTATIONS),
        "fit_modes": list(FIT_MODES),
        "defaults": {
            "page_size": settings.layout.page_size,
            "orientation": settings.layout.orientation,
            "fit_mode": settings.layout.fit_mode,
        },
        "limits": {
            "max_file_size_mb": settings.limits.max_file_size_mb,
            "max_batch_files": settings.limits.max_batch_files,
        },
    }


@app.post(
    "/v1/png-to-pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Generated PDF"},
        413: {"description": "File or batch too large"},
        422: {"description": "No PNG files, bad configuration or unreadable image"},
        500: {"description": "Conversion error"},
    },
)
async def png_to_pdf(
    files: list[UploadFile] = File(..., description="One or more PNG images, in page order"),
    page_size: str | None = None,
    orientation: str | None = None,
    fit_mode: str | None = None,
    verify: bool = True,
):
    """
    Convert uploaded PNG images into a single PDF.

    Non-PNG uploads are skipped; if nothing is left the request fails.
    The response carries an X-Conversion-Job header with the full
    ConversionResult (placements, timings, verification) as base64 JSON.
    """
    request_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()
    limits = settings.limits

    config = PageConfiguration(
        page_size=page_size or settings.layout.page_size,
        orientation=orientation or settings.layout.orientation,
        fit_mode=fit_mode or settings.layout.fit_mode,
    )
    logger.info(
        "[%s] POST /v1/png-to-pdf — %d files | page=%s %s fit=%s verify=%s",
        request_id, len(files), config.page_size, config.orientation, config.fit_mode, verify,
    )

    if len(files) > limits.max_batch_files:
        exc = BatchTooLargeError(len(files), limits.max_batch_files)
        raise HTTPException(status_code=413, detail=exc.to_dict())

    candidates: list[ImageCandidate] = []
    for f in files:
        content = await f.read()
        name = f.filename or "image.png"
        if len(content) > limits.max_file_size_bytes:
            exc = FileTooLargeError(name, len(content) / (1024 * 1024), limits.max_file_size_mb)
            raise HTTPException(status_code=413, detail=exc.to_dict())
        candidates.append(
            ImageCandidate(data=content, media_type=f.content_type or "", name=name, size=len(content))
        )

    session = ConversionSession(AssemblyEngine(get_encoder()), PDFVerifier())
    try:
        session.add_files(candidates)
        result = await session.convert(config, verify=verify)
        filename, pdf_bytes = session.download()

    except ConverterError as exc:
        logger.warning("[%s] Conversion error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())
    except Exception as exc:
        logger.exception("[%s] Conversion failed", request_id)
        raise HTTPException(status_code=500, detail=str(exc))
    finally:
        session.reset()

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[%s] Complete — %s, %d bytes in %.0f ms", request_id, filename, len(pdf_bytes), elapsed_ms
    )

    job_json = result.model_dump_json()
    job_b64 = base64.b64encode(job_json.encode()).decode("ascii")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": _content_disposition(filename),
            "X-Page-Count": str(result.artifact.pages),
            "X-Pipeline-Duration-Ms": f"{elapsed_ms:.0f}",
            "X-Request-Id": request_id,
            "X-Conversion-Job": job_b64,
        },
    )
