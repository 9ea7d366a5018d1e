"""
PNG2PDF — Step logger with duration tracking.

All modules log through the single ``png2pdf`` logger so request ids
and step timings end up in one stream.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("png2pdf")


@contextmanager
def step_timer(step_name: str) -> Generator[None, None, None]:
    """Log the start of a step, then its duration or the point it failed."""
    logger.info("▶ %s — started", step_name)
    start = time.perf_counter()
    try:
        yield
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.warning("✗ %s — failed after %.0f ms", step_name, elapsed_ms)
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("✔ %s — completed in %.0f ms", step_name, elapsed_ms)


def set_debug(enabled: bool) -> None:
    """Switch the shared logger to DEBUG (per-page placement lines)."""
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)
