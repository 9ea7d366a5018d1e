"""
PNG2PDF — Backend Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from app.pdf.page_sizes import FIT_MODES, ORIENTATIONS, PAGE_SIZES

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass(frozen=True)
class LayoutDefaults:
    """Page configuration used when a request leaves a field out."""
    page_size: str
    orientation: str
    fit_mode: str


@dataclass(frozen=True)
class UploadLimits:
    max_file_size_mb: float
    max_batch_files: int

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    host: str
    port: int
    debug: bool
    layout: LayoutDefaults
    limits: UploadLimits


def _load_config() -> AppConfig:
    return AppConfig(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=int(os.getenv("APP_PORT", "8000")),
        debug=os.getenv("APP_DEBUG", "false").lower() == "true",
        layout=LayoutDefaults(
            page_size=os.getenv("DEFAULT_PAGE_SIZE", "a4").strip().lower(),
            orientation=os.getenv("DEFAULT_ORIENTATION", "portrait").strip().lower(),
            fit_mode=os.getenv("DEFAULT_FIT_MODE", "fit").strip().lower(),
        ),
        limits=UploadLimits(
            max_file_size_mb=float(os.getenv("MAX_FILE_SIZE_MB", "10")),
            max_batch_files=int(os.getenv("MAX_BATCH_FILES", "50")),
        ),
    )


def _validate_config(cfg: AppConfig) -> None:
    """Fail fast if the layout defaults name something we cannot render."""
    problems: list[str] = []
    if cfg.layout.page_size not in PAGE_SIZES:
        problems.append(f"DEFAULT_PAGE_SIZE={cfg.layout.page_size!r}")
    if cfg.layout.orientation not in ORIENTATIONS:
        problems.append(f"DEFAULT_ORIENTATION={cfg.layout.orientation!r}")
    if cfg.layout.fit_mode not in FIT_MODES:
        problems.append(f"DEFAULT_FIT_MODE={cfg.layout.fit_mode!r}")
    if cfg.limits.max_file_size_mb <= 0 or cfg.limits.max_batch_files <= 0:
        problems.append("MAX_FILE_SIZE_MB and MAX_BATCH_FILES must be positive")
    if problems:
        print(
            f"\n  ERROR: Invalid configuration: {', '.join(problems)}\n"
            f"  Page sizes: {', '.join(PAGE_SIZES)}\n"
            f"  Orientations: {', '.join(ORIENTATIONS)}\n"
            f"  Fit modes: {', '.join(FIT_MODES)}\n"
            f"  Fix backend/.env (see backend/.env.example).\n",
            file=sys.stderr,
        )
        sys.exit(1)


settings = _load_config()
_validate_config(settings)
