"""
PNG2PDF — Page configuration and placement contracts.

Lengths are millimetres throughout.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from app.errors import InvalidConfigurationError
from app.pdf.page_sizes import FIT_MODES, ORIENTATIONS, PAGE_SIZES


class Orientation(str, enum.Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class FitMode(str, enum.Enum):
    FIT = "fit"
    FILL = "fill"
    ORIGINAL = "original"


def _normalise(value: str | enum.Enum) -> str:
    if isinstance(value, enum.Enum):
        value = value.value
    return str(value).strip().lower()


class PageConfiguration(BaseModel):
    """
    Target page geometry for one assembly run.

    Values are kept as given so that an unknown name reaches the engine
    and is reported as InvalidConfigurationError rather than a pydantic
    error. Call validated() to get the normalised form.
    """

    model_config = ConfigDict(frozen=True)

    page_size: str = Field(default="a4", description="a3 | a4 | a5 | letter | legal | tabloid")
    orientation: str = Field(default="portrait", description="portrait | landscape")
    fit_mode: str = Field(default="fit", description="fit | fill | original")

    def validated(self) -> PageConfiguration:
        page_size = _normalise(self.page_size)
        orientation = _normalise(self.orientation)
        fit_mode = _normalise(self.fit_mode)
        if page_size not in PAGE_SIZES:
            raise InvalidConfigurationError("page size", self.page_size, list(PAGE_SIZES))
        if orientation not in ORIENTATIONS:
            raise InvalidConfigurationError("orientation", self.orientation, list(ORIENTATIONS))
        if fit_mode not in FIT_MODES:
            raise InvalidConfigurationError("fit mode", self.fit_mode, list(FIT_MODES))
        return PageConfiguration(page_size=page_size, orientation=orientation, fit_mode=fit_mode)


class PlacementRect(BaseModel):
    """Where one image sits on its page, origin at the top-left corner."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
