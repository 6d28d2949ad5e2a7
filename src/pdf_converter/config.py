"""Page configuration for PDF conversion."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from .errors import ConfigError, GeometryError

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
DEFAULT_MARGIN_MM = 20.0
DEFAULT_DPI = 300.0
DEFAULT_TITLE = "Generated PDF"

MM_PER_INCH = 25.4


@dataclass(frozen=True)
class PageConfig:
    """Physical page geometry shared by every page of a document.

    All lengths are in millimetres.  ``dpi`` is the pixel density assumed
    for every input image; resolution metadata stored in the files is
    ignored.
    """

    page_width_mm: float = A4_WIDTH_MM
    page_height_mm: float = A4_HEIGHT_MM
    margin_mm: float = DEFAULT_MARGIN_MM
    dpi: float = DEFAULT_DPI
    title: str = DEFAULT_TITLE

    def __post_init__(self) -> None:
        for name in ("page_width_mm", "page_height_mm", "dpi"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a positive number, got {value!r}")

        if not math.isfinite(self.margin_mm) or self.margin_mm < 0:
            raise ConfigError(
                f"margin_mm must be zero or positive, got {self.margin_mm!r}"
            )

        if not self.title or not self.title.strip():
            raise ConfigError("title must not be empty")

    def replace(self, **changes: object) -> PageConfig:
        """Return a copy with *changes* applied (validated again)."""
        return dataclasses.replace(self, **changes)

    def printable_area(self) -> tuple[float, float]:
        """Return ``(width, height)`` of the page minus margins.

        Raises:
            GeometryError: If the margins leave no room for an image.
        """
        avail_w = self.page_width_mm - 2 * self.margin_mm
        avail_h = self.page_height_mm - 2 * self.margin_mm
        if avail_w <= 0 or avail_h <= 0:
            raise GeometryError(
                f"Margin of {self.margin_mm} mm leaves no printable area on a "
                f"{self.page_width_mm} x {self.page_height_mm} mm page"
            )
        return avail_w, avail_h


DEFAULT_CONFIG = PageConfig()
