"""Fit an image into the printable area of a page."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import MM_PER_INCH, PageConfig
from .errors import GeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Where and how large an image is drawn on its page.

    Offsets are measured from the page's lower-left corner with the Y axis
    pointing up, as in PDF user space.
    """

    image_width_mm: float
    image_height_mm: float
    scale_x: float
    scale_y: float
    scale: float
    x_mm: float
    y_mm: float

    @property
    def width_mm(self) -> float:
        return self.image_width_mm * self.scale

    @property
    def height_mm(self) -> float:
        return self.image_height_mm * self.scale


def pixels_to_mm(pixels: int, dpi: float) -> float:
    return pixels * MM_PER_INCH / dpi


def resolve(
    image_pixel_width: int,
    image_pixel_height: int,
    config: PageConfig,
) -> Placement:
    """Scale and center an image inside the page margins.

    The image's natural size is derived from its pixel dimensions at
    ``config.dpi``.  It is then scaled uniformly by the tighter of the two
    axis ratios so that it fits the printable area, and centered in it.

    Args:
        image_pixel_width: Image width in pixels.
        image_pixel_height: Image height in pixels.
        config: Page geometry.

    Returns:
        The resulting :class:`Placement`.

    Raises:
        GeometryError: If a pixel dimension is not positive or the margins
            leave no printable area.
    """
    for name, value in (("width", image_pixel_width), ("height", image_pixel_height)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise GeometryError(f"Image {name} must be a positive pixel count, got {value!r}")

    avail_w, avail_h = config.printable_area()

    img_w_mm = pixels_to_mm(image_pixel_width, config.dpi)
    img_h_mm = pixels_to_mm(image_pixel_height, config.dpi)

    scale_x = avail_w / img_w_mm
    scale_y = avail_h / img_h_mm
    scale = min(scale_x, scale_y)

    disp_w = img_w_mm * scale
    disp_h = img_h_mm * scale

    x_mm = config.margin_mm + (avail_w - disp_w) / 2
    y_mm = config.margin_mm + (avail_h - disp_h) / 2

    logger.debug(
        "%dx%d px -> %.1fx%.1f mm, available %.1fx%.1f mm, scale %.3f, "
        "displayed %.1fx%.1f mm at (%.1f, %.1f) mm",
        image_pixel_width,
        image_pixel_height,
        img_w_mm,
        img_h_mm,
        avail_w,
        avail_h,
        scale,
        disp_w,
        disp_h,
        x_mm,
        y_mm,
    )

    return Placement(
        image_width_mm=img_w_mm,
        image_height_mm=img_h_mm,
        scale_x=scale_x,
        scale_y=scale_y,
        scale=scale,
        x_mm=x_mm,
        y_mm=y_mm,
    )
