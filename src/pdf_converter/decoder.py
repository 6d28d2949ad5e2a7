"""Decode image files into flat 8-bit RGB rasters using Pillow."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from .errors import DecodeError, FileSystemError, PathError


@dataclass(frozen=True)
class ImageSample:
    """A decoded image: row-major RGB bytes, three per pixel."""

    width: int
    height: int
    pixels: bytes
    source: Path | None = None

    def to_png(self) -> bytes:
        """Pack the raster losslessly as PNG, the form embedded into the PDF."""
        image = Image.frombytes("RGB", (self.width, self.height), self.pixels)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


def decode_image(data: bytes, *, source: Path | None = None) -> ImageSample:
    """Decode encoded image bytes and flatten them to 8-bit RGB.

    Only the first frame of animated formats is used.  Alpha channels are
    dropped, palettes are expanded and greyscale is widened to RGB.

    Raises:
        DecodeError: If Pillow cannot read the data or it has no pixels.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            rgb = image.convert("RGB")
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode image {source or 'data'}: {exc}", path=source) from exc

    width, height = rgb.size
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image {source or 'data'} has no pixels", path=source)

    return ImageSample(width=width, height=height, pixels=rgb.tobytes(), source=source)


def load_image(path: Path) -> ImageSample:
    """Read *path* from disk and decode it.

    Raises:
        PathError: If the file does not exist or is not a regular file.
        FileSystemError: If the file cannot be read.
        DecodeError: If the contents are not a decodable image.
    """
    if not path.is_file():
        raise PathError(f"Image not found: {path}", path=path)

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FileSystemError(f"Cannot read image {path}: {exc}", path=path) from exc

    return decode_image(data, source=path)
