"""Shared helpers for building fixture images."""

from __future__ import annotations

import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image


def create_minimal_png(path: Path, *, width: int = 100, height: int = 100) -> None:
    """Create a minimal valid red RGB PNG file for testing."""

    def _chunk(chunk_type: bytes, data: bytes) -> bytes:
        c = chunk_type + data
        crc = struct.pack(">I", zlib.crc32(c) & 0xFFFFFFFF)
        return struct.pack(">I", len(data)) + c + crc

    signature = b"\x89PNG\r\n\x1a\n"
    ihdr_data = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    ihdr = _chunk(b"IHDR", ihdr_data)

    raw_data = b""
    for _ in range(height):
        raw_data += b"\x00" + b"\xff\x00\x00" * width
    idat = _chunk(b"IDAT", zlib.compress(raw_data))
    iend = _chunk(b"IEND", b"")

    path.write_bytes(signature + ihdr + idat + iend)


def create_image(
    path: Path,
    *,
    width: int = 40,
    height: int = 30,
    mode: str = "RGB",
    color: object = (0, 128, 255),
) -> None:
    """Write an image with Pillow, the format chosen by *path*'s suffix."""
    Image.new(mode, (width, height), color).save(path)


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "image.png"
    create_minimal_png(path=path)
    return path
