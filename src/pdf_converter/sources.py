"""Resolve a folder or an explicit list into the ordered set of input images."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from .errors import FileSystemError, InputError, NoImagesFoundError, PathError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "bmp", "webp")


def is_image_file(path: Path) -> bool:
    """Return whether *path* carries a recognized image extension."""
    return path.suffix[1:].lower() in IMAGE_EXTENSIONS


def _sort_key(path: Path) -> bytes:
    return os.fsencode(path.name)


def collect_image_files(folder: Path | str) -> list[Path]:
    """List the image files directly inside *folder*.

    Only regular files are considered (symlinks are not followed) and
    sub-directories are not descended into.  The result is sorted by the
    raw bytes of the file name, so upper-case names sort before lower-case
    ones and the order does not depend on locale or platform.

    Raises:
        PathError: If *folder* does not exist or is not a directory.
        NoImagesFoundError: If no recognized image file is found.
        FileSystemError: If the directory cannot be read.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise PathError(f"Invalid folder path: {folder}", path=folder)

    try:
        with os.scandir(folder) as entries:
            image_files = [
                Path(entry.path)
                for entry in entries
                if entry.is_file(follow_symlinks=False)
                and is_image_file(Path(entry.name))
            ]
    except OSError as exc:
        raise FileSystemError(f"Cannot read folder {folder}: {exc}", path=folder) from exc

    if not image_files:
        raise NoImagesFoundError(f"No images found in folder: {folder}", path=folder)

    image_files.sort(key=_sort_key)
    logger.info("Found %d images in %s", len(image_files), folder)
    return image_files


def resolve_sources(source: Path | str | Sequence[Path | str]) -> list[Path]:
    """Turn *source* into the ordered list of images to convert.

    A directory is scanned with :func:`collect_image_files`.  A single file
    path becomes a one-item list.  A sequence of paths is used as given, in
    the caller's order.

    Raises:
        InputError: If an empty sequence is given.
        PathError: If a single path does not exist.
    """
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        if path.is_dir():
            return collect_image_files(path)
        if not path.exists():
            raise PathError(f"Invalid path: {path}", path=path)
        return [path]

    image_paths = [Path(p) for p in source]
    if not image_paths:
        raise InputError("No images provided")
    return image_paths
