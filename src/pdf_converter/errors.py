"""Exception hierarchy for pdf-converter."""

from __future__ import annotations

from pathlib import Path


class PdfConverterError(Exception):
    """Base exception for pdf-converter errors."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigError(PdfConverterError):
    """Raised when a page configuration value is out of range."""


class InputError(PdfConverterError):
    """Raised when no input images were supplied."""


class PathError(PdfConverterError):
    """Raised when an input path is missing or of the wrong type."""


class NoImagesFoundError(PdfConverterError):
    """Raised when a folder contains no recognized image files."""


class DecodeError(PdfConverterError):
    """Raised when an image file cannot be decoded."""


class GeometryError(PdfConverterError):
    """Raised when an image cannot be placed on the page."""


class SerializationError(PdfConverterError):
    """Raised when the PDF cannot be produced or written."""


class FileSystemError(PdfConverterError):
    """Raised on filesystem failures while reading inputs."""
