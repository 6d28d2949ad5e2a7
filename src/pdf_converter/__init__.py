"""pdf-converter: Combine JPEG, PNG, GIF, BMP and WebP images into a single PDF."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .assembler import Document, Page, assemble_pdf, build_document, render_pdf, write_pdf
from .config import (
    A4_HEIGHT_MM,
    A4_WIDTH_MM,
    DEFAULT_CONFIG,
    DEFAULT_DPI,
    DEFAULT_MARGIN_MM,
    PageConfig,
)
from .decoder import ImageSample, decode_image
from .errors import (
    ConfigError,
    DecodeError,
    FileSystemError,
    GeometryError,
    InputError,
    NoImagesFoundError,
    PathError,
    PdfConverterError,
    SerializationError,
)
from .layout import Placement, resolve
from .sources import IMAGE_EXTENSIONS, collect_image_files, resolve_sources

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "A4_HEIGHT_MM",
    "A4_WIDTH_MM",
    "ConfigError",
    "ConversionResult",
    "DEFAULT_CONFIG",
    "DEFAULT_DPI",
    "DEFAULT_MARGIN_MM",
    "DecodeError",
    "Document",
    "FileSystemError",
    "GeometryError",
    "IMAGE_EXTENSIONS",
    "ImageSample",
    "InputError",
    "NoImagesFoundError",
    "Page",
    "PageConfig",
    "PathError",
    "PdfConverterError",
    "Placement",
    "SerializationError",
    "assemble_pdf",
    "build_document",
    "collect_image_files",
    "convert_folder_to_pdf",
    "convert_image_to_pdf",
    "convert_images_to_pdf",
    "decode_image",
    "render_pdf",
    "resolve",
    "resolve_sources",
    "write_pdf",
]


@dataclass
class ConversionResult:
    """Outcome of a successful conversion."""

    output_path: Path
    page_count: int
    total_bytes: int
    image_paths: list[Path]


def _resolve_pdf_path(
    *,
    output: Path | str | None,
    stem: str,
) -> Path:
    """Resolve the output PDF file path.

    Rules:
        - ``None`` → ``{cwd}/{stem}.pdf``
        - Ends in ``.pdf`` → treated as literal file path
        - Otherwise → treated as directory: ``{path}/{stem}.pdf``
    """
    if output is None:
        return Path(f"{stem}.pdf").resolve()

    output = Path(output)
    if output.suffix.lower() == ".pdf":
        return output.resolve()

    return (output / f"{stem}.pdf").resolve()


def _folder_stem(folder: Path) -> str:
    """Default PDF name for a folder: its own name, or ``images`` for a root."""
    return folder.resolve().name or "images"


def _convert(
    image_paths: list[Path],
    pdf_path: Path,
    config: PageConfig,
    on_page_done: Callable[[Path], None] | None,
) -> ConversionResult:
    size = assemble_pdf(
        image_paths=image_paths,
        output_path=pdf_path,
        config=config,
        on_page_done=on_page_done,
    )
    return ConversionResult(
        output_path=pdf_path,
        page_count=len(image_paths),
        total_bytes=size,
        image_paths=image_paths,
    )


def convert_folder_to_pdf(
    folder: Path | str,
    output: Path | str | None = None,
    *,
    config: PageConfig = DEFAULT_CONFIG,
    on_page_done: Callable[[Path], None] | None = None,
) -> ConversionResult:
    """Convert every image directly inside *folder* into one PDF.

    Images are ordered by the raw bytes of their file names.

    Args:
        folder: Directory containing the images.
        output: Output path.  Omit for ``{folder name}.pdf`` in the CWD,
            pass a ``.pdf`` path to use it literally, or pass a directory to
            save ``{folder name}.pdf`` inside it.
        config: Page geometry.  Defaults to A4 with 20 mm margins at 300 DPI.
        on_page_done: Called with each image path after its page is added.

    Returns:
        A :class:`ConversionResult` describing the written PDF.

    Raises:
        PathError: If *folder* does not exist or is not a directory.
        NoImagesFoundError: If *folder* holds no recognized images.
        DecodeError: If an image cannot be decoded.
        GeometryError: If the margins leave no printable area.
        SerializationError: If the PDF cannot be produced or written.

    Example::

        from pdf_converter import convert_folder_to_pdf

        result = convert_folder_to_pdf("scans/", "scans.pdf")
        print(f"Saved {result.page_count} pages to {result.output_path}")
    """
    config.printable_area()
    folder = Path(folder)
    image_paths = collect_image_files(folder)
    pdf_path = _resolve_pdf_path(output=output, stem=_folder_stem(folder))
    return _convert(image_paths, pdf_path, config, on_page_done)


def convert_images_to_pdf(
    image_paths: Sequence[Path | str],
    output: Path | str | None = None,
    *,
    config: PageConfig = DEFAULT_CONFIG,
    on_page_done: Callable[[Path], None] | None = None,
) -> ConversionResult:
    """Convert an explicit list of images into one PDF, in the given order.

    *output* follows the same rules as in :func:`convert_folder_to_pdf`,
    with the configured title as the default file name.

    Raises:
        InputError: If *image_paths* is empty.
        PathError: If an image does not exist.
        DecodeError: If an image cannot be decoded.
        GeometryError: If the margins leave no printable area.
        SerializationError: If the PDF cannot be produced or written.
    """
    config.printable_area()
    if isinstance(image_paths, (str, Path)):
        raise TypeError("image_paths must be a sequence of paths, not a single path")
    paths = resolve_sources(image_paths)
    pdf_path = _resolve_pdf_path(output=output, stem=config.title)
    return _convert(paths, pdf_path, config, on_page_done)


def convert_image_to_pdf(
    image_path: Path | str,
    output: Path | str | None = None,
    *,
    config: PageConfig = DEFAULT_CONFIG,
) -> ConversionResult:
    """Convert a single image into a one-page PDF.

    Raises:
        PathError: If *image_path* does not exist.
        DecodeError: If the image cannot be decoded.
        GeometryError: If the margins leave no printable area.
        SerializationError: If the PDF cannot be produced or written.
    """
    config.printable_area()
    image_path = Path(image_path)
    if not image_path.is_file():
        raise PathError(f"Invalid path: {image_path}", path=image_path)
    pdf_path = _resolve_pdf_path(output=output, stem=image_path.stem)
    return _convert([image_path], pdf_path, config, None)
