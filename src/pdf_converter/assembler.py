"""Assemble decoded images into a paginated PDF file."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import img2pdf

from .config import PageConfig
from .decoder import load_image
from .errors import InputError, SerializationError
from .layout import Placement, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """A single page holding one placed image."""

    width_mm: float
    height_mm: float
    source: Path
    pixel_width: int
    pixel_height: int
    placement: Placement
    raster: bytes = field(repr=False)


@dataclass
class Document:
    """Ordered pages of the PDF under construction.

    Pages are only ever appended.  Once :meth:`finalize` has produced the
    PDF bytes the document is frozen.
    """

    title: str
    pages: list[Page] = field(default_factory=list)
    finalized: bool = False

    def append(self, page: Page) -> None:
        if self.finalized:
            raise SerializationError("Cannot add pages to a finalized document")
        self.pages.append(page)

    def finalize(self) -> bytes:
        """Serialize the document to PDF bytes.  Allowed once."""
        if self.finalized:
            raise SerializationError("Document has already been serialized")
        pdf_bytes = render_pdf(self)
        self.finalized = True
        return pdf_bytes


LayoutFun = Callable[[int, int, tuple[float, float]], tuple[float, float, float, float]]


def _make_layout_fun(document: Document) -> LayoutFun:
    """Build an img2pdf layout function returning each page's stored geometry.

    img2pdf centers the image on the page.  Margins are symmetric, so that
    position is the resolved offset.
    """
    geometry: dict[tuple[int, int], tuple[float, float, float, float]] = {}
    for page in document.pages:
        geometry[(page.pixel_width, page.pixel_height)] = (
            img2pdf.mm_to_pt(page.width_mm),
            img2pdf.mm_to_pt(page.height_mm),
            img2pdf.mm_to_pt(page.placement.width_mm),
            img2pdf.mm_to_pt(page.placement.height_mm),
        )

    def layout_fun(
        imgwidthpx: int, imgheightpx: int, ndpi: tuple[float, float]
    ) -> tuple[float, float, float, float]:
        try:
            return geometry[(imgwidthpx, imgheightpx)]
        except KeyError:
            raise SerializationError(
                f"No page geometry for a {imgwidthpx}x{imgheightpx} px image"
            ) from None

    return layout_fun


def render_pdf(document: Document) -> bytes:
    """Serialize *document* to PDF bytes with img2pdf.

    Raises:
        SerializationError: If the document is empty or img2pdf fails.
    """
    if not document.pages:
        raise SerializationError("Cannot serialize a document without pages")

    try:
        return img2pdf.convert(
            [page.raster for page in document.pages],
            title=document.title,
            layout_fun=_make_layout_fun(document),
            engine=img2pdf.Engine.internal,
        )
    except (img2pdf.ImageOpenError, img2pdf.PdfTooLargeError, ValueError) as exc:
        raise SerializationError(f"PDF generation failed: {exc}") from exc


def build_document(
    image_paths: list[Path],
    config: PageConfig,
    *,
    on_page_done: Callable[[Path], None] | None = None,
) -> Document:
    """Decode, place and append one page per image, in order.

    The first image that cannot be read, decoded or placed aborts the
    whole build.

    Args:
        image_paths: Ordered list of image file paths.
        config: Page geometry shared by all pages.
        on_page_done: Called with each image path after its page is added.

    Returns:
        The populated :class:`Document`.
    """
    config.printable_area()
    document = Document(title=config.title)
    total = len(image_paths)

    for index, image_path in enumerate(image_paths, start=1):
        logger.info("Processing image %d/%d: %s", index, total, image_path.name)

        sample = load_image(image_path)
        placement = resolve(sample.width, sample.height, config)

        document.append(
            Page(
                width_mm=config.page_width_mm,
                height_mm=config.page_height_mm,
                source=image_path,
                pixel_width=sample.width,
                pixel_height=sample.height,
                placement=placement,
                raster=sample.to_png(),
            )
        )

        if on_page_done is not None:
            on_page_done(image_path)

    return document


def _output_mode(output_path: Path) -> int:
    """Permissions for the finished PDF: the existing target's, else umask-based."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_pdf(data: bytes, output_path: Path) -> int:
    """Write *data* to *output_path* atomically.

    The bytes go to a temporary file next to the target, which is renamed
    into place only after it has been written completely.  The temporary
    file is removed on every failure path, interrupts included.

    Returns:
        Number of bytes written.

    Raises:
        SerializationError: If the file cannot be written.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        mode = _output_mode(output_path)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.",
            suffix=".part",
            dir=output_path.parent,
        )
    except OSError as exc:
        raise SerializationError(
            f"Cannot write PDF to {output_path}: {exc}", path=output_path
        ) from exc

    tmp_path = Path(tmp_name)
    written = False
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, output_path)
        written = True
    except OSError as exc:
        raise SerializationError(
            f"Cannot write PDF to {output_path}: {exc}", path=output_path
        ) from exc
    finally:
        if not written:
            tmp_path.unlink(missing_ok=True)

    return len(data)


def assemble_pdf(
    *,
    image_paths: list[Path],
    output_path: Path,
    config: PageConfig,
    on_page_done: Callable[[Path], None] | None = None,
) -> int:
    """Combine images into a single PDF file, one image per page.

    Args:
        image_paths: Ordered list of image file paths.
        output_path: Path to write the output PDF.
        config: Page geometry shared by all pages.
        on_page_done: Called with each image path after its page is added.

    Returns:
        Size of the written PDF in bytes.

    Raises:
        InputError: If *image_paths* is empty.
        PathError: If any image path does not exist.
        DecodeError: If any image cannot be decoded.
        GeometryError: If an image cannot be placed on the page.
        SerializationError: If the PDF cannot be produced or written.
    """
    if not image_paths:
        raise InputError("image_paths must not be empty")

    logger.info("Generating PDF from %d images -> %s", len(image_paths), output_path)

    document = build_document(image_paths, config, on_page_done=on_page_done)
    size = write_pdf(document.finalize(), output_path)

    logger.info("PDF written: %s (%d bytes)", output_path, size)
    return size
