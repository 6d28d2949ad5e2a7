"""Command-line interface for pdf-converter."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TimeRemainingColumn,
)

from . import ConversionResult, _folder_stem, _resolve_pdf_path
from .assembler import assemble_pdf
from .config import DEFAULT_CONFIG, PageConfig
from .errors import ConfigError, PdfConverterError
from .sources import collect_image_files, resolve_sources


def _format_size(num_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    value = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(value) < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-converter",
        description=(
            "Combine images (JPG, PNG, GIF, BMP, WebP) into a single PDF,"
            " one image per page, scaled and centered within the margins."
        ),
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help=(
            "A folder of images (converted in file name order) or one or"
            " more image files (converted in the order given)"
        ),
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help=(
            "Output path: a .pdf file path, a directory, or omit for"
            " {name}.pdf in CWD"
        ),
    )
    parser.add_argument(
        "--page-width",
        type=float,
        default=DEFAULT_CONFIG.page_width_mm,
        metavar="MM",
        help="Page width in millimetres (default: %(default)s)",
    )
    parser.add_argument(
        "--page-height",
        type=float,
        default=DEFAULT_CONFIG.page_height_mm,
        metavar="MM",
        help="Page height in millimetres (default: %(default)s)",
    )
    parser.add_argument(
        "--margin",
        type=float,
        default=DEFAULT_CONFIG.margin_mm,
        metavar="MM",
        help="Margin on every side in millimetres (default: %(default)s)",
    )
    parser.add_argument(
        "--dpi",
        type=float,
        default=DEFAULT_CONFIG.dpi,
        help="Pixel density assumed for every image (default: %(default)s)",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_CONFIG.title,
        help="PDF document title (default: %(default)r)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Log per-image placement details",
    )
    return parser


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _config_from_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> PageConfig:
    try:
        return PageConfig(
            page_width_mm=args.page_width,
            page_height_mm=args.page_height,
            margin_mm=args.margin,
            dpi=args.dpi,
            title=args.title,
        )
    except ConfigError as exc:
        parser.error(str(exc))


def _resolve_inputs(
    parser: argparse.ArgumentParser, inputs: list[Path]
) -> tuple[list[Path], str | None]:
    """Return the ordered images and the default output file stem."""
    directories = [p for p in inputs if p.is_dir()]
    if directories:
        if len(inputs) > 1:
            parser.error("a folder must be the only input")
        folder = directories[0]
        return collect_image_files(folder), _folder_stem(folder)

    image_paths = resolve_sources(inputs)
    stem = image_paths[0].stem if len(image_paths) == 1 else None
    return image_paths, stem


def _run(
    *,
    console: Console,
    image_paths: list[Path],
    pdf_path: Path,
    config: PageConfig,
) -> ConversionResult:
    """Assemble the PDF with a rich progress bar."""
    progress = Progress(
        SpinnerColumn(),
        "[progress.description]{task.description}",
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    )
    with progress:
        task_id = progress.add_task(
            description="Adding pages",
            total=len(image_paths),
        )
        size = assemble_pdf(
            image_paths=image_paths,
            output_path=pdf_path,
            config=config,
            on_page_done=lambda _path: progress.advance(task_id=task_id),
        )

    return ConversionResult(
        output_path=pdf_path,
        page_count=len(image_paths),
        total_bytes=size,
        image_paths=image_paths,
    )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``pdf-converter`` CLI command."""
    console = Console()
    err_console = Console(stderr=True)
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(verbose=args.verbose)
    config = _config_from_args(parser, args)
    start_time = time.monotonic()

    try:
        config.printable_area()
        image_paths, stem = _resolve_inputs(parser, args.inputs)
        pdf_path = _resolve_pdf_path(output=args.output, stem=stem or config.title)

        console.print(f"Found {len(image_paths)} images")

        result = _run(
            console=console,
            image_paths=image_paths,
            pdf_path=pdf_path,
            config=config,
        )
    except PdfConverterError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[dim]Interrupted.[/dim]")
        sys.exit(130)

    elapsed = time.monotonic() - start_time

    summary_lines = [
        f"[bold]Pages:[/bold] {result.page_count}",
        f"[bold]Page size:[/bold] {config.page_width_mm:g} x {config.page_height_mm:g} mm"
        f" (margin {config.margin_mm:g} mm, {config.dpi:g} DPI)",
        f"[bold]PDF size:[/bold] {_format_size(result.total_bytes)}",
        f"[bold]Output:[/bold] {result.output_path}",
    ]

    console.print(Panel(
        "\n".join(summary_lines),
        title=f"[bold green]Done in {elapsed:.1f}s[/bold green]",
        border_style="green",
    ))
