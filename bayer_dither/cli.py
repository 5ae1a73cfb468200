"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bayer_dither.batch import BatchSummary, check_directory, iter_results
from bayer_dither.bayer import bayer_matrix
from bayer_dither.config import DitherConfig
from bayer_dither.discovery import find_image_files
from bayer_dither.errors import ConfigurationError

app = typer.Typer(
    name="bayer-dither",
    help="Downscale images and turn them into 1-bit Bayer dithers.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
    )


def _config_error(exc: ConfigurationError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(2)


# Defaults come from DitherConfig - single source of truth
_DEFAULTS = DitherConfig()


# -- run command -------------------------------------------------------

@app.command()
def run(
    directory: Path = typer.Argument(..., help="Folder scanned recursively for images"),
    max_side: int = typer.Option(
        _DEFAULTS.max_side, "--max-side", "-m",
        help="Longest side of the output (images are never upscaled)",
    ),
    order: int = typer.Option(
        _DEFAULTS.bayer_order, "--order", "-b",
        help="Bayer matrix size, a power of two (2-16)",
    ),
    workers: int | None = typer.Option(
        _DEFAULTS.workers, "--workers", "-w",
        help="Worker threads (default: one per CPU)",
    ),
    skip_dithers: bool = typer.Option(
        False, "--skip-dithers/--include-dithers",
        help="Do not descend into existing output folders",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Dither every image under DIRECTORY into sibling 'dithers' folders."""
    _setup_logging(verbose)
    logger = logging.getLogger("bayer_dither")

    try:
        cfg = DitherConfig(max_side=max_side, bayer_order=order, workers=workers)
        directory = check_directory(directory)
    except ConfigurationError as exc:
        raise _config_error(exc) from exc

    logger.info("Starting image processing in directory: %s", directory)
    exclude = (cfg.output_dirname,) if skip_dithers else ()
    images = find_image_files(directory, exclude_dirs=exclude)
    if not images:
        console.print(f"\n[yellow]No images found in {escape(str(directory))}/[/yellow]")
        console.print("Nothing to do.\n")
        raise typer.Exit(0)

    console.print(Panel.fit(
        f"[bold]BAYER DITHER[/bold]\n"
        f"Max side: {cfg.max_side}  |  Order: {cfg.bayer_order}\n"
        f"Workers: {min(cfg.pool_size, len(images))}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    t_total = time.perf_counter()
    summary = BatchSummary()
    for result in iter_results(images, cfg):
        summary.results.append(result)
        if result.ok:
            console.print(
                f"  [green]✓[/green] {escape(str(result.output))}  "
                f"[dim]time={result.elapsed:.2f}s[/dim]"
            )
        else:
            console.print(
                f"  [red]✗[/red] {escape(str(result.source))}  "
                f"[dim]{result.error_kind}: {escape(result.message or '')}[/dim]"
            )
    elapsed = time.perf_counter() - t_total

    style = "green" if summary.failed == 0 else "yellow"
    console.print(Panel.fit(
        f"[bold {style}]DONE[/bold {style}] - "
        f"{summary.succeeded} succeeded, {summary.failed} failed  "
        f"[dim]({elapsed:.1f}s)[/dim]",
        border_style=style,
    ))


# -- matrix command ----------------------------------------------------

@app.command()
def matrix(
    order: int = typer.Option(_DEFAULTS.bayer_order, "--order", "-b"),
) -> None:
    """Print the Bayer matrix for ORDER and its grey-level threshold scale."""
    try:
        cfg = DitherConfig(bayer_order=order)
    except ConfigurationError as exc:
        raise _config_error(exc) from exc

    m = bayer_matrix(cfg.bayer_order)
    table = Table(
        title=f"Bayer {cfg.bayer_order}x{cfg.bayer_order}  "
              f"(threshold = value x {256 // (cfg.bayer_order ** 2)})",
        show_header=False,
    )
    for _ in range(cfg.bayer_order):
        table.add_column(justify="right")
    for row in m:
        table.add_row(*(str(int(v)) for v in row))
    console.print(table)


if __name__ == "__main__":
    app()
