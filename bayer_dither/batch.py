"""Concurrent per-file pipeline: decode -> dither -> encode, one file per worker."""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from bayer_dither.bayer import threshold_matrix
from bayer_dither.config import DitherConfig
from bayer_dither.discovery import find_image_files
from bayer_dither.dithering import dither_image
from bayer_dither.errors import ConfigurationError, FileProcessingError
from bayer_dither.image_io import load_image, save_dither

logger = logging.getLogger(__name__)


class BatchStatus(enum.Enum):
    NOTHING_TO_DO = "nothing_to_do"
    COMPLETED = "completed"


@dataclass(frozen=True)
class FileResult:
    """Outcome of one file: the written path, or the failure kind and message."""

    source: Path
    output: Path | None = None
    error_kind: str | None = None
    message: str | None = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error_kind is None


@dataclass
class BatchSummary:
    results: list[FileResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failures(self) -> list[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def status(self) -> BatchStatus:
        if not self.results:
            return BatchStatus.NOTHING_TO_DO
        return BatchStatus.COMPLETED


def process_file(
    path: Path,
    config: DitherConfig,
    thresholds: np.ndarray | None = None,
) -> FileResult:
    """Run the full pipeline for one file, never raising.

    Args:
        path:       Source image.
        config:     Run configuration.
        thresholds: Shared, read-only threshold matrix for the run.

    Returns:
        A successful result with the output path, or a failed one tagged
        with the error class name.
    """
    t0 = time.perf_counter()
    try:
        image = load_image(path)
        dithered = dither_image(image, config, thresholds)
        out = save_dither(dithered, path, config.output_dirname)
    except FileProcessingError as exc:
        logger.error("Failed to process %s: %s", path, exc.message)
        return FileResult(
            source=path,
            error_kind=type(exc).__name__,
            message=exc.message,
            elapsed=time.perf_counter() - t0,
        )
    except Exception as exc:
        logger.exception("Unexpected error while processing %s", path)
        return FileResult(
            source=path,
            error_kind="UnexpectedError",
            message=str(exc),
            elapsed=time.perf_counter() - t0,
        )

    return FileResult(source=path, output=out, elapsed=time.perf_counter() - t0)


def iter_results(
    files: Iterable[Path],
    config: DitherConfig,
) -> Iterator[FileResult]:
    """Process *files* on a thread pool, yielding results as they complete."""
    files = list(files)
    if not files:
        return

    thresholds = threshold_matrix(config.bayer_order)
    workers = min(config.pool_size, len(files))
    logger.debug("Processing %d file(s) on %d worker(s)", len(files), workers)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(process_file, path, config, thresholds) for path in files
        ]
        for future in as_completed(futures):
            yield future.result()


def process_batch(
    files: Iterable[Path],
    config: DitherConfig,
) -> BatchSummary:
    """Process every file and collect the per-file outcomes."""
    summary = BatchSummary(results=list(iter_results(files, config)))
    if summary.status is BatchStatus.NOTHING_TO_DO:
        logger.warning("No image files to process")
    else:
        logger.info(
            "Batch complete: %d succeeded, %d failed",
            summary.succeeded, summary.failed,
        )
    return summary


def check_directory(directory: str | Path) -> Path:
    """Return *directory* as a Path, or raise if it is not an existing directory."""
    directory = Path(directory)
    if not directory.exists():
        raise ConfigurationError(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        raise ConfigurationError(f"Not a directory: {directory}")
    return directory


def run_directory(
    directory: str | Path,
    config: DitherConfig | None = None,
    exclude_dirs: Iterable[str] = (),
) -> BatchSummary:
    """Discover images under *directory* and dither all of them.

    Raises:
        ConfigurationError: *directory* is missing or not a directory.
    """
    config = config or DitherConfig()
    directory = check_directory(directory)
    logger.info("Starting image processing in directory: %s", directory)
    files = find_image_files(directory, exclude_dirs=exclude_dirs)
    return process_batch(files, config)
