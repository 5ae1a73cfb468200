"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass

from bayer_dither.errors import ConfigurationError

# 256 // order**2 drops to zero past this order
MAX_BAYER_ORDER = 16


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


@dataclass(frozen=True)
class DitherConfig:
    """All tuneable parameters for a dithering run.

    Attributes:
        max_side:       Longest side after downscaling (never upscaled).
        bayer_order:    Side length of the Bayer matrix; power of two, 2..16.
        workers:        Worker threads (None = one per available CPU).
        output_dirname: Name of the directory created next to each source.
    """

    # Image scaling
    max_side: int = 800

    # Dithering
    bayer_order: int = 8

    # Execution
    workers: int | None = None

    # Output
    output_dirname: str = "dithers"

    def __post_init__(self) -> None:
        if self.max_side < 1:
            raise ConfigurationError(
                f"max_side must be a positive integer, got {self.max_side}"
            )
        if not is_power_of_two(self.bayer_order) or self.bayer_order < 2:
            raise ConfigurationError(
                f"Bayer order must be a power of 2 (>= 2), got {self.bayer_order}"
            )
        if self.bayer_order > MAX_BAYER_ORDER:
            raise ConfigurationError(
                f"Bayer order must be at most {MAX_BAYER_ORDER}, got {self.bayer_order}"
            )
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(
                f"workers must be at least 1, got {self.workers}"
            )

    @property
    def pool_size(self) -> int:
        """Number of worker threads to run with."""
        return self.workers or os.cpu_count() or 1
