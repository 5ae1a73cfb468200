"""
Bayer Dither
============

Walk a directory tree, downscale every image found and reduce it to a
black-and-white ordered (Bayer) dither, written next to the source in a
``dithers/`` folder.  Files are processed concurrently and fail
independently.
"""

__version__ = "1.0.0"

from bayer_dither.batch import (
    BatchStatus,
    BatchSummary,
    FileResult,
    process_batch,
    process_file,
    run_directory,
)
from bayer_dither.bayer import bayer_matrix, generate_bayer_matrix, threshold_matrix
from bayer_dither.config import DitherConfig
from bayer_dither.discovery import find_image_files
from bayer_dither.dithering import (
    apply_bayer_dithering,
    compute_target_size,
    dither_image,
    to_luminance,
)
from bayer_dither.errors import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    FileProcessingError,
    OutputDirectoryError,
)
from bayer_dither.image_io import load_image, save_dither

__all__ = [
    "BatchStatus",
    "BatchSummary",
    "ConfigurationError",
    "DecodeError",
    "DitherConfig",
    "EncodeError",
    "FileProcessingError",
    "FileResult",
    "OutputDirectoryError",
    "apply_bayer_dithering",
    "bayer_matrix",
    "compute_target_size",
    "dither_image",
    "find_image_files",
    "generate_bayer_matrix",
    "load_image",
    "process_batch",
    "process_file",
    "run_directory",
    "save_dither",
    "threshold_matrix",
    "to_luminance",
]
