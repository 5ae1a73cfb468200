"""Image loading and saving of dithered results."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from bayer_dither.errors import DecodeError, EncodeError, OutputDirectoryError

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "PNG"


def _to_8bit(img: Image.Image) -> Image.Image:
    """Scale 16-bit integer greyscale (``I;16*`` and ``I`` modes) down to ``L``.

    ``convert("RGB")`` would clip these values at 255 instead of scaling.
    """
    if img.mode == "I" or img.mode.startswith("I;16"):
        arr = np.asarray(img, dtype=np.int64) >> 8
        return Image.fromarray(np.clip(arr, 0, 255).astype(np.uint8))
    return img


def load_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image as RGB.

    Only the first frame of animated formats is used.  16-bit greyscale
    samples are reduced to their high byte.

    Raises:
        DecodeError: the file is missing, unreadable, or not a valid image.
    """
    try:
        with Image.open(path) as img:
            img.load()
            return _to_8bit(img).convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, f"Failed to open image ({exc})") from exc


def output_path_for(source: str | Path, dirname: str = "dithers") -> Path:
    """``D/name.ext`` -> ``D/<dirname>/name.ext``."""
    source = Path(source)
    return source.parent / dirname / source.name


def save_dither(
    array: np.ndarray,
    source: str | Path,
    dirname: str = "dithers",
) -> Path:
    """Write a (H, W) uint8 grid next to *source* as a greyscale PNG.

    The file keeps the source's name (extension included) but is always
    PNG-encoded.  The output directory is created if missing; another
    worker creating it first is fine.

    Returns:
        Path of the written file.
    """
    out = output_path_for(source, dirname)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(
            out.parent, f"Failed to create directory ({exc})",
        ) from exc

    try:
        Image.fromarray(array.astype(np.uint8)).save(out, format=OUTPUT_FORMAT)
    except (OSError, ValueError) as exc:
        raise EncodeError(out, f"Failed to save image ({exc})") from exc

    logger.info("Image saved to %s", out)
    return out
