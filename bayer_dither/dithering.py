"""Resize-and-quantise engine: colour image in, 1-bit-style grey grid out."""

from __future__ import annotations

import logging
import math

import numpy as np
from PIL import Image

from bayer_dither.bayer import threshold_matrix
from bayer_dither.config import DitherConfig

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (np.float32(0.299), np.float32(0.587), np.float32(0.114))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_target_size(
    original_width: int,
    original_height: int,
    max_side: int,
) -> tuple[int, int]:
    """Compute downscaled (w, h) preserving aspect ratio.

    Images whose longest side already fits within *max_side* keep their
    size; larger ones are scaled so the longest side becomes *max_side*.
    Each side is rounded to the nearest integer (halves away from zero),
    minimum 1.
    """
    scale = min(1.0, max_side / max(original_width, original_height))
    w = max(1, _round_half_up(original_width * scale))
    h = max(1, _round_half_up(original_height * scale))
    return w, h


def resize_to_fit(image: Image.Image, max_side: int) -> Image.Image:
    """Lanczos-downscale *image* so that its longest side fits *max_side*."""
    w, h = compute_target_size(image.width, image.height, max_side)
    if (w, h) == image.size:
        return image
    logger.debug("Resizing %dx%d -> %dx%d", image.width, image.height, w, h)
    return image.resize((w, h), Image.LANCZOS)


def to_luminance(rgb: np.ndarray) -> np.ndarray:
    """Convert (H, W, 3+) uint8 RGB(A) -> (H, W) uint8 luma.

    Weighted sum is done in float32 and truncated, not rounded.
    """
    channels = rgb.astype(np.float32)
    gray = (
        channels[..., 0] * LUMA_WEIGHTS[0]
        + channels[..., 1] * LUMA_WEIGHTS[1]
        + channels[..., 2] * LUMA_WEIGHTS[2]
    )
    return np.clip(gray, 0, 255).astype(np.uint8)


def apply_bayer_dithering(
    gray: np.ndarray,
    thresholds: np.ndarray,
) -> np.ndarray:
    """Ordered dithering against a tiled threshold matrix.

    Args:
        gray:       (H, W) uint8 luma.
        thresholds: (n, n) integer thresholds, tiled across the image so that
            pixel (x, y) is compared with ``thresholds[y % n, x % n]``.

    Returns:
        (H, W) uint8 with every pixel either 0 or 255.
    """
    h, w = gray.shape
    n = thresholds.shape[0]
    rows = np.arange(h) % n
    cols = np.arange(w) % n
    tiled = thresholds[rows[:, np.newaxis], cols[np.newaxis, :]]
    return np.where(gray.astype(np.uint32) > tiled, 255, 0).astype(np.uint8)


def dither_image(
    image: Image.Image,
    config: DitherConfig,
    thresholds: np.ndarray | None = None,
) -> np.ndarray:
    """Downscale, convert to luma and Bayer-dither a decoded image.

    Args:
        image:      Decoded source image (any mode; converted to RGB).
        config:     Run configuration (``max_side``, ``bayer_order``).
        thresholds: Precomputed threshold matrix; built from
            ``config.bayer_order`` when omitted.

    Returns:
        (H, W) uint8 - binary-valued grid ready for lossless encoding.
    """
    if thresholds is None:
        thresholds = threshold_matrix(config.bayer_order)
    if image.mode != "RGB":
        image = image.convert("RGB")
    resized = resize_to_fit(image, config.max_side)
    gray = to_luminance(np.asarray(resized, dtype=np.uint8))
    return apply_bayer_dithering(gray, thresholds)
