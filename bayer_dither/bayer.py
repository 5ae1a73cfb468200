"""Ordered-dither (Bayer) threshold matrices.

The matrix is grown by repeated doubling: every value ``v`` in the current
``size x size`` block spawns four values in the ``2*size`` block,

    top-left     4v + 1      top-right     4v + 3
    bottom-left  4v + 2      bottom-right  4v

so that threshold ranks stay evenly spread at every scale.  Values are
shifted by one at the end, giving ``1 .. order**2``.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np


def generate_bayer_matrix(order: int) -> np.ndarray:
    """Build a fresh ``order x order`` Bayer matrix.

    Args:
        order: Matrix side length; must be a power of two.

    Returns:
        (order, order) uint32 array holding every integer in
        ``[1, order**2]`` exactly once.
    """
    assert order > 0 and order & (order - 1) == 0, "Bayer order must be a power of 2"

    matrix = np.zeros((order, order), dtype=np.uint32)
    size = 1
    while size < order:
        v = matrix[:size, :size].copy()
        matrix[:size, :size] = 4 * v + 1
        matrix[:size, size:2 * size] = 4 * v + 3
        matrix[size:2 * size, :size] = 4 * v + 2
        matrix[size:2 * size, size:2 * size] = 4 * v
        size *= 2

    matrix += 1
    return matrix


@lru_cache(maxsize=None)
def bayer_matrix(order: int) -> np.ndarray:
    """Cached, read-only Bayer matrix, safe to share between threads."""
    matrix = generate_bayer_matrix(order)
    matrix.setflags(write=False)
    return matrix


def threshold_matrix(order: int) -> np.ndarray:
    """Bayer matrix scaled onto the 0-255 grey range.

    The scale factor is ``256 // order**2`` (integer division), which is
    exact for every power-of-two order up to 16.
    """
    scale = 256 // (order * order)
    thresholds = bayer_matrix(order) * np.uint32(scale)
    thresholds.setflags(write=False)
    return thresholds
