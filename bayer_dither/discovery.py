"""Recursive discovery of image files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp", ".tiff", ".bmp"}
)


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def _log_walk_error(err: OSError) -> None:
    logger.warning("Skipping unreadable entry %s: %s", err.filename, err.strerror)


def find_image_files(
    root: str | Path,
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """Walk *root* recursively and collect image files.

    Only regular files with a known image extension (case-insensitive) are
    kept; anything that cannot be read during the walk is logged and
    skipped.  Symlinks, to files or directories, are not followed.

    Args:
        root:         Directory to scan.
        exclude_dirs: Directory names pruned from the walk (e.g. previous
            ``dithers`` outputs).

    Returns:
        Matching paths.  The order carries no meaning.
    """
    excluded = frozenset(exclude_dirs)
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        if excluded:
            dirnames[:] = [d for d in dirnames if d not in excluded]
        for name in filenames:
            path = Path(dirpath, name)
            if is_image_file(path) and path.is_file() and not path.is_symlink():
                found.append(path)
    return sorted(found)
