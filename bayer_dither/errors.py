"""Exception hierarchy for dithering runs."""

from __future__ import annotations

from pathlib import Path


class DitherError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(DitherError, ValueError):
    """Invalid run configuration; raised before any file is touched."""


class FileProcessingError(DitherError):
    """A single file could not be processed.

    Never fatal to a batch: the orchestrator records it against ``path``
    and moves on to the next file.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"{message}: {self.path}")


class DecodeError(FileProcessingError):
    """The file could not be read or parsed as an image."""


class OutputDirectoryError(FileProcessingError):
    """The ``dithers`` directory next to the file could not be created."""


class EncodeError(FileProcessingError):
    """The dithered image could not be encoded or written."""
