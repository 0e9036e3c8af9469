"""Error kinds raised by the dithering pipeline and its I/O collaborators."""

from __future__ import annotations

from pathlib import Path


class DitherError(Exception):
    """Base class for every unrecoverable failure of a dither run."""


class MissingInput(DitherError):
    def __init__(self) -> None:
        super().__init__("You must supply an image path")


class DecodeFailure(DitherError):
    """The input file could not be read or decoded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load '{path}': {reason}")


class UnsupportedChannelCount(DitherError, ValueError):
    """Only 3 (RGB) and 4 (RGBA) channel buffers can be dithered."""

    def __init__(self, channels: int) -> None:
        self.channels = channels
        super().__init__(
            f"Unsupported channel count {channels} (expected 3 or 4)"
        )


class EncodeFailure(DitherError):
    """The preview PNG could not be written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")
