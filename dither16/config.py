"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dither16.dithering import DitherStrategy


@dataclass(frozen=True)
class DitherConfig:
    """All tuneable parameters for a dither run.

    Attributes:
        strategy:      Bias source - interleaved gradient noise or Bayer.
        bayer_size:    Bayer matrix size (4 or 8), used by the ordered strategy.
        output_suffix: Appended to the full input path to name the preview.
    """

    strategy: DitherStrategy = DitherStrategy.NOISE
    bayer_size: int = 8
    output_suffix: str = ".dither.png"

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".png", ".jpg", ".jpeg", ".bmp", ".tga", ".gif", ".tiff", ".tif", ".webp"}
    )

    def output_path_for(self, input_path: str | Path) -> Path:
        """``photo.png`` -> ``photo.png.dither.png`` (suffix appended, not swapped)."""
        return Path(f"{input_path}{self.output_suffix}")
