"""Dither-then-quantise pipeline from 8888 input to a 16-bit preview.

The dither step works *in place* on a private 4-channel working buffer:
noise (or a Bayer threshold) is added to every channel that the target
layout truncates, then the buffer is packed to 16 bits and unpacked again
for display.  The returned preview is that pack -> unpack round trip, not
the noisy intermediate.

Dispatch is driven by the channel count of the input:

- 4 channels -> RGBA4444
- 3 channels -> expanded to RGBA (alpha 255) -> RGB565
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass

import numpy as np

from dither16.codec import RGB565, RGBA4444, PixelFormat, expand_to_rgba, pack, unpack
from dither16.errors import UnsupportedChannelCount
from dither16.noise import (
    bayer_threshold_map,
    format_threshold_map,
    noise_field,
    tile_threshold_map,
)
from dither16.quantize import (
    INVERTED_NOISE_CHANNEL,
    noise_dither,
    ordered_dither,
    quantization_step,
)

logger = logging.getLogger(__name__)


class DitherStrategy(str, enum.Enum):
    """Where the per-pixel bias comes from."""

    NOISE = "noise"
    ORDERED = "ordered"


@dataclass(frozen=True)
class DitherResult:
    """Output of :func:`process_image`.

    Attributes:
        format:  Packed layout the image went through.
        packed:  (H, W) uint16 - the 16-bit words.
        preview: (H, W, 4) uint8 - the words expanded back to 8888.
    """

    format: PixelFormat
    packed: np.ndarray
    preview: np.ndarray

    @property
    def width(self) -> int:
        return self.preview.shape[1]

    @property
    def height(self) -> int:
        return self.preview.shape[0]


def target_format(channels: int) -> PixelFormat:
    """Packed layout for an input with *channels* samples per pixel."""
    if channels == 4:
        return RGBA4444
    if channels == 3:
        return RGB565
    raise UnsupportedChannelCount(channels)


# -- Noise dithering ---------------------------------------------------

def _dither_channels(rgba: np.ndarray, fmt: PixelFormat) -> np.ndarray:
    h, w = rgba.shape[:2]
    rnd = noise_field(w, h)
    for c, bits in enumerate(fmt.bits):
        noise = 1.0 - rnd if c == INVERTED_NOISE_CHANNEL else rnd
        rgba[..., c] = noise_dither(rgba[..., c], noise, quantization_step(bits))
    return rgba


def dither_rgba4444(rgba: np.ndarray) -> np.ndarray:
    """Add interleaved gradient noise sized for RGBA4444, in place.

    All four channels lose 4 bits, so every channel gets +/- 8 levels of
    noise; green takes the inverted noise.
    """
    return _dither_channels(rgba, RGBA4444)


def dither_rgb565(rgba: np.ndarray) -> np.ndarray:
    """Add interleaved gradient noise sized for RGB565, in place.

    Red and blue get +/- 4 levels, green (inverted) +/- 2.  Alpha is not
    stored by RGB565 and is left untouched.
    """
    return _dither_channels(rgba, RGB565)


# -- Ordered dithering -------------------------------------------------

def dither_ordered(rgba: np.ndarray, n: int = 8) -> np.ndarray:
    """Add a tiled n x n Bayer threshold to all four channels, in place."""
    h, w = rgba.shape[:2]
    thresholds = tile_threshold_map(n, w, h)
    logger.debug("Bayer threshold map (%dx%d):\n%s", n, n,
                 format_threshold_map(bayer_threshold_map(n)))
    rgba[...] = ordered_dither(rgba, thresholds[..., np.newaxis], n)
    return rgba


# -- Whole-image pipeline ----------------------------------------------

def process_image(
    pixels: np.ndarray,
    strategy: DitherStrategy = DitherStrategy.NOISE,
    bayer_size: int = 8,
) -> DitherResult:
    """Dither, pack to 16 bits and unpack a decoded image.

    Args:
        pixels:     (H, W, C) uint8 with C = 3 (RGB) or 4 (RGBA). Not modified.
        strategy:   Bias source for the dither step.
        bayer_size: Matrix size for :attr:`DitherStrategy.ORDERED` (4 or 8).

    Returns:
        :class:`DitherResult` with the packed words and the 8888 preview.

    Raises:
        UnsupportedChannelCount: if C is neither 3 nor 4.
        ValueError: if *pixels* is not a 3-D uint8 array.
    """
    if pixels.ndim != 3:
        raise ValueError(f"Expected an (H, W, C) buffer, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got {pixels.dtype}")

    h, w, channels = pixels.shape
    fmt = target_format(channels)
    strategy = DitherStrategy(strategy)

    # Private working copy; the caller's buffer is never mutated.
    work = expand_to_rgba(pixels) if channels == 3 else pixels.copy()

    logger.info("Dithering %dx%d (%d channels) for %s, strategy=%s",
                w, h, channels, fmt.name, strategy.value)
    t0 = time.perf_counter()
    if strategy is DitherStrategy.ORDERED:
        dither_ordered(work, bayer_size)
    elif fmt is RGBA4444:
        dither_rgba4444(work)
    else:
        dither_rgb565(work)

    packed = pack(work, fmt)
    preview = unpack(packed, fmt)
    logger.info("Packed and reconstructed  (%.3f s)", time.perf_counter() - t0)

    return DitherResult(format=fmt, packed=packed, preview=preview)
