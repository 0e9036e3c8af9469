"""Per-channel bias application ahead of bit-depth truncation.

A channel reduced from 8 to *b* bits loses ``256 >> b`` levels per output
step.  Perturbing the 8-bit value by up to half a step before the
truncation turns the rounding error into spatial noise instead of a hard
band edge.  Every result is saturated to [0, 255].
"""

from __future__ import annotations

import numpy as np

# Channel that takes ``1 - noise`` instead of ``noise`` in the noise paths
# (green, after Mikkel Gjoel's shadertoy MslGR8). Adjacent channels then
# carry opposite error patterns and do not band together.
INVERTED_NOISE_CHANNEL = 1


def quantization_step(bits: int) -> int:
    """Size of one *bits*-bit level in 8-bit units (16, 8, 4 for 4, 5, 6)."""
    if not 1 <= bits <= 8:
        raise ValueError(f"bits must be in 1..8, got {bits}")
    return 256 >> bits


# -- Scalar forms ------------------------------------------------------

def ordered_dither_value(v: int, bias: float, n: int) -> int:
    """``round(clamp(v + bias * 255 / n, 0, 255))`` for a Bayer *bias*."""
    out = min(max(v + bias * (255.0 / n), 0.0), 255.0)
    return int(np.rint(out))


def noise_dither_value(v: int, noise: float, step: int) -> int:
    """``clamp(v + round(noise * step - step / 2), 0, 255)``."""
    offset = int(np.rint(noise * step - step / 2))
    return min(max(v + offset, 0), 255)


# -- Array forms -------------------------------------------------------

def ordered_dither(values: np.ndarray, bias: np.ndarray, n: int) -> np.ndarray:
    """Element-wise :func:`ordered_dither_value`; *bias* broadcasts."""
    out = values.astype(np.float32) + bias * np.float32(255.0 / n)
    np.clip(out, 0, 255, out=out)
    return np.rint(out).astype(np.uint8)


def noise_dither(values: np.ndarray, noise: np.ndarray, step: int) -> np.ndarray:
    """Element-wise :func:`noise_dither_value`; *noise* broadcasts."""
    offset = np.rint(noise * np.float32(step) - np.float32(step / 2))
    out = values.astype(np.int16) + offset.astype(np.int16)
    return np.clip(out, 0, 255).astype(np.uint8)
