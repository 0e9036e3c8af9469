"""Bias sources for dithering: interleaved gradient noise and Bayer maps.

Both are pure functions of pixel coordinates, so a whole image's worth of
bias can be produced in one vectorised call and any sub-rectangle can be
recomputed independently.

References:
    - Jimenez, "Next Generation Post Processing in Call of Duty:
      Advanced Warfare", SIGGRAPH 2014 (interleaved gradient noise)
    - https://en.wikipedia.org/wiki/Ordered_dithering
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

# Interleaved gradient noise constants, kept in float32 like the shader.
IGN_MAGIC = np.array([0.06711056, 0.00583715, 52.9829189], dtype=np.float32)

BAYER_SIZES = (4, 8)

_BAYER_INDEX = {
    4: [
        [0, 8, 2, 10],
        [12, 4, 14, 6],
        [3, 11, 1, 9],
        [15, 7, 13, 5],
    ],
    8: [
        [0, 32, 8, 40, 2, 34, 10, 42],
        [48, 16, 56, 24, 50, 18, 58, 26],
        [12, 44, 4, 36, 14, 46, 6, 38],
        [60, 28, 52, 20, 62, 30, 54, 22],
        [3, 35, 11, 43, 1, 33, 9, 41],
        [51, 19, 59, 27, 49, 17, 57, 25],
        [15, 47, 7, 39, 13, 45, 5, 37],
        [63, 31, 55, 23, 61, 29, 53, 21],
    ],
}


def _fract(v: np.ndarray) -> np.ndarray:
    return v - np.trunc(v)


def _ign(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    c0, c1, c2 = IGN_MAGIC
    return _fract(c2 * _fract(x * c0 + y * c1))


# -- Interleaved gradient noise ----------------------------------------

def interleaved_gradient_noise(x: int, y: int) -> float:
    """Noise value in [0, 1) for the pixel at (*x*, *y*)."""
    return float(_ign(np.float32(x), np.float32(y)))


def noise_field(width: int, height: int) -> np.ndarray:
    """Evaluate the noise for every pixel of a *width* x *height* image.

    Returns:
        (H, W) float32 - ``field[y, x] == interleaved_gradient_noise(x, y)``.
    """
    xs = np.arange(width, dtype=np.float32)[np.newaxis, :]
    ys = np.arange(height, dtype=np.float32)[:, np.newaxis]
    return _ign(xs, ys).astype(np.float32)


# -- Bayer threshold maps ----------------------------------------------

@lru_cache(maxsize=None)
def bayer_threshold_map(n: int) -> np.ndarray:
    """Normalised n x n Bayer map with values ``index / n**2 - 0.5``.

    The result is cached and read-only; copy it before modifying.

    Raises:
        ValueError: if *n* is not one of :data:`BAYER_SIZES`.
    """
    if n not in _BAYER_INDEX:
        raise ValueError(
            f"Unsupported Bayer matrix size {n}. Choose from: {BAYER_SIZES}"
        )
    m = np.array(_BAYER_INDEX[n], dtype=np.float32)
    m = m * np.float32(1.0 / (n * n)) - np.float32(0.5)
    m.setflags(write=False)
    return m


def bayer_threshold(x: int, y: int, n: int = 8) -> float:
    """Threshold for pixel (*x*, *y*) with the map tiled over the plane."""
    return float(bayer_threshold_map(n)[y % n, x % n])


def tile_threshold_map(n: int, width: int, height: int) -> np.ndarray:
    """Tile the n x n map over a *width* x *height* image -> (H, W) float32."""
    m = bayer_threshold_map(n)
    reps_y = -(-height // n)
    reps_x = -(-width // n)
    return np.tile(m, (reps_y, reps_x))[:height, :width]


def format_threshold_map(m: np.ndarray) -> str:
    """Render a threshold map as aligned rows, one matrix row per line."""
    return "\n".join("  ".join(f"{v:5.3f}" for v in row) for row in m)
