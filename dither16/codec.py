"""Packing between 8888 RGBA buffers and 16-bit RGB565 / RGBA4444 layouts.

Packing keeps the top bits of each channel (plain right shift, no
rounding).  Unpacking rescales each field back to [0, 255] with the exact
integer form of ``field * 255 / max`` rounded to nearest::

    (field * 255 + max // 2) // max

so the reconstruction has no systematic bias towards dark values.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PixelFormat:
    """A packed 16-bit layout.

    Attributes:
        name:   Display name, e.g. ``"RGB565"``.
        bits:   Bit width per stored channel, in R, G, B(, A) order.
        shifts: Left shift of each stored channel inside the 16-bit word.
    """

    name: str
    bits: tuple[int, ...]
    shifts: tuple[int, ...]

    @property
    def has_alpha(self) -> bool:
        return len(self.bits) == 4

    @property
    def max_values(self) -> tuple[int, ...]:
        return tuple((1 << b) - 1 for b in self.bits)


RGB565 = PixelFormat("RGB565", bits=(5, 6, 5), shifts=(11, 5, 0))
RGBA4444 = PixelFormat("RGBA4444", bits=(4, 4, 4, 4), shifts=(12, 8, 4, 0))

OPAQUE = 255


def _check_rgba(rgba: np.ndarray) -> None:
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) buffer, got shape {rgba.shape}")
    if rgba.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got {rgba.dtype}")


def expand_to_rgba(rgb: np.ndarray) -> np.ndarray:
    """(H, W, 3) uint8 -> new (H, W, 4) uint8 with alpha = 255."""
    h, w = rgb.shape[:2]
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    rgba[..., :3] = rgb
    rgba[..., 3] = OPAQUE
    return rgba


# -- Generic layout-driven codec ---------------------------------------

def pack(rgba: np.ndarray, fmt: PixelFormat) -> np.ndarray:
    """Pack an (H, W, 4) uint8 buffer into (H, W) uint16 words.

    Channels beyond those stored by *fmt* (alpha for RGB565) are dropped.
    """
    _check_rgba(rgba)
    words = np.zeros(rgba.shape[:2], dtype=np.uint16)
    for c, (bits, shift) in enumerate(zip(fmt.bits, fmt.shifts)):
        field = rgba[..., c].astype(np.uint16) >> (8 - bits)
        words |= field << shift
    return words


def unpack(packed: np.ndarray, fmt: PixelFormat) -> np.ndarray:
    """Expand (H, W) uint16 words back to (H, W, 4) uint8.

    Formats without alpha reconstruct a fully opaque alpha channel.
    """
    if packed.ndim != 2:
        raise ValueError(f"Expected an (H, W) buffer, got shape {packed.shape}")
    words = packed.astype(np.uint32)
    rgba = np.full(packed.shape + (4,), OPAQUE, dtype=np.uint8)
    for c, (shift, max_v) in enumerate(zip(fmt.shifts, fmt.max_values)):
        field = (words >> shift) & max_v
        rgba[..., c] = (field * 255 + max_v // 2) // max_v
    return rgba


# -- Named conversions -------------------------------------------------

def pack_rgb565(rgba: np.ndarray) -> np.ndarray:
    return pack(rgba, RGB565)


def unpack_rgb565(packed: np.ndarray) -> np.ndarray:
    return unpack(packed, RGB565)


def pack_rgba4444(rgba: np.ndarray) -> np.ndarray:
    return pack(rgba, RGBA4444)


def unpack_rgba4444(packed: np.ndarray) -> np.ndarray:
    return unpack(packed, RGBA4444)


# -- Raw serialisation -------------------------------------------------

def to_bytes(packed: np.ndarray) -> bytes:
    """Serialise packed words as little-endian 16-bit values, row-major."""
    return packed.astype("<u2").tobytes()


def from_bytes(data: bytes, width: int, height: int) -> np.ndarray:
    """Inverse of :func:`to_bytes` -> (H, W) uint16."""
    expected = width * height * 2
    if len(data) != expected:
        raise ValueError(
            f"Expected {expected} bytes for {width}x{height}, got {len(data)}"
        )
    return np.frombuffer(data, dtype="<u2").reshape(height, width).astype(np.uint16)
