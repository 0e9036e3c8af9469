"""Image decoding, PNG encoding and comparison rendering (Pillow)."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from dither16.errors import DecodeFailure, EncodeFailure

# Pillow mode -> mode with 8-bit samples and the same channel count
_MODE_MAP = {
    "1": "L",
    "L": "L",
    "I": "L",
    "I;16": "L",
    "F": "L",
    "LA": "LA",
    "La": "LA",
    "RGB": "RGB",
    "RGBA": "RGBA",
    "RGBa": "RGBA",
    "PA": "RGBA",
}


def _decoded_mode(img: Image.Image) -> str:
    if img.mode == "P":
        return "RGBA" if "transparency" in img.info else "RGB"
    return _MODE_MAP.get(img.mode, "RGB")


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image, keeping its own channel count.

    Palette images expand to RGB, or RGBA when they carry transparency.

    Returns:
        (H, W, C) uint8 array, C in {1, 2, 3, 4}.

    Raises:
        DecodeFailure: if the file is missing, unreadable or not an image.
    """
    try:
        with Image.open(path) as img:
            img = img.convert(_decoded_mode(img))
            arr = np.array(img, dtype=np.uint8)
    except (
        OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError,
    ) as exc:
        raise DecodeFailure(path, str(exc) or type(exc).__name__) from exc

    if arr.ndim == 2:
        arr = arr[..., np.newaxis]
    return arr


def save_png(rgba: np.ndarray, path: str | Path) -> None:
    """Write an (H, W, 4) uint8 buffer as an RGBA PNG.

    A partially written file is removed before the error propagates.

    Raises:
        EncodeFailure: if the file cannot be written.
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) buffer, got shape {rgba.shape}")
    path = Path(path)
    try:
        Image.fromarray(rgba.astype(np.uint8)).save(path, format="PNG")
    except (OSError, ValueError) as exc:
        if path.is_file():
            path.unlink()
        raise EncodeFailure(path, str(exc) or type(exc).__name__) from exc


def make_comparison_image(
    original: np.ndarray,
    preview: np.ndarray,
    gap: int = 8,
) -> Image.Image:
    """Place source and 16-bit preview side by side on a dark canvas."""
    h, w = preview.shape[:2]
    if original.shape[2] == 3:
        source = Image.fromarray(original).convert("RGBA")
    else:
        source = Image.fromarray(original)
    result = Image.fromarray(preview)

    canvas = Image.new("RGBA", (2 * w + gap, h), (30, 30, 30, 255))
    canvas.paste(source, (0, 0))
    canvas.paste(result, (w + gap, 0))
    return canvas
