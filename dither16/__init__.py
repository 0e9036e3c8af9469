"""
dither16
========

Reduce 8-bit-per-channel images to packed 16-bit pixels without visible
banding, then rebuild an 8-bit preview of the result.

- **RGBA4444** for four-channel input
- **RGB565** for three-channel input (alpha synthesised as opaque)

The dither bias comes from interleaved gradient noise by default, or
from a tiled Bayer matrix.
"""

__version__ = "1.0.0"

from dither16.codec import (
    RGB565,
    RGBA4444,
    PixelFormat,
    expand_to_rgba,
    pack_rgb565,
    pack_rgba4444,
    unpack_rgb565,
    unpack_rgba4444,
)
from dither16.config import DitherConfig
from dither16.dithering import DitherResult, DitherStrategy, process_image
from dither16.errors import (
    DecodeFailure,
    DitherError,
    EncodeFailure,
    MissingInput,
    UnsupportedChannelCount,
)
from dither16.image_io import load_image, save_png
from dither16.noise import bayer_threshold_map, interleaved_gradient_noise

__all__ = [
    "RGB565",
    "RGBA4444",
    "DecodeFailure",
    "DitherConfig",
    "DitherError",
    "DitherResult",
    "DitherStrategy",
    "EncodeFailure",
    "MissingInput",
    "PixelFormat",
    "UnsupportedChannelCount",
    "bayer_threshold_map",
    "expand_to_rgba",
    "interleaved_gradient_noise",
    "load_image",
    "pack_rgb565",
    "pack_rgba4444",
    "process_image",
    "save_png",
    "unpack_rgb565",
    "unpack_rgba4444",
]
