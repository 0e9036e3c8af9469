#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py my_photo.png

writes ``my_photo.png.dither.png`` next to the input. Same as:

    python -m dither16.cli my_photo.png
"""

from dither16.cli import app

if __name__ == "__main__":
    app()
