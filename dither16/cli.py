"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from dither16.config import DitherConfig
from dither16.dithering import process_image
from dither16.errors import DitherError, MissingInput
from dither16.image_io import load_image, save_png

app = typer.Typer(
    name="dither16",
    help="Dither an image down to RGB565 / RGBA4444 and write an 8-bit preview.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)

# Defaults come from DitherConfig - single source of truth
_DEFAULTS = DitherConfig()


def _log_handler() -> RichHandler:
    # Log records carry user paths; never parse them as markup.
    return RichHandler(console=err_console, show_path=False, markup=False)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[_log_handler()],
    )


def run(path: Path | None, cfg: DitherConfig = _DEFAULTS) -> Path:
    """Load *path*, dither it and write the preview next to it.

    Returns:
        Path of the written preview PNG.

    Raises:
        DitherError: on any missing input, decode, channel-count or write failure.
    """
    if path is None:
        raise MissingInput()

    logger = logging.getLogger("dither16")
    t0 = time.perf_counter()

    pixels = load_image(path)
    h, w, channels = pixels.shape
    logger.info("Loaded %s: %dx%d, %d channels", path, w, h, channels)

    result = process_image(pixels, strategy=cfg.strategy, bayer_size=cfg.bayer_size)

    out = cfg.output_path_for(path)
    save_png(result.preview, out)
    logger.info("Done in %.2f s", time.perf_counter() - t0)
    return out


@app.command()
def dither(
    path: Path | None = typer.Argument(
        None, help="Image to dither (PNG, JPEG, BMP, TGA, ...)", show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Dither PATH to 16 bits and write PATH.dither.png."""
    _setup_logging(verbose)

    try:
        out = run(path)
    except DitherError as exc:
        err_console.print(
            f"[red]error:[/red] {escape(str(exc))}", soft_wrap=True, highlight=False,
        )
        raise typer.Exit(1) from exc

    console.print(f"Wrote '{out}'", soft_wrap=True, markup=False, highlight=False)


if __name__ == "__main__":
    app()
