"""
Report how a source image measures up against the shared canvas.

Only the image header is read. A source smaller than the canvas gets
upscaled before any per-monitor scaling, so the printout flags it.
"""

import logging
from pathlib import Path

from PIL import Image

from monitor_descriptor import Size
from wallpaper_errors import ImageDecodeFailure

logger = logging.getLogger(__name__)


def read_source_size(path) -> tuple[int, int]:
    try:
        with Image.open(path) as img:
            return img.size
    except (OSError, Image.DecompressionBombError) as exc:
        raise ImageDecodeFailure(f"cannot decode {path}: {exc}") from exc


def source_upscale(source_size: tuple[int, int], canvas: Size, transform=None) -> float:
    """
    Factor the source is resized by to produce the canvas.

    Without a transform the source is scaled to cover the canvas; with one,
    the longer canvas side times the user's zoom drives the resize.
    """
    width, height = source_size
    if transform is None:
        return max(canvas.width / width, canvas.height / height)
    if canvas.height > canvas.width:
        return canvas.height * transform.scale / height
    return canvas.width * transform.scale / width


def print_source_info(path, canvas: Size, transform=None) -> float:
    size = read_source_size(path)
    factor = source_upscale(size, canvas, transform)
    print(f"Source: {Path(path).name}  {size[0]}x{size[1]}")
    print(f"Canvas: {canvas.width}x{canvas.height}  (source resized x{factor:.2f})")
    if factor > 1:
        print(f"  Warning: source is upscaled x{factor:.2f}, expect a soft result")
        logger.warning("Source %s (%dx%d) upscaled x%.2f to fill the canvas", path, size[0], size[1], factor)
    return factor
