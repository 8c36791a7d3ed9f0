"""
Split one source image into per-monitor wallpapers.

The source is resampled to the shared canvas, then for every monitor, in
order: crop its region, upscale it by its DPI scaling factor, crop the
bezel-compensated slice back to native resolution.

Each output is written to storage scoped to the operation and handed to the
wallpaper utility straight away, so a failure part-way through leaves the
earlier monitors already updated.
"""

import contextlib
import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from PIL import Image, ImageOps

from dpi_layout import CropPlan, plan_layout
from monitor_descriptor import Monitor, Rect, Size
from wallpaper_errors import CropOutOfBounds, ImageDecodeFailure, InvalidTransform, StorageFailure

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "PNG"
OUTPUT_SUFFIX = ".png"
TEMP_PREFIX = "spanned-wallpaper-"

ApplyFn = Callable[[str, Path], None]


@dataclass(frozen=True)
class GlobalTransform:
    """User pan/zoom applied to the source before any per-monitor work."""
    scale: float = 1.0
    top: int = 0
    left: int = 0

    def __post_init__(self):
        if not self.scale > 0:
            raise InvalidTransform(f"scale must be positive (got {self.scale})")
        if self.top < 0 or self.left < 0:
            raise InvalidTransform(f"offset must not be negative (got top={self.top}, left={self.left})")


def resize_to_fill(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Scale to cover `size` keeping aspect ratio, then take the centered crop."""
    if image.size == tuple(size):
        return image
    return ImageOps.fit(image, size, method=Image.Resampling.LANCZOS)


def crop(image: Image.Image, rect: Rect) -> Image.Image:
    """
    Crop `rect` out of `image`.

    The origin must lie inside the image. Any part of the rectangle that
    overhangs the right or bottom edge comes out black.
    """
    width, height = image.size
    if rect.x >= width or rect.y >= height:
        raise CropOutOfBounds(
            f"crop {rect.box()} starts outside the {width}x{height} image"
        )
    return image.crop(rect.box())


def decode_image(path) -> Image.Image:
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGB")
    except (OSError, Image.DecompressionBombError) as exc:
        raise ImageDecodeFailure(f"cannot decode {path}: {exc}") from exc


def prepare_canvas(image: Image.Image, canvas: Size, transform: Optional[GlobalTransform] = None) -> Image.Image:
    """Resample the source to the canvas, honouring the optional pan/zoom."""
    if transform is None:
        return resize_to_fill(image, (canvas.width, canvas.height))

    aspect_ratio = image.width / image.height
    if canvas.height > canvas.width:
        new_height = canvas.height * transform.scale
        new_size = (int(new_height * aspect_ratio), int(new_height))
    else:
        new_width = canvas.width * transform.scale
        new_size = (int(new_width), int(new_width / aspect_ratio))
    if new_size[0] < 1 or new_size[1] < 1:
        raise InvalidTransform(f"scale {transform.scale} shrinks the image to nothing")

    logger.debug("Global transform: resize to %s, offset top=%d left=%d", new_size, transform.top, transform.left)
    scaled = resize_to_fill(image, new_size)
    return crop(scaled, Rect(transform.left, transform.top, canvas.width, canvas.height))


def composite_monitor(canvas_image: Image.Image, crop_plan: CropPlan) -> Image.Image:
    region = crop(canvas_image, crop_plan.source_crop)
    scaled = resize_to_fill(region, crop_plan.scaled_size)
    return crop(scaled, crop_plan.post_scale_crop)


def iter_composite(canvas_image: Image.Image, crops: Sequence[CropPlan]) -> Iterator[tuple[str, Image.Image]]:
    for crop_plan in crops:
        logger.info(
            "%s { height: %d, scaling_factor: %s }",
            crop_plan.name, crop_plan.output_size[1], crop_plan.scaling_factor,
        )
        yield crop_plan.name, composite_monitor(canvas_image, crop_plan)


def composite(
    source_image: Image.Image,
    canvas: Size,
    crops: Sequence[CropPlan],
    transform: Optional[GlobalTransform] = None,
) -> list[tuple[str, Image.Image]]:
    """Run every crop plan against the source, returning (name, image) in plan order."""
    canvas_image = prepare_canvas(source_image, canvas, transform)
    return list(iter_composite(canvas_image, crops))


def save_output(image: Image.Image, directory: Path, name: str) -> Path:
    path = directory / f"{name}{OUTPUT_SUFFIX}"
    try:
        image.save(path, format=OUTPUT_FORMAT)
    except OSError as exc:
        raise StorageFailure(f"cannot write {path}: {exc}") from exc
    return path


@contextlib.contextmanager
def output_storage(output_dir=None) -> Iterator[Path]:
    """A fresh temporary directory, or `output_dir` (created, and kept) when given."""
    if output_dir is not None:
        directory = Path(output_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFailure(f"cannot create {directory}: {exc}") from exc
        yield directory
        return
    try:
        tmp = tempfile.TemporaryDirectory(prefix=TEMP_PREFIX)
    except OSError as exc:
        raise StorageFailure(f"cannot create temporary directory: {exc}") from exc
    with tmp as name:
        yield Path(name)


def render_wallpapers(
    image_path,
    monitors: Sequence[Monitor],
    apply: Optional[ApplyFn] = None,
    transform: Optional[GlobalTransform] = None,
    output_dir=None,
) -> list[Path]:
    """
    Plan, composite, save and apply one wallpaper per monitor, in order.

    Planning happens before the image is opened, so an empty or invalid
    monitor set fails without any decoding. Returns the written paths; they
    only outlive the call when `output_dir` is given.
    """
    canvas, crops = plan_layout(monitors)
    logger.info("Canvas %dx%d for %d monitor(s)", canvas.width, canvas.height, len(crops))

    source = decode_image(image_path)
    canvas_image = prepare_canvas(source, canvas, transform)

    written = []
    with output_storage(output_dir) as directory:
        for name, image in iter_composite(canvas_image, crops):
            path = save_output(image, directory, name)
            written.append(path)
            if apply is not None:
                apply(name, path)
    return written
