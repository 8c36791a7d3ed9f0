"""
DPI normalization and crop planning for a row of monitors.

The least dense monitor is the baseline (scaling factor 1.0). Every other
monitor's slice of the canvas is upscaled by its density relative to that
baseline, then cropped back to its native resolution, shifted by the bezel
gap so the picture lines up across physically separated screens.

Everything here is pure: no image is touched and nothing is mutated.
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Sequence

from monitor_descriptor import Monitor, Rect, Size
from wallpaper_errors import EmptyMonitorSet, InvalidMonitor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropPlan:
    name: str
    scaling_factor: float
    source_crop: Rect
    scaled_size: tuple[int, int]
    post_scale_crop: Rect
    output_size: tuple[int, int]
    carried_bezel_x: int = 0


def normalize(monitors: Sequence[Monitor]) -> tuple[float, list[float]]:
    """
    Return (reference_dpi, factors) where factors[i] = dpi[i] / reference_dpi.

    reference_dpi is the lowest density in the set, so every factor is >= 1.0.
    """
    if not monitors:
        raise EmptyMonitorSet()
    for monitor in monitors:
        if monitor.physical_height <= 0:
            raise InvalidMonitor(f"{monitor.name}: physical height must be positive")
    reference_dpi = min(monitor.dpi for monitor in monitors)
    factors = [monitor.dpi / reference_dpi for monitor in monitors]
    return reference_dpi, factors


def canvas_size(monitors: Sequence[Monitor]) -> Size:
    """Every bezel is counted on both edges of its monitor horizontally."""
    if not monitors:
        raise EmptyMonitorSet()
    width = sum(m.pixel_width + 2 * m.bezel_x for m in monitors)
    height = max(m.pixel_height + m.bezel_y for m in monitors)
    return Size(width, height)


def plan_monitor(monitor: Monitor, factor: float, carried_bezel_x: int) -> CropPlan:
    width, height = monitor.resolution
    scaled_size = (int(width * factor), int(height * factor))
    return CropPlan(
        name=monitor.name,
        scaling_factor=factor,
        source_crop=Rect(monitor.x, monitor.y, width, height),
        scaled_size=scaled_size,
        post_scale_crop=Rect(
            carried_bezel_x + monitor.bezel_x,
            int(monitor.y * factor) + monitor.bezel_y,
            width,
            height,
        ),
        output_size=(width, height),
        carried_bezel_x=carried_bezel_x,
    )


def _fold_step(acc, item):
    carried_bezel_x, plans = acc
    monitor, factor = item
    # Only the immediately preceding monitor's bezel is carried forward,
    # it does not accumulate along the row.
    return monitor.bezel_x, plans + (plan_monitor(monitor, factor, carried_bezel_x),)


def plan(monitors: Sequence[Monitor], factors: Sequence[float]) -> tuple[Size, list[CropPlan]]:
    """
    Compute the shared canvas and one CropPlan per monitor, in input order.

    `monitors` must already be in left-to-right order.
    """
    if not monitors:
        raise EmptyMonitorSet()
    if len(factors) != len(monitors):
        raise ValueError(f"got {len(factors)} scaling factors for {len(monitors)} monitors")

    canvas = canvas_size(monitors)
    _, plans = reduce(_fold_step, zip(monitors, factors), (0, ()))

    for crop in plans:
        logger.debug(
            "%s: factor %.4f source %s scaled %s post-scale %s",
            crop.name, crop.scaling_factor, crop.source_crop.box(),
            crop.scaled_size, crop.post_scale_crop.box(),
        )
    return canvas, list(plans)


def plan_layout(monitors: Sequence[Monitor]) -> tuple[Size, list[CropPlan]]:
    """normalize() followed by plan()."""
    reference_dpi, factors = normalize(monitors)
    logger.debug("Reference density %.4f px/mm", reference_dpi)
    return plan(monitors, factors)
