#!/usr/bin/env python3
"""
Span one image across every connected monitor, compensating for differing
pixel density and for the bezel gaps between screens.

Monitors are read from `xrandr --query`, left to right in the order xrandr
lists them. Each monitor gets its own slice, written as <monitor>.png and
applied with `xwallpaper --output <monitor> --maximize`.

Usage:
  python set_spanned_wallpaper.py -f photo.jpg
  python set_spanned_wallpaper.py -f photo.jpg -b "5,10;0,0"   # bezels, left to right
  python set_spanned_wallpaper.py -f photo.jpg --scale 1.2 --top 40 --left 100
  python set_spanned_wallpaper.py -f photo.jpg --output-dir ./slices --no-apply
  python set_spanned_wallpaper.py -f photo.jpg --dry-run       # show the plan only
"""

import argparse
import logging
import sys
from pathlib import Path

from dpi_layout import normalize, plan
from image_info import print_source_info
from logging_config import setup_logging
from wallpaper_errors import WallpaperError
from wallpaper_setter import WALLPAPER_TOOL, make_applier
from wallpaper_splitter import GlobalTransform, render_wallpapers
from xrandr_parser import parse_monitors, query_xrandr


def read_descriptor_lines(xrandr_file) -> list[str]:
    if xrandr_file is None:
        return query_xrandr()
    return Path(xrandr_file).read_text().splitlines()


def print_plan(monitors, reference_dpi, canvas, crops):
    print(f"Reference density: {reference_dpi:.4f} px/mm")
    print(f"Canvas: {canvas.width}x{canvas.height}")
    for monitor, crop_plan in zip(monitors, crops):
        print(f"\n{monitor}")
        print(f"  scaling factor:  {crop_plan.scaling_factor:.4f}")
        print(f"  source crop:     {crop_plan.source_crop.box()}")
        print(f"  scaled size:     {crop_plan.scaled_size[0]}x{crop_plan.scaled_size[1]}")
        print(f"  post-scale crop: {crop_plan.post_scale_crop.box()}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Split an image across all connected monitors and set it as wallpaper"
    )
    parser.add_argument(
        "-f", "--file-path", required=True,
        help="Source image",
    )
    parser.add_argument(
        "-b", "--bezels", default="",
        help='Bezels as "x,y;x,y;..." in monitor order, left to right (default: none)',
    )
    parser.add_argument(
        "--scale", type=float,
        help="Zoom the source relative to the canvas before splitting",
    )
    parser.add_argument(
        "--top", type=int,
        help="Vertical offset into the zoomed source (with --scale)",
    )
    parser.add_argument(
        "--left", type=int,
        help="Horizontal offset into the zoomed source (with --scale)",
    )
    parser.add_argument(
        "--output-dir",
        help="Keep the per-monitor images in this directory (default: temporary)",
    )
    parser.add_argument(
        "--xrandr-file",
        help="Read monitor descriptors from a saved `xrandr --query` output instead",
    )
    parser.add_argument(
        "--tool", default=WALLPAPER_TOOL,
        help=f"Wallpaper utility to invoke per monitor (default: {WALLPAPER_TOOL})",
    )
    parser.add_argument(
        "--no-apply", action="store_true",
        help="Write the images but do not set them as wallpaper",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show monitors and crop plans without touching the image",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write the log to this file",
    )
    args = parser.parse_args(argv)
    if args.scale is None and (args.top is not None or args.left is not None):
        parser.error("--top/--left need --scale")

    try:
        setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
        monitors = parse_monitors(read_descriptor_lines(args.xrandr_file), args.bezels)
        reference_dpi, factors = normalize(monitors)
        canvas, crops = plan(monitors, factors)

        if args.dry_run:
            print_plan(monitors, reference_dpi, canvas, crops)
            print("\n(dry run — nothing composited or applied)")
            return 0

        transform = None
        if args.scale is not None:
            transform = GlobalTransform(scale=args.scale, top=args.top or 0, left=args.left or 0)

        print_source_info(args.file_path, canvas, transform)
        apply = None if args.no_apply else make_applier(args.tool)
        written = render_wallpapers(
            args.file_path,
            monitors,
            apply=apply,
            transform=transform,
            output_dir=args.output_dir,
        )
    except WallpaperError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"\nSplit across {len(written)} monitor(s) ({canvas.width}x{canvas.height} canvas)")
    if args.output_dir:
        for path in written:
            print(f"  {path}")
    if apply is not None:
        print("Applied.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
