"""
Programmatic entry points for a GUI front end.

get_size() reports the current monitor topology; set_wallpaper() re-queries
it and runs the whole split-and-apply pipeline with the user's pan/zoom.
"""

import json
from typing import Optional, Sequence

from monitor_descriptor import Monitor
from wallpaper_setter import apply_wallpaper
from wallpaper_splitter import GlobalTransform, render_wallpapers
from xrandr_parser import parse_monitors, query_xrandr


def get_size(bezels: str = "") -> list[Monitor]:
    return parse_monitors(query_xrandr(), bezels)


def get_size_json() -> str:
    return json.dumps([monitor.to_dict() for monitor in get_size()])


def set_wallpaper(
    path: str,
    scale: float,
    top: int,
    left: int,
    monitors: Optional[Sequence[Monitor]] = None,
    bezels: str = "",
):
    if monitors is None:
        monitors = get_size(bezels)
    render_wallpapers(
        path,
        monitors,
        apply=apply_wallpaper,
        transform=GlobalTransform(scale=scale, top=top, left=left),
    )
