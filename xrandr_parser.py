"""
Turn `xrandr --query` output and a bezel string into Monitor descriptors.

A connected monitor line looks like:

  DP-1 connected primary 2560x1440+1920+0 (normal left inverted right x axis y axis) 597mm x 336mm

The bezel string lists one "bezel_x,bezel_y" entry per monitor, separated by
";", in the same left-to-right order as the monitors:

  "5,10;0,0"
"""

import logging
import re
import subprocess
from typing import Iterable

from monitor_descriptor import Monitor
from wallpaper_errors import ExternalToolFailure, InvalidMonitor, MalformedBezelSpec, MalformedDescriptor

logger = logging.getLogger(__name__)

XRANDR_COMMAND = ["xrandr", "--query"]
CONNECTED_TOKEN = " connected "

# <w>x<h>+<x>+<y>
MODELINE_RE = re.compile(r"^(\d+)x(\d+)\+(\d+)\+(\d+)$")
# ASCII digits only
UINT_RE = re.compile(r"[0-9]+")


def query_xrandr() -> list[str]:
    """Run xrandr and return its output lines."""
    try:
        result = subprocess.run(XRANDR_COMMAND, capture_output=True, text=True, check=True)
    except FileNotFoundError as exc:
        raise ExternalToolFailure(f"{XRANDR_COMMAND[0]} is not installed") from exc
    except subprocess.CalledProcessError as exc:
        raise ExternalToolFailure(
            f"{' '.join(XRANDR_COMMAND)} exited with status {exc.returncode}: {exc.stderr}".rstrip()
        ) from exc
    return result.stdout.splitlines()


def parse_bezel_entry(entry: str) -> tuple[int, int]:
    parts = entry.split(",")
    if len(parts) < 2:
        return 0, 0
    values = []
    for part in parts[:2]:
        token = part.strip()
        if not UINT_RE.fullmatch(token):
            raise MalformedBezelSpec(f"expected numeric value in bezel entry {entry!r}, got {part!r}")
        values.append(int(token))
    return values[0], values[1]


def parse_bezels(spec: str, count: int) -> list[tuple[int, int]]:
    """
    Split a bezel specification into `count` (bezel_x, bezel_y) pairs.

    Missing entries, and entries with fewer than two values, default to (0, 0).
    Values beyond the second in an entry are ignored.
    """
    entries = spec.split(";") if spec else []
    bezels = []
    for i in range(count):
        if i < len(entries):
            bezels.append(parse_bezel_entry(entries[i]))
        else:
            bezels.append((0, 0))
    return bezels


def _parse_mm(token: str, line: str) -> int:
    if not token.endswith("mm") or not UINT_RE.fullmatch(token[:-2]):
        raise MalformedDescriptor(f"expected a '<n>mm' physical size, got {token!r} in: {line}")
    return int(token[:-2])


def parse_monitor_line(line: str, bezel: tuple[int, int] = (0, 0)) -> Monitor:
    """Build a Monitor from one connected-monitor line of xrandr output."""
    tokens = line.split()
    if len(tokens) < 4:
        raise MalformedDescriptor(f"too few fields in monitor line: {line}")
    name = tokens[0]

    modeline = None
    for token in tokens[1:]:
        modeline = MODELINE_RE.match(token)
        if modeline:
            break
    if not modeline:
        raise MalformedDescriptor(f"malformed modeline for {name}: {line}")
    pixel_width, pixel_height, x, y = (int(v) for v in modeline.groups())

    # Reading from the end of the line: "<height>mm", "x", "<width>mm"
    physical_height = _parse_mm(tokens[-1], line)
    physical_width = _parse_mm(tokens[-3], line)

    bezel_x, bezel_y = bezel
    return Monitor(
        name=name,
        pixel_width=pixel_width,
        pixel_height=pixel_height,
        physical_width=physical_width,
        physical_height=physical_height,
        x=x,
        y=y,
        bezel_x=bezel_x,
        bezel_y=bezel_y,
    )


def parse_monitors(lines: Iterable[str], bezels: str = "") -> list[Monitor]:
    """
    Parse every connected monitor out of `lines`, in the order they appear.

    The i-th connected monitor gets the i-th bezel entry. Unrelated lines
    (screen summary, mode lists, disconnected outputs) are skipped.
    """
    connected = [line for line in lines if CONNECTED_TOKEN in line]
    pairs = parse_bezels(bezels, len(connected))

    monitors = []
    seen = set()
    for line, bezel in zip(connected, pairs):
        monitor = parse_monitor_line(line, bezel)
        if monitor.name in seen:
            raise InvalidMonitor(f"duplicate monitor name {monitor.name!r}")
        seen.add(monitor.name)
        logger.debug("Parsed monitor %s", monitor)
        monitors.append(monitor)
    return monitors
