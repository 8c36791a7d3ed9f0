"""Tests for the GUI-facing get_size / set_wallpaper entry points."""

import json
from unittest.mock import patch

from wallpaper_bridge import get_size, get_size_json, set_wallpaper
from wallpaper_setter import apply_wallpaper
from wallpaper_splitter import GlobalTransform

LINES = [
    "Screen 0: minimum 320 x 200, current 3840 x 1080, maximum 16384 x 16384",
    "HDMI-1 connected 1920x1080+0+0 (normal left inverted right x axis y axis) 527mm x 296mm",
    "DP-1 connected primary 1920x1080+1920+0 (normal left inverted right x axis y axis) 527mm x 296mm",
]


@patch("wallpaper_bridge.query_xrandr", return_value=LINES)
def test_get_size(mock_query):
    monitors = get_size()
    assert [m.name for m in monitors] == ["HDMI-1", "DP-1"]
    assert all((m.bezel_x, m.bezel_y) == (0, 0) for m in monitors)


@patch("wallpaper_bridge.query_xrandr", return_value=LINES)
def test_get_size_json(mock_query):
    payload = json.loads(get_size_json())
    assert payload[1]["name"] == "DP-1"
    assert payload[1]["x"] == 1920
    assert payload[0]["physical_height"] == 296


@patch("wallpaper_bridge.render_wallpapers")
@patch("wallpaper_bridge.query_xrandr", return_value=LINES)
def test_set_wallpaper_requeries_topology(mock_query, mock_render):
    set_wallpaper("/pictures/a.jpg", 1.25, 40, 100)

    mock_query.assert_called_once()
    args, kwargs = mock_render.call_args
    assert args[0] == "/pictures/a.jpg"
    assert [m.name for m in args[1]] == ["HDMI-1", "DP-1"]
    assert kwargs["transform"] == GlobalTransform(scale=1.25, top=40, left=100)
    assert kwargs["apply"] is apply_wallpaper


@patch("wallpaper_bridge.render_wallpapers")
@patch("wallpaper_bridge.query_xrandr")
def test_set_wallpaper_with_given_monitors(mock_query, mock_render, make_monitor):
    monitors = [make_monitor()]
    set_wallpaper("/pictures/a.jpg", 1.0, 0, 0, monitors=monitors)
    mock_query.assert_not_called()
    assert mock_render.call_args[0][1] is monitors
