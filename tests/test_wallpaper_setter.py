"""Tests for the wallpaper utility wrapper."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from wallpaper_errors import ExternalToolFailure
from wallpaper_setter import apply_wallpaper, make_applier, wallpaper_command


def test_wallpaper_command():
    assert wallpaper_command("DP-1", Path("/tmp/x/DP-1.png")) == [
        "xwallpaper", "--output", "DP-1", "--maximize", "/tmp/x/DP-1.png",
    ]


@patch("wallpaper_setter.subprocess.run")
def test_apply_runs_tool_synchronously(mock_run):
    apply_wallpaper("HDMI-1", Path("/tmp/HDMI-1.png"))
    args, kwargs = mock_run.call_args
    assert args[0][:3] == ["xwallpaper", "--output", "HDMI-1"]
    assert kwargs["check"] is True


@patch("wallpaper_setter.subprocess.run", side_effect=FileNotFoundError("xwallpaper"))
def test_apply_missing_tool(mock_run):
    with pytest.raises(ExternalToolFailure, match="not installed"):
        apply_wallpaper("HDMI-1", Path("/tmp/HDMI-1.png"))


@patch("wallpaper_setter.subprocess.run")
def test_apply_non_zero_exit(mock_run):
    mock_run.side_effect = subprocess.CalledProcessError(2, ["xwallpaper"], stderr="unknown output")
    with pytest.raises(ExternalToolFailure, match="HDMI-1"):
        apply_wallpaper("HDMI-1", Path("/tmp/HDMI-1.png"))


@patch("wallpaper_setter.subprocess.run")
def test_make_applier_uses_custom_tool(mock_run):
    apply = make_applier("/opt/bin/xwallpaper")
    apply("DP-2", Path("/tmp/DP-2.png"))
    assert mock_run.call_args[0][0][0] == "/opt/bin/xwallpaper"
