"""Tests for the source-vs-canvas report."""

import pytest
from PIL import Image

from image_info import print_source_info, read_source_size, source_upscale
from monitor_descriptor import Size
from wallpaper_errors import ImageDecodeFailure
from wallpaper_splitter import GlobalTransform


def test_read_source_size(solid_source):
    assert read_source_size(solid_source) == (800, 400)


def test_read_source_size_garbage(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"not an image")
    with pytest.raises(ImageDecodeFailure):
        read_source_size(path)


def test_upscale_covers_canvas():
    # 800x400 must cover 2000x500: width drives it
    assert source_upscale((800, 400), Size(2000, 500)) == pytest.approx(2.5)
    assert source_upscale((800, 400), Size(400, 400)) == pytest.approx(1.0)
    assert source_upscale((800, 400), Size(500, 150)) == pytest.approx(0.625)


def test_upscale_with_transform():
    wide = Size(500, 150)
    tall = Size(100, 300)
    assert source_upscale((800, 400), wide, GlobalTransform(2.0)) == pytest.approx(1.25)
    assert source_upscale((800, 400), tall, GlobalTransform(2.0)) == pytest.approx(1.5)


def test_print_source_info_no_warning(solid_source, capsys):
    factor = print_source_info(solid_source, Size(500, 150))
    out = capsys.readouterr().out
    assert factor == pytest.approx(0.625)
    assert "Source: source.png  800x400" in out
    assert "Warning" not in out


def test_print_source_info_warns_on_upscale(tmp_path, capsys):
    path = tmp_path / "small.png"
    Image.new("RGB", (100, 50)).save(path)

    factor = print_source_info(path, Size(500, 150))
    assert factor == pytest.approx(5.0)
    assert "Warning: source is upscaled x5.00" in capsys.readouterr().out
