import pytest
from PIL import Image

from monitor_descriptor import Monitor

SOURCE_COLOR = (200, 100, 50)


@pytest.fixture
def make_monitor():
    def _make(name="DP-1", pixel_width=1920, pixel_height=1080, physical_width=527,
              physical_height=296, x=0, y=0, bezel_x=0, bezel_y=0):
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
    return _make


@pytest.fixture
def small_pair(make_monitor):
    """200x100 at 4 px/mm beside 300x150 at 6 px/mm (factor 1.5)."""
    return [
        make_monitor("LEFT", 200, 100, 50, 25, x=0, y=0),
        make_monitor("RIGHT", 300, 150, 60, 25, x=200, y=0),
    ]


@pytest.fixture
def solid_source(tmp_path):
    path = tmp_path / "source.png"
    Image.new("RGB", (800, 400), SOURCE_COLOR).save(path)
    return path


@pytest.fixture
def gradient_source(tmp_path):
    path = tmp_path / "gradient.png"
    Image.linear_gradient("L").resize((800, 400)).convert("RGB").save(path)
    return path
