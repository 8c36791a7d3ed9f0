"""
Value types shared by the planner and the compositor.

A Monitor is built once per wallpaper-set operation from a snapshot of the
display state and never mutated afterwards.
"""

from dataclasses import asdict, dataclass

from wallpaper_errors import InvalidMonitor


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def box(self) -> tuple[int, int, int, int]:
        """Pillow crop box: (left, upper, right, lower)."""
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass(frozen=True)
class Monitor:
    name: str
    pixel_width: int
    pixel_height: int
    physical_width: int
    physical_height: int
    x: int = 0
    y: int = 0
    bezel_x: int = 0
    bezel_y: int = 0

    def __post_init__(self):
        if not self.name:
            raise InvalidMonitor("monitor name must not be empty")
        for field in ("pixel_width", "pixel_height", "physical_height"):
            if getattr(self, field) <= 0:
                raise InvalidMonitor(
                    f"{self.name}: {field} must be positive (got {getattr(self, field)})"
                )
        for field in ("physical_width", "x", "y", "bezel_x", "bezel_y"):
            if getattr(self, field) < 0:
                raise InvalidMonitor(
                    f"{self.name}: {field} must not be negative (got {getattr(self, field)})"
                )

    @property
    def dpi(self) -> float:
        # Vertical density only: pixels per millimetre of physical height.
        return self.pixel_height / self.physical_height

    @property
    def resolution(self) -> tuple[int, int]:
        return self.pixel_width, self.pixel_height

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self):
        return (
            f"{self.name} {self.pixel_width}x{self.pixel_height}+{self.x}+{self.y} "
            f"{self.physical_width}mm x {self.physical_height}mm "
            f"bezel {self.bezel_x},{self.bezel_y}"
        )
