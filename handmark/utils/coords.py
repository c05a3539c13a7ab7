from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point3D:
    """
    A landmark as reported by the detector.
    `x` and `y` are normalized to the frame width and height, `z` is a relative depth with no fixed unit.
    Instances are immutable.
    """

    x: float
    "Normalized X coordinate."
    y: float
    "Normalized Y coordinate."
    z: float = 0.0
    "Relative depth estimate. Never validated."

    @property
    def is_valid(self) -> bool:
        """
        Whether the point lies inside the frame. Depth is not taken into account.
        """
        return 0.0 <= self.x <= 1.0 and 0.0 <= self.y <= 1.0

    @property
    def coords(self) -> Tuple[float, float, float]:
        """
        Returns the coordinates as a tuple (x, y, z).
        """
        return self.x, self.y, self.z

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


@dataclass(frozen=True)
class ScreenPoint:
    """
    A landmark in display pixel coordinates.
    The depth of the source landmark is carried along unscaled so it can be smoothed with the other axes.
    """

    x: float
    "X coordinate in pixels."
    y: float
    "Y coordinate in pixels."
    z: float = 0.0
    "Relative depth of the source landmark."

    @property
    def coords(self) -> Tuple[float, float, float]:
        """
        Returns the coordinates as a tuple (x, y, z).
        """
        return self.x, self.y, self.z

    @property
    def pixel(self) -> Tuple[int, int]:
        """
        Returns the rounded (x, y) pixel, as expected by the OpenCV drawing functions.
        """
        return int(round(self.x)), int(round(self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
