from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from handmark.utils.coords import Point3D


class InferenceMode(Enum):
    """
    Inference modes. Each mode uses its own model.
    """

    LANDMARK = "landmark"
    """Hand landmark detection only."""

    GESTURE = "gesture"
    """Hand landmarks plus gesture classification."""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GestureCategory:
    """
    A classification label returned by the gesture model (also used for handedness).
    """

    category_name: str
    score: float

    def __str__(self) -> str:
        return f"{self.category_name} ({self.score * 100:.1f}%)"


@dataclass(frozen=True)
class DetectionResult:
    """
    Model-agnostic output of a single inference call.

    - `points` holds the landmarks of the primary tracked hand, in the detector's fixed order (index 0 is the wrist).
    - `gestures` is only filled in gesture mode; the first category is the top label.
    """

    points: Tuple[Point3D, ...] = ()
    confidence: float = 0.0
    detected: bool = False
    gestures: Tuple[GestureCategory, ...] = ()
    handedness: Tuple[GestureCategory, ...] = ()

    @classmethod
    def empty(cls) -> "DetectionResult":
        """
        A result for a frame where no hand was found.
        """
        return cls()

    @property
    def top_gesture(self) -> Optional[GestureCategory]:
        if not self.gestures:
            return None
        return self.gestures[0]

    @property
    def valid_points(self) -> Tuple[Point3D, ...]:
        """
        The landmarks lying inside the frame.
        """
        return tuple(p for p in self.points if p.is_valid)


@dataclass(frozen=True)
class Frame:
    """
    A camera frame handed to a detector.
    """

    image: Optional[npt.NDArray[np.uint8]]
    width: int
    height: int
    pixel_format: str = "bgr"
    timestamp: Optional[float] = None

    @classmethod
    def from_image(
        cls, image: npt.NDArray[np.uint8], pixel_format: str = "bgr", timestamp: Optional[float] = None
    ) -> "Frame":
        """
        Wrap an OpenCV image, reading its size from the array shape.
        """
        height, width = int(image.shape[0]), int(image.shape[1])
        return cls(image=image, width=width, height=height, pixel_format=pixel_format, timestamp=timestamp)
