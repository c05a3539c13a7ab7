"""
Landmark stabilization.

Detected keypoints jitter from one frame to the next. `LandmarkStabilizer`
applies a single-pole exponential low-pass filter to the screen-space
landmarks and manages the resets of the filter state.
"""

import logging
import threading
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

from handmark.config import StabilizerConfig
from handmark.detection.types import DetectionResult
from handmark.stabilization.geometry import PlatformGeometry, transform
from handmark.utils.coords import ScreenPoint

logger = logging.getLogger(__name__)

CURRENT_WEIGHT = StabilizerConfig.CURRENT_WEIGHT
HISTORY_WEIGHT = StabilizerConfig.HISTORY_WEIGHT


class StabilizerState(Enum):
    """
    States of the stabilizer.
    """

    EMPTY = 0
    """No previous points are held."""

    TRACKING = 1
    """The previous frame's output is held and used as the smoothing reference."""


class LandmarkStabilizer:
    """
    Exponential smoothing filter for landmark sets.

    For a frame with the same number of points as the previous output, each point
    becomes `0.7 * current + 0.3 * previous`, independently on every axis.
    The first frame after a reset, and any frame whose point count differs from the
    previous one, is emitted unsmoothed: there is no index correspondence between
    landmark sets of different cardinality.

    The filter never raises. State updates are done under a lock so the inference
    worker and the UI thread (stop, mode switch) can share one instance.
    """

    def __init__(self) -> None:
        self._previous = np.empty((0, 3), dtype=float)
        self._lock = threading.Lock()

    @property
    def state(self) -> StabilizerState:
        with self._lock:
            return StabilizerState.TRACKING if len(self._previous) else StabilizerState.EMPTY

    @property
    def previous_points(self) -> Tuple[ScreenPoint, ...]:
        """
        The output of the last processed frame (empty in the `EMPTY` state).
        """
        with self._lock:
            return tuple(_to_points(self._previous))

    def reset(self) -> None:
        """
        Drop the smoothing reference. Called on stop/pause and on mode switch.
        """
        with self._lock:
            self._previous = np.empty((0, 3), dtype=float)
        logger.debug("Stabilizer reset")

    def process(
        self, result: DetectionResult, geometry: PlatformGeometry, display_width: float
    ) -> List[ScreenPoint]:
        """
        Transform the valid landmarks of `result` to display pixels and smooth them.

        A result flagged as not detected, or without any valid landmark, resets the filter
        and yields an empty list.

        :param result: Output of the detector for the current frame.
        :param geometry: Mirroring and aspect multiplier of the current frame.
        :param display_width: Width of the preview in pixels.
        """
        if not result.detected:
            return self.smooth(())

        points = [transform(p, display_width, geometry) for p in result.valid_points]
        return self.smooth(points)

    def smooth(self, points: Sequence[ScreenPoint]) -> List[ScreenPoint]:
        """
        Run one step of the filter on already transformed points and return the output.
        """
        current = np.array([p.coords for p in points], dtype=float).reshape(-1, 3)

        with self._lock:
            if len(current) == 0:
                self._previous = current
                return []

            if len(current) == len(self._previous):
                output = current * CURRENT_WEIGHT + self._previous * HISTORY_WEIGHT
            else:
                if len(self._previous):
                    logger.debug(
                        f"Landmark count changed ({len(self._previous)} -> {len(current)}), smoothing skipped"
                    )
                output = current

            self._previous = output

        return _to_points(output)


def _to_points(arr: np.ndarray) -> List[ScreenPoint]:
    return [ScreenPoint(float(x), float(y), float(z)) for x, y, z in arr]
