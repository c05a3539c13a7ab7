import time

from handmark.config import DetectorConfig
from handmark.detection.base import Detector
from handmark.detection.types import DetectionResult, Frame, GestureCategory, InferenceMode
from handmark.utils.coords import Point3D


def stub_landmarks(count: int = DetectorConfig.STUB_LANDMARK_COUNT):
    """
    A fixed grid of landmarks around the center of the frame, five per row.
    """
    return tuple(
        Point3D(0.4 + (i % 5) * 0.04, 0.3 + (i // 5) * 0.08, 0.0) for i in range(count)
    )


class StubDetector(Detector):
    """
    Detector returning synthetic landmarks, for running the application without model bundles.

    :param latency: Seconds slept on every inference, to simulate a real model.
    """

    def __init__(self, latency: float = 0.0) -> None:
        super().__init__()
        self.latency = latency

    def name(self) -> str:
        return "stub"

    def _load(self, mode: InferenceMode) -> None:
        pass

    def _infer(self, frame: Frame, mode: InferenceMode) -> DetectionResult:
        if self.latency > 0:
            time.sleep(self.latency)

        points = stub_landmarks()
        if mode == InferenceMode.LANDMARK:
            return DetectionResult(
                points=points,
                confidence=DetectorConfig.STUB_CONFIDENCE,
                detected=True,
            )

        gesture = GestureCategory(DetectorConfig.STUB_GESTURE, DetectorConfig.STUB_GESTURE_SCORE)
        return DetectionResult(
            points=points,
            confidence=gesture.score,
            detected=True,
            gestures=(gesture,),
            handedness=(GestureCategory("Right", DetectorConfig.STUB_CONFIDENCE),),
        )
