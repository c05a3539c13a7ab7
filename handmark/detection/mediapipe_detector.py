import logging
import os
from typing import Any, Optional

import cv2
import mediapipe as mp
import numpy as np
import numpy.typing as npt
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision

from handmark.config import DetectorConfig
from handmark.detection.base import Detector
from handmark.detection.parsing import parse_gesture_result, parse_landmark_result
from handmark.detection.types import DetectionResult, Frame, InferenceMode

logger = logging.getLogger(__name__)

_TO_RGB = {
    "bgr": cv2.COLOR_BGR2RGB,
    "bgra": cv2.COLOR_BGRA2RGB,
    "gray": cv2.COLOR_GRAY2RGB,
}


def to_rgb(frame: Frame) -> npt.NDArray[np.uint8]:
    """
    Convert the frame image to the contiguous RGB array expected by MediaPipe.
    """
    image = frame.image
    code = _TO_RGB.get(frame.pixel_format)
    if code is not None:
        image = cv2.cvtColor(image, code)
    return np.ascontiguousarray(image)


class MediaPipeDetector(Detector):
    """
    Detector backed by the MediaPipe Tasks vision models.

    Landmark mode runs a `HandLandmarker`, gesture mode a `GestureRecognizer`.
    Both run in IMAGE mode: every frame is processed independently.
    """

    def __init__(
        self,
        models_dir: str = DetectorConfig.MODELS_DIR,
        num_hands: int = DetectorConfig.NUM_HANDS,
        min_hand_detection_confidence: float = DetectorConfig.MIN_HAND_DETECTION_CONFIDENCE,
        min_hand_presence_confidence: float = DetectorConfig.MIN_HAND_PRESENCE_CONFIDENCE,
        min_tracking_confidence: float = DetectorConfig.MIN_TRACKING_CONFIDENCE,
    ) -> None:
        super().__init__()

        self.models_dir = models_dir
        self.num_hands = int(num_hands)
        self.min_hand_detection_confidence = float(min_hand_detection_confidence)
        self.min_hand_presence_confidence = float(min_hand_presence_confidence)
        self.min_tracking_confidence = float(min_tracking_confidence)

        self._task: Optional[Any] = None
        " The Tasks object of the current mode (HandLandmarker or GestureRecognizer). "

    def name(self) -> str:
        return "mediapipe"

    def model_path(self, mode: InferenceMode) -> str:
        filename = (
            DetectorConfig.LANDMARK_MODEL
            if mode == InferenceMode.LANDMARK
            else DetectorConfig.GESTURE_MODEL
        )
        return os.path.join(self.models_dir, filename)

    def _load(self, mode: InferenceMode) -> None:
        path = self.model_path(mode)
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Model bundle not found: {path}")

        base_options = mp_tasks.BaseOptions(model_asset_path=path)

        if mode == InferenceMode.LANDMARK:
            options = vision.HandLandmarkerOptions(
                base_options=base_options,
                running_mode=vision.RunningMode.IMAGE,
                num_hands=self.num_hands,
                min_hand_detection_confidence=self.min_hand_detection_confidence,
                min_hand_presence_confidence=self.min_hand_presence_confidence,
                min_tracking_confidence=self.min_tracking_confidence,
            )
            task = vision.HandLandmarker.create_from_options(options)
        else:
            options = vision.GestureRecognizerOptions(
                base_options=base_options,
                running_mode=vision.RunningMode.IMAGE,
                num_hands=self.num_hands,
                min_hand_detection_confidence=self.min_hand_detection_confidence,
                min_hand_presence_confidence=self.min_hand_presence_confidence,
                min_tracking_confidence=self.min_tracking_confidence,
            )
            task = vision.GestureRecognizer.create_from_options(options)

        # Only one model is kept alive
        self._close_task()
        self._task = task
        logger.debug(f"Loaded {path}")

    def _infer(self, frame: Frame, mode: InferenceMode) -> DetectionResult:
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=to_rgb(frame))

        if mode == InferenceMode.LANDMARK:
            return parse_landmark_result(self._task.detect(image))

        result = parse_gesture_result(self._task.recognize(image))
        if result.top_gesture is not None:
            logger.debug(f"Gesture result: {result.top_gesture}")
        return result

    def _close_task(self) -> None:
        if self._task is not None:
            try:
                self._task.close()
            except Exception as e:
                logger.warning(f"Error closing MediaPipe task: {e}")
            self._task = None

    def close(self) -> None:
        self._close_task()
        super().close()
