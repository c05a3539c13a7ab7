"""
Overlay session: the consumer side of the detector.

An `OverlaySession` owns the landmark stabilizer and everything that decides
whether a frame goes through it: the recording flag, the inference mode, the
single-flight guard and the processing time statistics.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

from handmark.config import PerformanceConfig
from handmark.detection import Detector, DetectorError, Frame, GestureCategory, InferenceMode
from handmark.stabilization import LandmarkStabilizer, PlatformGeometry
from handmark.utils import RingBuffer, ScreenPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlayFrame:
    """
    What the renderer draws for one processed frame.
    """

    mode: InferenceMode
    points: List[ScreenPoint] = field(default_factory=list)
    gesture: Optional[GestureCategory] = None
    """Top gesture label. Only set in gesture mode."""


class ProcessingStats:
    """
    Processing time of the last `window` frames. Every `window` frames the average
    time and the matching FPS are logged.
    """

    def __init__(self, window: int = PerformanceConfig.WINDOW) -> None:
        self.window = window
        self.times = RingBuffer(window)
        self.frame_count = 0

    def add(self, elapsed_ms: float) -> None:
        self.times.add(elapsed_ms)
        self.frame_count += 1

        if self.frame_count % self.window == 0:
            logger.info(
                f"Performance (last {self.window} frames): "
                f"avg processing time={self.average_ms:.1f}ms, FPS={self.fps:.1f}"
            )

    @property
    def average_ms(self) -> float:
        avg = self.times.mean()
        return avg if avg is not None else 0.0

    @property
    def fps(self) -> float:
        avg = self.average_ms
        return 1000.0 / avg if avg > 0 else 0.0


class OverlaySession:
    """
    Runs frames through the detector and the stabilizer.

    At most one frame is processed at a time: a frame that arrives while another one is
    in flight is dropped. Detector failures skip the frame and leave the stabilizer
    untouched.
    """

    def __init__(self, detector: Detector, mode: InferenceMode = InferenceMode.LANDMARK) -> None:
        self.detector = detector
        self.stabilizer = LandmarkStabilizer()
        self.stats = ProcessingStats()

        self._mode = mode
        self._recording = False
        self._gesture: Optional[GestureCategory] = None
        self._busy = threading.Lock()
        # Guards the recording flag, the stabilizer and the gesture label together
        self._state_lock = threading.RLock()

    @property
    def mode(self) -> InferenceMode:
        return self._mode

    @property
    def is_recording(self) -> bool:
        return self._recording

    @property
    def is_model_loaded(self) -> bool:
        return self.detector.is_model_loaded and self.detector.current_mode == self._mode

    @property
    def is_processing(self) -> bool:
        return self._busy.locked()

    @property
    def gesture(self) -> Optional[GestureCategory]:
        return self._gesture

    def load_model(self) -> bool:
        """
        Load the detector model for the current mode.
        """
        success = self.detector.load_model(self._mode)
        if not success:
            logger.warning(f"Failed to load {self._mode} model")
        return success

    def start(self) -> None:
        """
        Start feeding frames to the detector.
        """
        with self._state_lock:
            self._recording = True
        logger.info(f"Recording started ({self._mode} mode)")

    def stop(self) -> None:
        """
        Stop feeding frames and clear the overlay.
        """
        with self._state_lock:
            self._recording = False
            self.clear()
        logger.info("Recording stopped")

    def toggle(self) -> bool:
        """
        Start or stop recording. Returns the new recording state.
        """
        if self._recording:
            self.stop()
        else:
            self.start()
        return self._recording

    def switch_mode(self, mode: InferenceMode) -> bool:
        """
        Switch inference mode and load its model.
        Refused while recording. Returns whether the switch happened.
        """
        with self._state_lock:
            if self._recording:
                logger.warning("Cannot change inference mode while recording")
                return False

            if mode == self._mode and self.is_model_loaded:
                return True

            self._mode = mode
            self.clear()
        logger.info(f"Inference mode set to {mode}")
        self.load_model()
        return True

    def clear(self) -> None:
        """
        Drop landmarks and gesture information.
        """
        with self._state_lock:
            self.stabilizer.reset()
            self._gesture = None

    def process_frame(
        self, frame: Frame, display_width: float, geometry: PlatformGeometry
    ) -> Optional[OverlayFrame]:
        """
        Process one frame.

        Returns None when the frame was not processed: not recording, model not loaded,
        another frame in flight, or a detector failure.
        """
        if not self._recording or not self.is_model_loaded:
            return None

        if not self._busy.acquire(blocking=False):
            logger.debug("Frame dropped, previous frame still processing")
            return None

        try:
            return self._process(frame, display_width, geometry)
        finally:
            self._busy.release()

    def _process(
        self, frame: Frame, display_width: float, geometry: PlatformGeometry
    ) -> Optional[OverlayFrame]:
        start = time.perf_counter()
        mode = self._mode

        try:
            result = self.detector.detect(frame)
        except DetectorError as e:
            logger.warning(f"Inference failed, frame skipped: {e}")
            return None

        with self._state_lock:
            # Stopped or switched while the detector was running
            if not self._recording or self._mode != mode:
                return None

            points = self.stabilizer.process(result, geometry, display_width)

            if mode == InferenceMode.GESTURE:
                self._gesture = result.top_gesture if points else None
            else:
                self._gesture = None
            gesture = self._gesture

        self.stats.add((time.perf_counter() - start) * 1000.0)
        return OverlayFrame(mode=mode, points=points, gesture=gesture)
