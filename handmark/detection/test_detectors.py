"""
Tests for the detector interface, the stub backend and backend selection.
"""

import logging

import numpy as np
import pytest

from handmark.config import Backend, DetectorConfig
from handmark.detection import (
    DetectionResult,
    Detector,
    DetectorError,
    Frame,
    InferenceError,
    InferenceMode,
    InvalidFrameError,
    ModelNotLoadedError,
    StubDetector,
    create_detector,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FailingDetector(Detector):
    """Loads fine, fails on every frame."""

    def name(self):
        return "failing"

    def _load(self, mode):
        pass

    def _infer(self, frame, mode):
        raise RuntimeError("graph crashed")


class UnloadableDetector(Detector):
    def name(self):
        return "unloadable"

    def _load(self, mode):
        raise FileNotFoundError("missing.task")

    def _infer(self, frame, mode):
        return DetectionResult.empty()


def make_frame(width=64, height=48):
    return Frame.from_image(np.zeros((height, width, 3), dtype=np.uint8))


def test_frame_from_image():
    frame = make_frame(64, 48)
    assert (frame.width, frame.height) == (64, 48)
    assert frame.pixel_format == "bgr"


def test_stub_landmark_mode():
    detector = StubDetector()
    assert detector.load_model(InferenceMode.LANDMARK)
    assert detector.is_model_loaded
    assert detector.current_mode == InferenceMode.LANDMARK

    result = detector.detect(make_frame())

    assert result.detected
    assert len(result.points) == DetectorConfig.STUB_LANDMARK_COUNT
    assert result.confidence == pytest.approx(0.8)
    assert result.gestures == ()
    assert all(p.is_valid for p in result.points)

    assert result.points[0].coords == pytest.approx((0.4, 0.3, 0.0))
    assert result.points[7].coords == pytest.approx((0.48, 0.38, 0.0))


def test_stub_gesture_mode():
    detector = StubDetector()
    detector.load_model(InferenceMode.GESTURE)

    result = detector.detect(make_frame())

    assert result.detected
    assert len(result.points) == 21
    assert result.top_gesture.category_name == "Open_Palm"
    assert result.top_gesture.score == pytest.approx(0.85)


def test_detect_without_model():
    detector = StubDetector()

    with pytest.raises(ModelNotLoadedError):
        detector.detect(make_frame())


def test_detect_after_close():
    with StubDetector() as detector:
        detector.load_model(InferenceMode.LANDMARK)
    assert not detector.is_model_loaded

    with pytest.raises(ModelNotLoadedError):
        detector.detect(make_frame())


@pytest.mark.parametrize(
    "frame",
    [
        None,
        Frame(image=None, width=64, height=48),
        Frame(image=np.zeros((48, 64, 3), dtype=np.uint8), width=0, height=48),
        Frame(image=np.zeros((48, 64, 3), dtype=np.uint8), width=64, height=-1),
    ],
)
def test_detect_invalid_frame(frame):
    detector = StubDetector()
    detector.load_model(InferenceMode.LANDMARK)

    with pytest.raises(InvalidFrameError):
        detector.detect(frame)


def test_backend_failure_is_wrapped():
    detector = FailingDetector()
    detector.load_model(InferenceMode.LANDMARK)

    with pytest.raises(InferenceError) as excinfo:
        detector.detect(make_frame())

    assert isinstance(excinfo.value, DetectorError)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_load_failure_returns_false():
    detector = UnloadableDetector()

    assert detector.load_model(InferenceMode.GESTURE) is False
    assert not detector.is_model_loaded
    # The mode is only switched by a successful load
    assert detector.current_mode == InferenceMode.LANDMARK


def test_create_stub_detector():
    detector = create_detector(Backend.STUB)
    assert isinstance(detector, StubDetector)
    assert detector.name() == "stub"


def test_create_mediapipe_detector(tmp_path):
    pytest.importorskip("mediapipe")

    detector = create_detector(Backend.MEDIAPIPE, str(tmp_path))
    assert detector.name() == "mediapipe"
    assert detector.model_path(InferenceMode.GESTURE) == str(tmp_path / "gesture_recognizer.task")

    # No model bundle in the directory
    assert detector.load_model(InferenceMode.LANDMARK) is False


def test_create_unknown_backend():
    with pytest.raises(ValueError):
        create_detector("onnx")
