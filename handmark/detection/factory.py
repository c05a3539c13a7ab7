import logging

from handmark.config import Backend, DetectorConfig
from handmark.detection.base import Detector
from handmark.detection.stub_detector import StubDetector

logger = logging.getLogger(__name__)


def create_detector(backend: Backend, models_dir: str = DetectorConfig.MODELS_DIR) -> Detector:
    """
    Create the detector for `backend`.
    The MediaPipe backend is imported here so the stub can run without MediaPipe installed.
    """
    if backend == Backend.STUB:
        logger.info("Using stub detector (synthetic landmarks)")
        return StubDetector()

    if backend == Backend.MEDIAPIPE:
        from handmark.detection.mediapipe_detector import MediaPipeDetector

        logger.info(f"Using MediaPipe detector (models in '{models_dir}')")
        return MediaPipeDetector(models_dir=models_dir)

    raise ValueError(f"Unknown detector backend: {backend}")
