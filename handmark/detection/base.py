import logging
from abc import ABC, abstractmethod

from handmark.detection.errors import (
    InferenceError,
    InvalidFrameError,
    ModelNotLoadedError,
)
from handmark.detection.types import DetectionResult, Frame, InferenceMode

logger = logging.getLogger(__name__)


class Detector(ABC):
    """
    Detector interface.

    A detector owns one model per inference mode. Only the model of the current mode
    is loaded at a time; `detect` runs it on a frame and returns a `DetectionResult`.
    Implementations provide `_load` and `_infer`; the checks on the model state and on
    the frame are done here, so every backend reports failures the same way.
    """

    def __init__(self) -> None:
        self._model_loaded = False
        self._mode = InferenceMode.LANDMARK

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def _load(self, mode: InferenceMode) -> None:
        """
        Load the model for `mode`. Raise on failure.
        """

    @abstractmethod
    def _infer(self, frame: Frame, mode: InferenceMode) -> DetectionResult: ...

    def close(self) -> None:
        """
        Release the models.
        """
        self._model_loaded = False

    @property
    def is_model_loaded(self) -> bool:
        return self._model_loaded

    @property
    def current_mode(self) -> InferenceMode:
        return self._mode

    def load_model(self, mode: InferenceMode) -> bool:
        """
        Load the model for `mode` and make it the current mode.
        Returns False if the model could not be loaded.
        """
        try:
            self._load(mode)
        except Exception as e:
            logger.error(f"Failed to load {mode} model with {self.name()}: {e}")
            self._model_loaded = False
            return False

        self._model_loaded = True
        self._mode = mode
        logger.info(f"{self.name()}: {mode} model loaded")
        return True

    def detect(self, frame: Frame) -> DetectionResult:
        """
        Run the model of the current mode on `frame`.

        :raises ModelNotLoadedError: No model is loaded.
        :raises InvalidFrameError: The frame has no image or a non-positive size.
        :raises InferenceError: The model failed on this frame.
        """
        if not self._model_loaded:
            raise ModelNotLoadedError(f"{self._mode} model not loaded")

        if frame is None or frame.image is None or frame.width <= 0 or frame.height <= 0:
            raise InvalidFrameError("Frame is missing image data or size")

        try:
            return self._infer(frame, self._mode)
        except Exception as e:
            raise InferenceError(f"{self._mode} inference failed: {e}") from e

    def __enter__(self) -> "Detector":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
