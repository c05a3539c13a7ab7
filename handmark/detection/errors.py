class DetectorError(Exception):
    """
    Base class for the errors raised by detectors.
    All of them are per-frame failures: the caller skips the frame and keeps going.
    """


class ModelNotLoadedError(DetectorError):
    """
    Raised when inference is requested before the model of the current mode is loaded.
    """


class InvalidFrameError(DetectorError):
    """
    Raised when a frame has no image data or invalid size metadata.
    """


class InferenceError(DetectorError):
    """
    Raised when the underlying SDK fails while running inference.
    The original exception is chained as `__cause__`.
    """
