"""
Detection Module - the hand landmark / gesture inference boundary.

This module provides:
- The detector interface and its error types (base.py, errors.py)
- Detection result types (types.py)
- MediaPipe Tasks result parsing (parsing.py)
- A synthetic-landmark detector (stub_detector.py)
- Backend selection (factory.py); the MediaPipe backend lives in mediapipe_detector.py
"""

from .base import Detector
from .errors import DetectorError, InferenceError, InvalidFrameError, ModelNotLoadedError
from .factory import create_detector
from .stub_detector import StubDetector
from .types import DetectionResult, Frame, GestureCategory, InferenceMode

__all__ = [
    'Detector',
    'DetectorError',
    'InferenceError',
    'InvalidFrameError',
    'ModelNotLoadedError',
    'create_detector',
    'StubDetector',
    'DetectionResult',
    'Frame',
    'GestureCategory',
    'InferenceMode',
]
