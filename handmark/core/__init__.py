"""
Core Module - session logic and the threading around it.

- Overlay session: detector + stabilizer per frame (session.py)
- Background inference worker (workers.py)
- Threaded camera capture and camera helpers (camera_thread.py, utils.py)
- Non-blocking preview window (display_thread.py)
"""

from .session import OverlayFrame, OverlaySession, ProcessingStats
from .workers import InferenceWorker

__all__ = [
    'OverlayFrame',
    'OverlaySession',
    'ProcessingStats',
    'InferenceWorker',
]
