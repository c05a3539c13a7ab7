"""
handmark - live hand landmark and gesture overlay

Streams camera frames into a hand tracking model and draws the smoothed
keypoints over the live preview.

Main components:
- config: Tunable constants and the command line configuration
- detection: Detector interface, MediaPipe and stub backends, result types
- stabilization: Landmark smoothing and the normalized-to-screen transform
- core: Overlay session, worker threads, camera helpers
- ui: Overlay rendering
"""

__version__ = "1.0.0"
