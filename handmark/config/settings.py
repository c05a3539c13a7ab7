"""
Configuration constants for handmark.

All tunable parameters live here, grouped by the component that uses them.

PERFORMANCE TUNING:
- Landmark models are run on the full frame: keep DEFAULT_WIDTH/DEFAULT_HEIGHT low (320x240 or 640x480)
- If capture is slow, enable USE_THREADED_CAPTURE
"""

# ==================== Camera Configuration ====================
class CameraConfig:
    """Camera capture configuration parameters."""

    # Capture resolution requested from the camera, kept small so inference stays fast
    DEFAULT_WIDTH = 640
    DEFAULT_HEIGHT = 480

    # Camera buffer size (reduce latency)
    BUFFER_SIZE = 1

    # Target FPS for camera (actual may vary by camera capability)
    TARGET_FPS = 30

    # Use threaded camera capture
    USE_THREADED_CAPTURE = True

    # Seconds to wait for a new frame before giving up on the camera
    READ_TIMEOUT = 2.0

    # Camera backend to use (None lets OpenCV choose)
    BACKEND = None


# ==================== Detector Configuration ====================
class DetectorConfig:
    """Configuration for the hand landmark and gesture models."""

    # Maximum number of hands the models look for
    NUM_HANDS = 2

    # Confidence thresholds (0-1)
    MIN_HAND_DETECTION_CONFIDENCE = 0.5
    MIN_HAND_PRESENCE_CONFIDENCE = 0.5
    MIN_TRACKING_CONFIDENCE = 0.5

    # Model bundles, looked up in MODELS_DIR
    MODELS_DIR = "models"
    LANDMARK_MODEL = "hand_landmarker.task"
    GESTURE_MODEL = "gesture_recognizer.task"

    # Stub backend output
    STUB_LANDMARK_COUNT = 21
    STUB_CONFIDENCE = 0.8
    STUB_GESTURE = "Open_Palm"
    STUB_GESTURE_SCORE = 0.85


# ==================== Stabilizer Configuration ====================
class StabilizerConfig:
    """Exponential smoothing weights. Fixed: the filter is a single-pole low-pass with constant decay."""

    CURRENT_WEIGHT = 0.7
    HISTORY_WEIGHT = 0.3


# ==================== Worker Configuration ====================
class WorkerConfig:
    """Configuration for background threads."""

    # Frames waiting for inference (older frames are dropped)
    FRAME_QUEUE_SIZE = 1

    # Timeout for queue operations (seconds)
    QUEUE_TIMEOUT = 0.1

    # Thread join timeout on shutdown (seconds)
    THREAD_SHUTDOWN_TIMEOUT = 2.0


# ==================== Performance Configuration ====================
class PerformanceConfig:
    """Processing time measurement."""

    # Number of frames averaged; stats are logged every WINDOW frames
    WINDOW = 30


# ==================== UI Configuration ====================
class UIConfig:
    """Colors (BGR) and sizes used by the overlay renderer."""

    WINDOW_NAME = "handmark"

    COLOR_RED = (0, 0, 255)
    COLOR_WHITE = (255, 255, 255)
    COLOR_GREEN = (0, 255, 0)
    COLOR_YELLOW = (0, 255, 255)
    COLOR_CYAN = (255, 255, 0)
    COLOR_BLACK = (0, 0, 0)

    LANDMARK_RADIUS = 5
    SHADOW_RADIUS = 7

    # Opacity of the shadow disc drawn under each landmark
    SHADOW_ALPHA = 0.8

    FONT_SCALE = 0.6
    FONT_THICKNESS = 2
