import argparse

from .config import Backend, Platform
from .settings import DetectorConfig

handmark_parser = argparse.ArgumentParser(
    description="handmark, live hand landmark and gesture overlay"
)

handmark_parser.add_argument(
    "--camera",
    help="Camera port. Selected automatically when omitted.",
    type=int,
    default=None,
)
handmark_parser.add_argument(
    "--backend",
    help="Detector backend.",
    type=Backend,
    choices=list(Backend),
    default=Backend.MEDIAPIPE,
)
handmark_parser.add_argument(
    "--models-dir",
    help="Directory with hand_landmarker.task and gesture_recognizer.task.",
    default=DetectorConfig.MODELS_DIR,
)
handmark_parser.add_argument(
    "--mode",
    help="Inference mode at startup.",
    choices=["landmark", "gesture"],
    default="landmark",
)
handmark_parser.add_argument(
    "--platform",
    help="Frame orientation convention used for the display geometry.",
    type=Platform,
    choices=list(Platform),
    default=Platform.DESKTOP,
)
handmark_parser.add_argument(
    "--display-width",
    help="Preview width in pixels (defaults to the frame width).",
    type=int,
    default=None,
)

handmark_parser.add_argument(
    "--no-mirror",
    help="Do not mirror landmarks horizontally.",
    action="store_true",
    default=False,
)
handmark_parser.add_argument(
    "--headless",
    help="Run without a preview window.",
    action="store_true",
    default=False,
)
handmark_parser.add_argument(
    "--debug",
    help="Enable debug logging.",
    action="store_true",
    default=False,
)

get_args = handmark_parser.parse_args
