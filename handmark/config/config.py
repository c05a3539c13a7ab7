import argparse
from enum import Enum
from typing import Optional


class Backend(Enum):
    """
    Available detector backends.
    """

    MEDIAPIPE = "mediapipe"
    STUB = "stub"

    def __str__(self) -> str:
        return self.value


class Platform(Enum):
    """
    Source platforms. Each one delivers camera frames with its own rotation and mirroring convention.
    """

    DESKTOP = "desktop"
    WEB = "web"
    ANDROID = "android"
    IOS = "ios"

    def __str__(self) -> str:
        return self.value


class Config:
    """
    Runtime configuration of the application.
    One instance is created by the entry point and handed to the components that need it.
    """

    def __init__(self) -> None:
        """
        Initialize configuration attributes with default values.
        """

        self.name = "handmark"
        "Name of the application."

        self.debug: bool = False
        "Enable debug logging. Defaults to False."

        self.headless: bool = False
        "Run without a preview window. Defaults to False."

        self.camera: Optional[int] = None
        "Camera port. If None, the port is selected automatically."

        self.backend: Backend = Backend.MEDIAPIPE
        "Detector backend. Defaults to MediaPipe."

        self.models_dir: str = "models"
        "Directory holding the MediaPipe model bundles."

        self.mode: str = "landmark"
        "Inference mode selected at startup."

        self.platform: Platform = Platform.DESKTOP
        "Platform whose frame convention is applied to the display geometry."

        self.mirror: Optional[bool] = None
        "Mirror override. If None, the platform default is used."

        self.display_width: Optional[int] = None
        "Width of the preview in pixels. If None, the frame width is used."

    def load_args(self, args: argparse.Namespace) -> None:
        """
        Load configuration attributes from the command line arguments.
        """
        self.debug = args.debug
        self.headless = args.headless
        self.camera = args.camera
        self.backend = args.backend
        self.models_dir = args.models_dir
        self.mode = args.mode
        self.platform = args.platform
        self.mirror = False if args.no_mirror else None
        self.display_width = args.display_width
