"""
Configuration - tunable constants and the runtime configuration loaded from the command line.
"""

from .config import Backend, Config, Platform
from .settings import (
    CameraConfig,
    DetectorConfig,
    PerformanceConfig,
    StabilizerConfig,
    UIConfig,
    WorkerConfig,
)

__all__ = [
    "Backend",
    "Config",
    "Platform",
    "CameraConfig",
    "DetectorConfig",
    "PerformanceConfig",
    "StabilizerConfig",
    "UIConfig",
    "WorkerConfig",
]
