"""
Stabilization - landmark smoothing and the normalized-to-screen coordinate transform.
"""

from .geometry import PlatformGeometry, to_screen, transform
from .stabilizer import LandmarkStabilizer, StabilizerState

__all__ = [
    "PlatformGeometry",
    "to_screen",
    "transform",
    "LandmarkStabilizer",
    "StabilizerState",
]
