from .buffer import RingBuffer
from .coords import Point3D, ScreenPoint

__all__ = ["RingBuffer", "Point3D", "ScreenPoint"]
