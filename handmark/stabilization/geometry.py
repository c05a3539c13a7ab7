"""
Coordinate transform from normalized landmark space to display pixels.

Frames reach the detector pre-rotated or not depending on the source platform,
so mirroring and the aspect multiplier are computed at runtime by
`PlatformGeometry.for_platform` and injected by the caller on every frame.
"""

from dataclasses import dataclass
from typing import Optional

from handmark.config import Platform
from handmark.utils.coords import Point3D, ScreenPoint


@dataclass(frozen=True)
class PlatformGeometry:
    """
    Display geometry of the current frame.
    """

    mirror: bool
    """Whether the x axis is flipped (front camera previews are shown mirrored)."""

    aspect_multiplier: float
    """Ratio applied on top of the display width to scale the y axis. 0.0 means unknown."""

    @classmethod
    def for_platform(
        cls,
        platform: Platform,
        frame_width: float,
        frame_height: float,
        mirror: Optional[bool] = None,
    ) -> "PlatformGeometry":
        """
        Build the geometry for a frame of the given size coming from `platform`.

        Android delivers frames rotated by 90 degrees, so its ratio is width / height;
        every other platform uses height / width. Web and Android previews are mirrored,
        iOS is not. Desktop webcams are mirrored by default.

        :param mirror: Overrides the platform default when not None.
        """

        if platform == Platform.ANDROID:
            ratio = _safe_ratio(frame_width, frame_height)
        else:
            ratio = _safe_ratio(frame_height, frame_width)

        if mirror is None:
            mirror = platform != Platform.IOS

        return cls(mirror=mirror, aspect_multiplier=ratio)


def _safe_ratio(num: float, den: float) -> float:
    if not num or not den:
        return 0.0
    return float(num) / float(den)


def to_screen(
    point: Point3D, display_width: float, aspect_multiplier: float, mirror: bool
) -> ScreenPoint:
    """
    Map a normalized landmark to display pixels.

    x is mirrored when requested and scaled by the display width; y is scaled by
    the display width times the aspect multiplier. The result is never clamped:
    off-screen handling belongs to the caller. With a zero width or multiplier the
    output degenerates towards (0, 0), so nothing should be rendered before the
    display size is known.
    """
    x = 1.0 - point.x if mirror else point.x
    return ScreenPoint(
        x * display_width,
        point.y * display_width * aspect_multiplier,
        point.z,
    )


def transform(
    point: Point3D, display_width: float, geometry: PlatformGeometry
) -> ScreenPoint:
    """
    Same as `to_screen`, taking the mirroring and the aspect multiplier from `geometry`.
    """
    return to_screen(point, display_width, geometry.aspect_multiplier, geometry.mirror)
