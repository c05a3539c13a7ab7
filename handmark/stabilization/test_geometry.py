import pytest

from handmark.config import Platform
from handmark.stabilization import PlatformGeometry, to_screen, transform
from handmark.utils import Point3D


def test_mirror_transform():
    p = Point3D(0.3, 0.4)

    mirrored = to_screen(p, 400, 1.0, mirror=True)
    assert mirrored.x == pytest.approx(280.0)
    assert mirrored.y == pytest.approx(160.0)

    plain = to_screen(p, 400, 1.0, mirror=False)
    assert plain.x == pytest.approx(120.0)
    assert plain.y == pytest.approx(160.0)


def test_y_is_scaled_by_width_and_multiplier():
    p = Point3D(0.5, 0.5, -0.05)
    out = transform(p, 640, PlatformGeometry(mirror=False, aspect_multiplier=480 / 640))

    assert out.x == pytest.approx(320.0)
    assert out.y == pytest.approx(240.0)
    assert out.z == pytest.approx(-0.05)


def test_no_clamping():
    out = to_screen(Point3D(1.5, -0.5), 100, 1.0, mirror=False)
    assert out.x == pytest.approx(150.0)
    assert out.y == pytest.approx(-50.0)


def test_degenerate_geometry():
    p = Point3D(0.3, 0.4)

    assert to_screen(p, 0, 1.0, mirror=False).coords[:2] == (0.0, 0.0)
    assert to_screen(p, 400, 0.0, mirror=False).y == 0.0


@pytest.mark.parametrize(
    "platform, mirror, ratio",
    [
        (Platform.DESKTOP, True, 480 / 640),
        (Platform.WEB, True, 480 / 640),
        (Platform.ANDROID, True, 640 / 480),
        (Platform.IOS, False, 480 / 640),
    ],
)
def test_platform_geometry(platform, mirror, ratio):
    geometry = PlatformGeometry.for_platform(platform, 640, 480)

    assert geometry.mirror is mirror
    assert geometry.aspect_multiplier == pytest.approx(ratio)


def test_platform_mirror_override():
    geometry = PlatformGeometry.for_platform(Platform.DESKTOP, 640, 480, mirror=False)
    assert geometry.mirror is False

    geometry = PlatformGeometry.for_platform(Platform.IOS, 640, 480, mirror=True)
    assert geometry.mirror is True


def test_platform_geometry_unknown_size():
    geometry = PlatformGeometry.for_platform(Platform.DESKTOP, 0, 0)
    assert geometry.aspect_multiplier == 0.0
