"""
Tests for the landmark stabilizer.
"""

import logging

import pytest

from handmark.detection import DetectionResult
from handmark.stabilization import LandmarkStabilizer, PlatformGeometry, StabilizerState
from handmark.utils import Point3D, ScreenPoint

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# W=1, R=1, no mirror: the transform is the identity on x and y
IDENTITY = PlatformGeometry(mirror=False, aspect_multiplier=1.0)


def detected(*coords):
    return DetectionResult(points=tuple(Point3D(*c) for c in coords), confidence=0.9, detected=True)


def assert_points(actual, expected):
    assert len(actual) == len(expected)
    for p, e in zip(actual, expected):
        assert p.coords == pytest.approx(e, abs=1e-9)


def test_empty_detection_resets():
    stabilizer = LandmarkStabilizer()
    stabilizer.smooth([ScreenPoint(1, 2), ScreenPoint(3, 4)])
    assert stabilizer.state == StabilizerState.TRACKING

    assert stabilizer.smooth([]) == []
    assert stabilizer.state == StabilizerState.EMPTY
    assert stabilizer.previous_points == ()

    # From Empty as well
    assert stabilizer.smooth([]) == []
    assert stabilizer.state == StabilizerState.EMPTY


def test_first_frame_is_not_smoothed():
    stabilizer = LandmarkStabilizer()
    points = [ScreenPoint(10.0, 20.0, 0.1), ScreenPoint(30.0, 40.0, -0.2)]

    out = stabilizer.smooth(points)

    assert_points(out, [p.coords for p in points])
    assert stabilizer.state == StabilizerState.TRACKING


def test_same_length_is_convex_combination():
    stabilizer = LandmarkStabilizer()
    previous = [ScreenPoint(100.0, 50.0, 0.5), ScreenPoint(0.0, 10.0, -1.0), ScreenPoint(7.0, 3.0, 0.0)]
    current = [ScreenPoint(110.0, 40.0, 0.0), ScreenPoint(20.0, 0.0, 1.0), ScreenPoint(7.0, 3.0, 0.3)]

    stabilizer.smooth(previous)
    out = stabilizer.smooth(current)

    expected = [
        tuple(0.7 * c + 0.3 * p for c, p in zip(cur.coords, prev.coords))
        for cur, prev in zip(current, previous)
    ]
    assert_points(out, expected)
    assert_points(stabilizer.previous_points, expected)


def test_length_change_bypasses_smoothing():
    stabilizer = LandmarkStabilizer()
    stabilizer.smooth([ScreenPoint(0, 0), ScreenPoint(1, 1), ScreenPoint(2, 2)])

    current = [ScreenPoint(50.0, 60.0), ScreenPoint(70.0, 80.0)]
    out = stabilizer.smooth(current)

    assert_points(out, [p.coords for p in current])
    assert len(stabilizer.previous_points) == 2

    # The next frame of the new length is smoothed against it
    out = stabilizer.smooth([ScreenPoint(60.0, 60.0), ScreenPoint(70.0, 90.0)])
    assert_points(out, [(57.0, 60.0, 0.0), (70.0, 87.0, 0.0)])


def test_steady_input_converges():
    stabilizer = LandmarkStabilizer()
    stabilizer.smooth([ScreenPoint(0.0, 0.0), ScreenPoint(100.0, 100.0)])

    target = [ScreenPoint(40.0, 25.0, 0.2), ScreenPoint(80.0, 10.0, -0.1)]
    out = []
    for _ in range(60):
        out = stabilizer.smooth(target)

    assert_points(out, [p.coords for p in target])

    # Once reached, the fixed point is kept exactly
    assert_points(stabilizer.smooth(target), [p.coords for p in target])


def test_scenario():
    stabilizer = LandmarkStabilizer()
    assert stabilizer.state == StabilizerState.EMPTY

    out = stabilizer.process(detected((0.5, 0.5, 0), (0.6, 0.6, 0)), IDENTITY, 1.0)
    assert_points(out, [(0.5, 0.5, 0.0), (0.6, 0.6, 0.0)])
    assert stabilizer.state == StabilizerState.TRACKING
    assert len(stabilizer.previous_points) == 2

    out = stabilizer.process(detected((0.6, 0.6, 0), (0.6, 0.6, 0)), IDENTITY, 1.0)
    assert_points(out, [(0.57, 0.57, 0.0), (0.6, 0.6, 0.0)])

    out = stabilizer.process(DetectionResult.empty(), IDENTITY, 1.0)
    assert out == []
    assert stabilizer.state == StabilizerState.EMPTY


def test_process_drops_points_outside_the_frame():
    stabilizer = LandmarkStabilizer()
    result = detected((0.5, 0.5, 0), (1.2, 0.5, 0), (0.25, -0.1, 0), (0.25, 0.75, 0))

    out = stabilizer.process(result, IDENTITY, 100.0)

    assert_points(out, [(50.0, 50.0, 0.0), (25.0, 75.0, 0.0)])


def test_process_with_only_invalid_points_resets():
    stabilizer = LandmarkStabilizer()
    stabilizer.process(detected((0.5, 0.5, 0)), IDENTITY, 100.0)

    out = stabilizer.process(detected((1.5, 0.5, 0)), IDENTITY, 100.0)

    assert out == []
    assert stabilizer.state == StabilizerState.EMPTY


def test_not_detected_resets_even_with_points():
    stabilizer = LandmarkStabilizer()
    stabilizer.process(detected((0.5, 0.5, 0)), IDENTITY, 100.0)

    result = DetectionResult(points=(Point3D(0.5, 0.5),), detected=False)
    assert stabilizer.process(result, IDENTITY, 100.0) == []
    assert stabilizer.state == StabilizerState.EMPTY


def test_process_applies_geometry():
    stabilizer = LandmarkStabilizer()
    geometry = PlatformGeometry(mirror=True, aspect_multiplier=0.75)

    out = stabilizer.process(detected((0.25, 0.5, 0.3)), geometry, 640.0)

    assert_points(out, [(480.0, 240.0, 0.3)])


def test_reset():
    stabilizer = LandmarkStabilizer()
    stabilizer.smooth([ScreenPoint(10.0, 10.0)])

    stabilizer.reset()
    assert stabilizer.state == StabilizerState.EMPTY

    # The next frame passes through unsmoothed
    out = stabilizer.smooth([ScreenPoint(20.0, 30.0)])
    assert_points(out, [(20.0, 30.0, 0.0)])
