import threading

import numpy as np

from handmark.core.camera_thread import CameraThread


class FakeCapture:
    """Stands in for cv.VideoCapture: returns numbered 48x64 images, fails on the listed reads."""

    def __init__(self, fail_on=(), delay=0.0):
        self.reads = 0
        self.fail_on = set(fail_on)
        self.delay = delay
        self.released = False

    def isOpened(self):
        return not self.released

    def read(self):
        if self.delay:
            threading.Event().wait(self.delay)
        self.reads += 1
        if self.reads in self.fail_on:
            return False, None
        return True, np.full((48, 64, 3), self.reads % 256, dtype=np.uint8)

    def release(self):
        self.released = True


def test_direct_read():
    camera = CameraThread(FakeCapture(fail_on={2}), threaded=False)

    frame = camera.read_frame()
    assert (frame.width, frame.height) == (64, 48)
    assert frame.timestamp is not None

    assert camera.read_frame() is None
    assert camera.read_frame() is not None
    assert camera.frames_captured == 2

    camera.release()
    assert not camera.isOpened()


def test_threaded_read_returns_new_frames():
    cap = FakeCapture(delay=0.005)
    camera = CameraThread(cap, threaded=True)
    try:
        first = camera.read_frame(timeout=2.0)
        second = camera.read_frame(timeout=2.0)
        assert first is not None and second is not None
        assert second is not first
    finally:
        camera.release()

    assert cap.released
    assert camera.read_frame(timeout=0.05) is None
