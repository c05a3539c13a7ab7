"""
Camera frame source.

`CameraThread` wraps an OpenCV capture and hands out `Frame` objects stamped
with their capture time and a sequence number. In threaded mode a background
thread keeps grabbing so the device buffer never goes stale, and `read_frame`
waits for a frame newer than the last one returned: the main loop never runs
the same image through the session twice.
"""

import logging
import threading
import time
from typing import Optional

from handmark.config import CameraConfig
from handmark.detection import Frame

logger = logging.getLogger(__name__)


class CameraThread:
    """
    Frame source over a `cv.VideoCapture`.

    :param cap: Opened OpenCV capture.
    :param threaded: Grab on a background thread. When False, `read_frame` reads the device directly.
    """

    def __init__(self, cap, threaded: bool = CameraConfig.USE_THREADED_CAPTURE) -> None:
        self.cap = cap
        self.threaded = threaded

        self._frame: Optional[Frame] = None
        self._seq = 0
        self._last_returned = 0
        self._failures = 0
        self._stopped = threading.Event()
        self._new_frame = threading.Condition()

        self._fps_count = 0
        self._fps_start = time.time()
        self.fps = 0.0

        self._thread: Optional[threading.Thread] = None
        if threaded:
            self._thread = threading.Thread(target=self._grab_loop, daemon=True, name="CameraThread")
            self._thread.start()

    @property
    def frames_captured(self) -> int:
        return self._seq

    def isOpened(self) -> bool:
        return self.cap.isOpened() and not self._stopped.is_set()

    def _grab(self) -> Optional[Frame]:
        ret, image = self.cap.read()
        if not ret or image is None:
            self._failures += 1
            return None

        self._failures = 0
        self._fps_count += 1
        elapsed = time.time() - self._fps_start
        if elapsed >= 1.0:
            self.fps = self._fps_count / elapsed
            self._fps_count = 0
            self._fps_start = time.time()

        return Frame.from_image(image, timestamp=time.time())

    def _grab_loop(self) -> None:
        logger.info("CameraThread started")

        while not self._stopped.is_set():
            frame = self._grab()
            if frame is None:
                if self._failures == 1:
                    logger.warning("Camera read failed")
                # Device hiccup, don't spin
                time.sleep(0.01)
                continue

            with self._new_frame:
                self._frame = frame
                self._seq += 1
                self._new_frame.notify_all()

        logger.info("CameraThread stopped")

    def read_frame(self, timeout: float = CameraConfig.READ_TIMEOUT) -> Optional[Frame]:
        """
        Return the next frame, waiting at most `timeout` seconds for one newer than the last returned.
        Returns None when no new frame arrived in time.
        """
        if not self.threaded:
            frame = self._grab()
            if frame is not None:
                self._seq += 1
            return frame

        with self._new_frame:
            if not self._new_frame.wait_for(
                lambda: self._seq > self._last_returned or self._stopped.is_set(), timeout
            ):
                return None
            if self._stopped.is_set() or self._seq == self._last_returned:
                return None
            self._last_returned = self._seq
            return self._frame

    def release(self) -> None:
        """
        Stop grabbing and release the device.
        """
        self._stopped.set()
        with self._new_frame:
            self._new_frame.notify_all()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
        self.cap.release()
        logger.info(f"Camera released after {self._seq} frames")
