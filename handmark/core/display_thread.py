"""
Preview window.

`PreviewWindow` owns the OpenCV window on a background thread: the main loop
hands it rendered images with `show` and collects key presses with
`pending_keys`. Only the newest image is kept; keys are queued so no press is
lost between two polls.
"""

import logging
import queue
import threading
from typing import List, Optional

import cv2 as cv
import numpy as np
import numpy.typing as npt

from handmark.config import UIConfig, WorkerConfig

logger = logging.getLogger(__name__)

NO_KEY = 255


class PreviewWindow:
    """
    Non-blocking preview window with key capture.
    """

    def __init__(self, window_name: str = UIConfig.WINDOW_NAME) -> None:
        self.window_name = window_name
        self.keys: "queue.Queue[int]" = queue.Queue()
        self.frames_shown = 0

        self._image: Optional[npt.NDArray[np.uint8]] = None
        self._image_ready = threading.Condition()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_open(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def open(self) -> None:
        if self.is_open:
            logger.warning("Preview window already open")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="PreviewWindow")
        self._thread.start()
        logger.info(f"Preview window '{self.window_name}' opened")

    def close(self) -> None:
        if not self.is_open:
            return

        self._stop_event.set()
        with self._image_ready:
            self._image_ready.notify_all()
        self._thread.join(timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT)
        logger.info(f"Preview window closed after {self.frames_shown} frames")

    def show(self, image: npt.NDArray[np.uint8]) -> None:
        """
        Replace the image waiting to be shown.
        """
        with self._image_ready:
            self._image = image
            self._image_ready.notify()

    def pending_keys(self) -> List[int]:
        """
        Key codes pressed since the last call, oldest first.
        """
        keys = []
        while True:
            try:
                keys.append(self.keys.get_nowait())
            except queue.Empty:
                return keys

    def _take_image(self) -> Optional[npt.NDArray[np.uint8]]:
        with self._image_ready:
            if self._image is None:
                self._image_ready.wait(timeout=WorkerConfig.QUEUE_TIMEOUT)
            image, self._image = self._image, None
            return image

    def _run(self) -> None:
        cv.namedWindow(self.window_name, cv.WINDOW_NORMAL)

        while not self._stop_event.is_set():
            image = self._take_image()
            if image is not None:
                try:
                    cv.imshow(self.window_name, image)
                    self.frames_shown += 1
                except cv.error as e:
                    logger.error(f"Error showing frame: {e}", exc_info=True)

            # waitKey is what actually refreshes the window
            key = cv.waitKey(1) & 0xFF
            if key != NO_KEY:
                self.keys.put(key)

        cv.destroyWindow(self.window_name)
