"""
Background inference worker.

Detection runs off the capture loop: the main thread pushes the latest frame,
the worker runs it through the overlay session and publishes the resulting
`OverlayFrame` for the renderer.
"""

import logging
import queue
import threading

from handmark.config import WorkerConfig

logger = logging.getLogger(__name__)


class FrameJob:
    """A frame waiting for inference, with the display geometry it must be rendered with."""

    def __init__(self, frame, display_width, geometry):
        self.frame = frame
        self.display_width = display_width
        self.geometry = geometry


class InferenceWorker(threading.Thread):
    """
    Background worker thread running frames through an `OverlaySession`.

    The input queue is tiny on purpose: `submit` replaces a pending frame instead of
    waiting, so the worker always picks up the freshest frame.
    """

    def __init__(self, session, stop_event=None, queue_maxsize=WorkerConfig.FRAME_QUEUE_SIZE):
        """
        Initialize the inference worker.

        Args:
            session (OverlaySession): Session processing the frames
            stop_event (threading.Event): Event to signal shutdown
            queue_maxsize (int): Maximum number of pending frames
        """
        super().__init__(daemon=True, name="InferenceWorker")
        self.session = session
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.in_queue = queue.Queue(maxsize=queue_maxsize)
        self.lock = threading.Lock()
        self.latest = None
        self.dropped = 0

    def submit(self, frame, display_width, geometry):
        """
        Queue a frame for inference, replacing the pending one if any (non-blocking).
        """
        job = FrameJob(frame, display_width, geometry)
        try:
            self.in_queue.put_nowait(job)
        except queue.Full:
            try:
                self.in_queue.get_nowait()
                self.dropped += 1
            except queue.Empty:
                pass
            try:
                self.in_queue.put_nowait(job)
            except queue.Full:
                self.dropped += 1

    def get_latest(self):
        """Latest OverlayFrame (None before the first processed frame or after a clear)."""
        with self.lock:
            return self.latest

    def clear(self):
        """Forget the published overlay, e.g. after recording stopped."""
        with self.lock:
            self.latest = None

    def process(self, job):
        """
        Run one job through the session and publish the result.
        Frames that were not processed leave the published overlay unchanged.
        """
        overlay = self.session.process_frame(job.frame, job.display_width, job.geometry)
        if overlay is not None:
            with self.lock:
                self.latest = overlay
        return overlay

    def run(self):
        logger.info("InferenceWorker started")

        while not self.stop_event.is_set():
            try:
                job = self.in_queue.get(timeout=WorkerConfig.QUEUE_TIMEOUT)
            except queue.Empty:
                continue

            try:
                self.process(job)
            except Exception as e:
                logger.error(f"Inference worker error: {e}", exc_info=True)

        logger.info("InferenceWorker stopped")

    def stop(self):
        """Signal the worker to stop."""
        logger.info("Stopping InferenceWorker...")
        self.stop_event.set()
