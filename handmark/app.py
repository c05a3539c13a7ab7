"""
handmark - live hand landmark and gesture overlay.

This is the main entry point: it opens the camera, runs frames through the
overlay session on a worker thread and shows the smoothed landmarks on the
preview window.
"""

import logging
import signal
import threading

import cv2 as cv

from handmark.config import Config, WorkerConfig
from handmark.config.args_parser import get_args
from handmark.core import InferenceWorker, OverlaySession
from handmark.core.display_thread import PreviewWindow
from handmark.core.utils import select_camera_port, setup_camera
from handmark.detection import InferenceMode, create_detector
from handmark.stabilization import PlatformGeometry
from handmark.ui import RenderContext, prepare_preview, render_overlay

logger = logging.getLogger(__name__)

KEY_ESC = 27
KEY_SPACE = ord(' ')


def setup_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def setup_signal_handler(stop_event):
    """
    Setup signal handler for graceful shutdown.

    Args:
        stop_event (threading.Event): Event to signal on interrupt
    """
    def signal_handler(sig, frame):
        logger.info("Signal received, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def initialize_system(config):
    """
    Create the detector, the session and load the startup model.

    Args:
        config (Config): Runtime configuration

    Returns:
        OverlaySession: Session ready to be started
    """
    logger.info("Initializing handmark...")

    detector = create_detector(config.backend, config.models_dir)
    session = OverlaySession(detector, InferenceMode(config.mode))

    if not session.load_model():
        logger.warning("Model could not be loaded, frames will not be processed until a mode switch succeeds")

    logger.info("System initialization complete")
    return session


def initialize_display(headless=False):
    """
    Start the preview window thread.

    Returns:
        PreviewWindow or None: None in headless mode
    """
    if headless:
        logger.info("Headless mode enabled - display disabled")
        return None

    window = PreviewWindow()
    window.open()
    return window


def handle_keyboard_input(key, session, worker, stop_event):
    """
    Handle keyboard input for user controls.

    Returns:
        bool: True if should continue, False if should exit
    """
    if key == KEY_ESC or key == ord('q'):
        logger.info('Exiting...')
        stop_event.set()
        return False

    if key == KEY_SPACE:
        if not session.toggle():
            worker.clear()
    elif key == ord('l'):
        if session.switch_mode(InferenceMode.LANDMARK):
            worker.clear()
    elif key == ord('g'):
        if session.switch_mode(InferenceMode.GESTURE):
            worker.clear()

    return True


def run_main_loop(camera, session, worker, config, stop_event):
    """
    Main processing loop.

    Args:
        camera (CameraThread): Frame source
        session (OverlaySession): Session processing the frames
        worker (InferenceWorker): Background inference worker
        config (Config): Runtime configuration
        stop_event: Event for shutdown coordination
    """
    window = initialize_display(config.headless)
    ctx = RenderContext()

    if config.headless:
        # Nobody can press space without a window
        session.start()

    logger.info(f"Starting main loop (headless={config.headless})")

    try:
        while camera.isOpened() and not stop_event.is_set():
            frame = camera.read_frame()
            if frame is None:
                logger.error("No camera image returned")
                break

            display_width = config.display_width or frame.width
            geometry = PlatformGeometry.for_platform(
                config.platform, frame.width, frame.height, config.mirror
            )
            worker.submit(frame, display_width, geometry)

            if window is None:
                continue

            preview = prepare_preview(frame.image, display_width, geometry)
            window.show(render_overlay(preview, worker.get_latest(), session, ctx))

            for key in window.pending_keys():
                if not handle_keyboard_input(key, session, worker, stop_event):
                    return
    finally:
        if window:
            window.close()


def cleanup(camera, session, worker):
    """
    Clean up resources and shut down gracefully.
    """
    logger.info("Cleaning up resources...")

    session.stop()

    worker.stop()
    worker.join(timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT)

    camera.release()
    session.detector.close()
    cv.destroyAllWindows()

    logger.info("Cleanup complete")


def main(argv=None):
    config = Config()
    config.load_args(get_args(argv))
    setup_logging(config.debug)

    session = initialize_system(config)

    cam_port = config.camera if config.camera is not None else select_camera_port()
    camera = setup_camera(cam_port)

    stop_event = threading.Event()
    setup_signal_handler(stop_event)

    worker = InferenceWorker(session, stop_event)
    worker.start()

    if not config.headless:
        logger.info("Controls: space=start/stop, 'l'=landmark mode, 'g'=gesture mode, 'q'=quit")
    else:
        logger.info("Running in headless mode. Send SIGINT (Ctrl+C) or SIGTERM to stop.")

    try:
        run_main_loop(camera, session, worker, config, stop_event)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received, shutting down...")
        stop_event.set()
    finally:
        cleanup(camera, session, worker)
