"""
Camera helpers for handmark.
"""

import logging

import cv2 as cv

from handmark.config import CameraConfig
from handmark.core.camera_thread import CameraThread

logger = logging.getLogger(__name__)


# ==================== Camera Management ====================

def list_camera_ports(max_failures=3):
    """
    Test camera ports and return the ones that read images.

    Probing stops after `max_failures` consecutive ports fail to open.

    Returns:
        list: tuples of (port, height, width)
    """
    working_ports = []
    failures = 0
    dev_port = 0

    while failures < max_failures:
        camera = cv.VideoCapture(dev_port)
        if not camera.isOpened():
            failures += 1
            logger.debug(f"Port {dev_port} is not working.")
        else:
            failures = 0
            is_reading, _ = camera.read()
            w = camera.get(cv.CAP_PROP_FRAME_WIDTH)
            h = camera.get(cv.CAP_PROP_FRAME_HEIGHT)
            if is_reading:
                logger.info(f"Port {dev_port} is working and reads images ({h} x {w})")
                working_ports.append((dev_port, h, w))
            else:
                logger.info(f"Port {dev_port} for camera ({h} x {w}) is present but does not read.")
        camera.release()
        dev_port += 1

    return working_ports


def select_camera_port():
    """
    Pick the first working camera port, 0 if none reads images.
    """
    working_ports = list_camera_ports()

    if working_ports:
        port = working_ports[0][0]
        if len(working_ports) > 1:
            logger.info(f"{len(working_ports)} cameras detected, using port {port} (use --camera to choose)")
        else:
            logger.info(f"Auto-selected camera port {port}")
        return port

    logger.warning("No working cameras detected, using default port 0")
    return 0


def setup_camera(cam_port):
    """
    Open and configure the camera.

    Returns:
        CameraThread: frame source over the configured capture
    """
    logger.info(f"Setting up camera on port {cam_port}")

    if CameraConfig.BACKEND is not None:
        cap = cv.VideoCapture(cam_port, CameraConfig.BACKEND)
    else:
        cap = cv.VideoCapture(cam_port)

    # Buffer size first, to reduce latency
    cap.set(cv.CAP_PROP_BUFFERSIZE, CameraConfig.BUFFER_SIZE)
    cap.set(cv.CAP_PROP_FPS, CameraConfig.TARGET_FPS)
    cap.set(cv.CAP_PROP_FRAME_WIDTH, CameraConfig.DEFAULT_WIDTH)
    cap.set(cv.CAP_PROP_FRAME_HEIGHT, CameraConfig.DEFAULT_HEIGHT)

    logger.info(
        f"Camera configured: {cap.get(cv.CAP_PROP_FRAME_WIDTH):.0f}x{cap.get(cv.CAP_PROP_FRAME_HEIGHT):.0f} "
        f"@ {cap.get(cv.CAP_PROP_FPS):.1f}fps"
    )

    if not cap.isOpened():
        logger.error(f"Camera on port {cam_port} could not be opened")

    return CameraThread(cap, threaded=CameraConfig.USE_THREADED_CAPTURE)
