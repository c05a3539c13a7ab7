"""
UI Display Module - drawing the landmark overlay and status text on the preview.

Every drawing function takes a `RenderContext` owned by the caller; nothing is
cached at module level.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import cv2 as cv
import numpy as np
import numpy.typing as npt

from handmark.config import UIConfig
from handmark.detection import GestureCategory, InferenceMode
from handmark.stabilization import PlatformGeometry
from handmark.utils import ScreenPoint

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass
class RenderContext:
    """
    Drawing styles for one preview surface.
    """

    landmark_color: Color = UIConfig.COLOR_RED
    shadow_color: Color = UIConfig.COLOR_WHITE
    landmark_radius: int = UIConfig.LANDMARK_RADIUS
    shadow_radius: int = UIConfig.SHADOW_RADIUS
    shadow_alpha: float = UIConfig.SHADOW_ALPHA
    text_color: Color = UIConfig.COLOR_YELLOW
    status_color: Color = UIConfig.COLOR_GREEN
    font_scale: float = UIConfig.FONT_SCALE
    font_thickness: int = UIConfig.FONT_THICKNESS
    antialias: bool = False


def _in_bounds(img: npt.NDArray[np.uint8], pixel: Tuple[int, int], margin: int) -> bool:
    h, w = img.shape[:2]
    x, y = pixel
    return -margin <= x < w + margin and -margin <= y < h + margin


def draw_landmarks(
    img: npt.NDArray[np.uint8], points: Sequence[ScreenPoint], ctx: RenderContext
) -> npt.NDArray[np.uint8]:
    """
    Draw each landmark as a red disc over a white shadow disc, in place.
    Points outside the image are skipped.

    :returns: The same image, for chaining.
    """
    if not points:
        return img

    line_type = cv.LINE_AA if ctx.antialias else cv.LINE_8
    pixels = [p.pixel for p in points if _in_bounds(img, p.pixel, ctx.shadow_radius)]
    if not pixels:
        return img

    if ctx.shadow_alpha >= 1.0:
        for px in pixels:
            cv.circle(img, px, ctx.shadow_radius, ctx.shadow_color, -1, line_type)
    else:
        shadow = img.copy()
        for px in pixels:
            cv.circle(shadow, px, ctx.shadow_radius, ctx.shadow_color, -1, line_type)
        cv.addWeighted(shadow, ctx.shadow_alpha, img, 1.0 - ctx.shadow_alpha, 0, dst=img)

    for px in pixels:
        cv.circle(img, px, ctx.landmark_radius, ctx.landmark_color, -1, line_type)

    return img


def prepare_preview(
    img: npt.NDArray[np.uint8], display_width: float, geometry: PlatformGeometry
) -> npt.NDArray[np.uint8]:
    """
    Bring a camera frame into the display space the landmarks are transformed to:
    flipped horizontally when the geometry mirrors x, and resized to
    `display_width` x `display_width * aspect_multiplier`.

    Always returns a new image, the camera frame is left untouched.
    """
    out = cv.flip(img, 1) if geometry.mirror else img.copy()

    width = int(round(display_width))
    height = int(round(display_width * geometry.aspect_multiplier))
    if width <= 0 or height <= 0:
        # Unknown display size, nothing sensible to scale to
        return out

    if (width, height) != (out.shape[1], out.shape[0]):
        out = cv.resize(out, (width, height), interpolation=cv.INTER_LINEAR)
    return out


def gesture_text(gesture: Optional[GestureCategory]) -> str:
    if gesture is None or not gesture.category_name:
        return "Detecting gesture..."
    return f"Gesture: {gesture.category_name} ({gesture.score * 100:.1f}%)"


def draw_gesture_label(
    img: npt.NDArray[np.uint8], gesture: Optional[GestureCategory], ctx: RenderContext
) -> npt.NDArray[np.uint8]:
    """
    Draw the gesture label in a dark box at the bottom of the image.
    """
    text = gesture_text(gesture)
    (tw, th), baseline = cv.getTextSize(text, cv.FONT_HERSHEY_SIMPLEX, ctx.font_scale, ctx.font_thickness)
    h = img.shape[0]
    x, y = 10, h - 15

    cv.rectangle(img, (x - 6, y - th - 8), (x + tw + 6, y + baseline + 4), UIConfig.COLOR_BLACK, -1)
    cv.putText(img, text, (x, y), cv.FONT_HERSHEY_SIMPLEX, ctx.font_scale,
               ctx.text_color, ctx.font_thickness)
    return img


def draw_status(img, session, ctx, fps=0.0):
    """
    Draw model, recording and mode state in the top-left corner.

    Args:
        img: Image to draw on
        session (OverlaySession): Session whose state is shown
        ctx (RenderContext): Drawing styles
        fps (float): Processing FPS, not shown when 0
    """
    model_text = "Model Ready" if session.is_model_loaded else "Loading..."
    model_color = ctx.status_color if session.is_model_loaded else UIConfig.COLOR_RED
    cv.putText(img, model_text, (10, 30), cv.FONT_HERSHEY_SIMPLEX,
               ctx.font_scale, model_color, ctx.font_thickness)

    rec_text = f"{'REC' if session.is_recording else 'STOPPED'} - {session.mode} mode"
    cv.putText(img, rec_text, (10, 60), cv.FONT_HERSHEY_SIMPLEX,
               ctx.font_scale, ctx.status_color, ctx.font_thickness)

    if fps > 0:
        cv.putText(img, f"Processing: {fps:.1f} FPS", (10, 90), cv.FONT_HERSHEY_SIMPLEX,
                   ctx.font_scale, UIConfig.COLOR_CYAN, ctx.font_thickness)
    return img


def render_overlay(img, overlay, session, ctx):
    """
    Draw the whole overlay for one preview frame.

    Args:
        img: Camera frame, drawn on in place
        overlay (OverlayFrame or None): Latest processed frame
        session (OverlaySession): Session state for the status text
        ctx (RenderContext): Drawing styles

    Returns:
        The drawn image
    """
    if overlay is not None and session.is_recording:
        draw_landmarks(img, overlay.points, ctx)
        if overlay.mode == InferenceMode.GESTURE:
            draw_gesture_label(img, overlay.gesture, ctx)

    draw_status(img, session, ctx, session.stats.fps)
    return img
