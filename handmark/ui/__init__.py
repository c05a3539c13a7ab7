"""
UI Module - overlay rendering.

This module provides:
- The caller-owned render context
- Preview preparation (mirroring and scaling to the display size)
- Landmark, gesture label and status drawing
"""

from .display import (
    RenderContext,
    draw_gesture_label,
    draw_landmarks,
    draw_status,
    prepare_preview,
    render_overlay,
)

__all__ = [
    'RenderContext',
    'draw_gesture_label',
    'draw_landmarks',
    'draw_status',
    'prepare_preview',
    'render_overlay',
]
