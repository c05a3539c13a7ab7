"""
Conversion of MediaPipe Tasks results to `DetectionResult`.

Kept apart from the backend so the parsing rules can be exercised without the models.
Both functions only rely on the attribute names of the Tasks result objects:
`hand_landmarks` (lists of normalized landmarks with x, y, z), `handedness` and
`gestures` (lists of categories with category_name and score).
"""

from typing import Any, Iterable, List, Tuple

from handmark.detection.types import DetectionResult, GestureCategory
from handmark.utils.coords import Point3D


def to_point(landmark: Any) -> Point3D:
    return Point3D(float(landmark.x), float(landmark.y), float(landmark.z))


def to_categories(categories: Iterable[Any]) -> Tuple[GestureCategory, ...]:
    return tuple(
        GestureCategory(category_name=str(c.category_name or ""), score=float(c.score or 0.0))
        for c in categories
    )


def parse_landmark_result(result: Any) -> DetectionResult:
    """
    Parse a `HandLandmarkerResult`.

    Only the first hand is kept, and only its landmarks lying inside the frame.
    The confidence is the score of the top handedness category of that hand.
    """
    hands = getattr(result, "hand_landmarks", None) or []
    if not hands:
        return DetectionResult.empty()

    points: List[Point3D] = [p for p in map(to_point, hands[0]) if p.is_valid]

    handedness = getattr(result, "handedness", None) or []
    first_handedness = to_categories(handedness[0]) if handedness else ()
    confidence = first_handedness[0].score if first_handedness else 0.0

    return DetectionResult(
        points=tuple(points),
        confidence=confidence,
        detected=True,
        handedness=first_handedness,
    )


def parse_gesture_result(result: Any) -> DetectionResult:
    """
    Parse a `GestureRecognizerResult`.

    The landmarks of the first hand are kept as they are; the gesture and handedness
    categories of all hands are flattened in detector order.
    """
    gestures = getattr(result, "gestures", None) or []
    hands = getattr(result, "hand_landmarks", None) or []
    if not gestures or not hands:
        return DetectionResult.empty()

    categories = tuple(c for hand in gestures for c in to_categories(hand))
    handedness = tuple(
        c for hand in (getattr(result, "handedness", None) or []) for c in to_categories(hand)
    )

    return DetectionResult(
        points=tuple(to_point(lm) for lm in hands[0]),
        confidence=categories[0].score if categories else 0.0,
        detected=True,
        gestures=categories,
        handedness=handedness,
    )
