"""
Gesture classifier — landmarks in, Gesture out.
No buffer, no timing — just a geometric rule per frame.
"""
from __future__ import annotations
from typing import Dict, Optional

from domain.enums import Gesture
from domain.models import LandmarkList, NUM_LANDMARKS

# ---- finger definition ---------------------------------------------------
# (tip, pip) landmark indices. The thumb is left out on purpose: it is often
# partially occluded and only adds noise to a rock/paper/scissors decision.
FINGERS = {
    "INDEX":  (8, 6),
    "MIDDLE": (12, 10),
    "RING":   (16, 14),
    "PINKY":  (20, 18),
}


def _is_extended(landmarks: LandmarkList, tip: int, pip: int) -> bool:
    # y grows downward, so a raised finger has its tip above the PIP joint
    return landmarks[tip][1] < landmarks[pip][1]


def fingers_extended(landmarks: LandmarkList) -> Dict[str, bool]:
    """
    Per-finger extension flags keyed by finger name.
    Raises IndexError / TypeError on malformed input; classify_gesture()
    is the tolerant entry point.
    """
    return {name: _is_extended(landmarks, tip, pip) for name, (tip, pip) in FINGERS.items()}


def classify_gesture(landmarks: Optional[LandmarkList]) -> Gesture:
    """
    Parameters
    ----------
    landmarks : sequence of (x, y, z) or None
        21 hand landmarks in image coordinates (origin top-left).

    Returns
    -------
    Gesture
        PAPER when all four fingers are up, ROCK when none are,
        SCISSORS for index + middle only, UNKNOWN for anything else
        (including missing or malformed input).
    """
    try:
        if landmarks is None or len(landmarks) < NUM_LANDMARKS:
            return Gesture.UNKNOWN
        ext = fingers_extended(landmarks)
    except (IndexError, KeyError, TypeError):
        return Gesture.UNKNOWN

    extended = sum(ext.values())
    if extended == 4:
        return Gesture.PAPER
    if extended == 0:
        return Gesture.ROCK
    if ext["INDEX"] and ext["MIDDLE"] and not ext["RING"] and not ext["PINKY"]:
        return Gesture.SCISSORS
    return Gesture.UNKNOWN
