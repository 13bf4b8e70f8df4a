"""
GestureStabilizer — temporal filter that turns noisy per-frame gestures
into a single confirmed gesture.

The raw classification flickers while a hand moves into position, so a move
only counts once the same gesture has been seen on `threshold` consecutive
frames.
"""
from __future__ import annotations
from typing import Optional

from domain.enums import Gesture
from domain.models import StabilizationState


class GestureStabilizer:
    """
    Counts consecutive identical gestures and fires once the run is long
    enough.

    Parameters
    ----------
    threshold : int
        Consecutive identical frames needed to confirm a gesture. The default
        of 6 is roughly 600 ms at the ~10 fps a landmark model delivers.
    """

    def __init__(self, threshold: int = 6) -> None:
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")
        self._threshold = threshold
        self._candidate: Gesture = Gesture.UNKNOWN
        self._count: int = 0

    # ------------------------------------------------------------------
    def update(self, gesture: Gesture) -> Optional[Gesture]:
        """
        Feed the gesture classified for one frame.

        Returns the confirmed gesture on the frame where the run reaches the
        threshold, None otherwise. UNKNOWN takes part in the run comparison
        but can never be confirmed.
        """
        if gesture == self._candidate:
            self._count += 1
        else:
            self._candidate = gesture
            self._count = 1

        if gesture.playable and self._count == self._threshold:
            return gesture
        return None

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def candidate(self) -> Gesture:
        return self._candidate

    @property
    def count(self) -> int:
        return self._count

    @property
    def state(self) -> StabilizationState:
        return StabilizationState(self._candidate, self._count)

    def reset(self) -> None:
        self._candidate = Gesture.UNKNOWN
        self._count = 0
