"""
OpenCVUI — console front-end: display sink plus all cv2 drawing.

The pipeline never calls cv2 directly — it pushes updates here and the main
loop asks for a render once per frame.
"""
from __future__ import annotations
from typing import Any, Optional

import cv2

from domain.enums import Gesture, Outcome
from domain.models import RoundOutcome, ScoreTally
from app.config import AppConfig

_GESTURE_COLORS = {
    Gesture.ROCK:     (0,   0,  255),
    Gesture.PAPER:    (0,   255,  0),
    Gesture.SCISSORS: (255, 255,  0),
    Gesture.UNKNOWN:  (128, 128, 128),
}
_OUTCOME_COLORS = {
    Outcome.WIN:  (80,  220,  80),
    Outcome.DRAW: (200, 200, 200),
    Outcome.LOSS: (60,   60, 220),
}
_DEFAULT_COLOR = (255, 255, 255)

KEY_ESC = 27


class OpenCVUI:
    """Keeps the latest pipeline updates and draws them over the frame."""

    def __init__(self, config: AppConfig) -> None:
        self._cfg     = config
        self._name    = config.window_name
        self._status  = "Show a gesture to play!"
        self._gesture = Gesture.UNKNOWN
        self._outcome: Optional[RoundOutcome] = None
        self._tally   = ScoreTally()

    # ---- DisplaySink ----------------------------------------------------
    def on_status(self, message: str) -> None:
        self._status = message

    def on_log(self, message: str) -> None:
        print(message)

    def on_gesture(self, gesture: Gesture) -> None:
        self._gesture = gesture

    def on_round(self, outcome: Optional[RoundOutcome]) -> None:
        self._outcome = outcome

    def on_score(self, tally: ScoreTally) -> None:
        self._tally = tally

    # ------------------------------------------------------------------
    def render(self, frame: Any, cooldown_remaining: float = 0.0) -> None:
        """Flip frame, draw overlays, show window."""
        if self._cfg.mirror:
            frame = cv2.flip(frame, 1)
        h, w = frame.shape[:2]

        cv2.putText(frame, self._name,
                    (20, 40), cv2.FONT_HERSHEY_SIMPLEX, 1.0, _DEFAULT_COLOR, 2)
        color = _GESTURE_COLORS.get(self._gesture, _DEFAULT_COLOR)
        cv2.putText(frame, self._status,
                    (20, 75), cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)

        you = self._outcome.player_move.value if self._outcome else "-"
        cpu = self._outcome.cpu_move.value if self._outcome else "-"
        cv2.putText(frame, f"You: {you}   CPU: {cpu}",
                    (20, 110), cv2.FONT_HERSHEY_SIMPLEX, 0.7, _DEFAULT_COLOR, 2)

        if self._outcome is not None:
            cv2.putText(frame, self._outcome.message,
                        (20, 155), cv2.FONT_HERSHEY_DUPLEX, 1.2,
                        _OUTCOME_COLORS.get(self._outcome.result, _DEFAULT_COLOR), 2)

        t = self._tally
        cv2.putText(frame, f"W {t.wins}  D {t.draws}  L {t.losses}",
                    (20, h - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.7, _DEFAULT_COLOR, 2)

        if cooldown_remaining > 0:
            cv2.putText(frame, f"Next round in {cooldown_remaining:.1f}s",
                        (w - 260, 40), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (150, 150, 150), 1)

        cv2.putText(frame, "R reset  C camera  ESC quit",
                    (w - 300, h - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (200, 200, 200), 1)

        cv2.imshow(self._name, frame)

    def poll_key(self) -> int:
        """Key pressed since the last frame, or -1."""
        key = cv2.waitKey(1) & 0xFF
        return -1 if key == 0xFF else key

    def close(self) -> None:
        cv2.destroyAllWindows()
