"""
FramePump — per-frame driver of the game pipeline.

    source.frame() → tracker.detect() → classify_gesture()
                   → GestureStabilizer → RoundEngine → ScoreKeeper

Design decisions:
  - One frame in flight at a time. A frame submitted while another is still
    being processed is dropped, never queued.
  - While the engine is LOCKED frames are consumed but not classified.
  - Tracker failures are reported and treated as "no hand this frame"; they
    never escape the pump.
  - Every update is pushed to a DisplaySink; nothing is read back from it.
"""
from __future__ import annotations
import threading
from typing import Any, Callable, ContextManager, Optional, Protocol

from domain.enums import Gesture
from domain.models import DisplaySink, LandmarkList, NullSink
from core.gesture_classifier import classify_gesture
from core.round_engine import RoundEngine
from core.state_stabilizer import GestureStabilizer

MSG_READY     = "Show a gesture to play!"
MSG_NO_HAND   = "Show your hand in view"
MSG_DETECTING = "Detecting..."


def _hand_present(landmarks: Any) -> bool:
    """False for None, an empty result, or anything without a length."""
    if landmarks is None:
        return False
    try:
        return len(landmarks) > 0
    except TypeError:
        return False


class FrameSource(Protocol):
    def frame(self) -> ContextManager[Optional[Any]]:
        """Lease one frame; it is released when the context exits."""


class LandmarkDetector(Protocol):
    def detect(self, frame: Any) -> Optional[LandmarkList]:
        """21 landmarks of the first visible hand, or None."""


class FramePump:
    """
    Parameters
    ----------
    source : FrameSource
        Where frames come from (Camera, or a fake in tests).
    tracker : LandmarkDetector
        Hand landmark estimator.
    engine : RoundEngine
    stabilizer : GestureStabilizer
        The same instance the engine resets.
    sink : DisplaySink, optional
    """

    def __init__(
        self,
        source: FrameSource,
        tracker: LandmarkDetector,
        engine: RoundEngine,
        stabilizer: GestureStabilizer,
        sink: Optional[DisplaySink] = None,
    ) -> None:
        self._source = source
        self._tracker = tracker
        self._engine = engine
        self._stabilizer = stabilizer
        self._sink: DisplaySink = sink or NullSink()
        self._busy = threading.Lock()
        self._prev_gesture: Optional[Gesture] = None
        self.dropped_frames = 0

    # ------------------------------------------------------------------
    # Frame intake
    # ------------------------------------------------------------------
    def step(self, on_frame: Optional[Callable[[Any], None]] = None) -> bool:
        """
        Pull one frame from the source and process it.

        Parameters
        ----------
        on_frame : callable, optional
            Called with the frame after processing, while the lease is still
            held (front-ends render or copy it here).

        Returns
        -------
        bool
            False when the source gave no frame.
        """
        with self._source.frame() as frame:
            if frame is None:
                return False
            self.submit(frame)
            if on_frame is not None:
                on_frame(frame)
            return True

    def submit(self, frame: Any) -> bool:
        """
        Process a frame handed in by the caller, who keeps ownership of it.
        Returns False if the frame was dropped because another one is
        still in flight.
        """
        if not self._busy.acquire(blocking=False):
            self.dropped_frames += 1
            return False
        try:
            self._process(frame)
        finally:
            self._busy.release()
        return True

    def run(self, should_stop: Optional[Callable[[], bool]] = None) -> None:
        """
        Headless driver: pump frames until the source runs dry or
        should_stop() is true. Front-ends with a display call step() instead.
        """
        while should_stop is None or not should_stop():
            if not self.step():
                break

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def reset_session(self) -> None:
        """Clear score, last round and detection progress. Cooldown keeps running."""
        with self._busy:
            self._engine.reset()
            self._prev_gesture = None
            self._sink.on_round(None)
            self._sink.on_score(self._engine.tally)
            self._sink.on_log("[SCORE] reset")
            if not self._engine.is_locked:
                self._sink.on_status(MSG_READY)

    def switch_source(self, source: FrameSource) -> FrameSource:
        """
        Swap the frame source (e.g. another camera). Detection progress and
        the displayed round are cleared; score and phase are kept.
        Returns the previous source so the caller can release it.
        """
        with self._busy:
            previous, self._source = self._source, source
            self._stabilizer.reset()
            self._engine.clear_outcome()
            self._prev_gesture = None
            self._sink.on_round(None)
            self._sink.on_log("[STATE] source switched")
        return previous

    # ---- accessors ----------------------------------------------------
    @property
    def engine(self) -> RoundEngine:
        return self._engine

    @property
    def cooldown_remaining(self) -> float:
        return self._engine.cooldown_remaining

    # ------------------------------------------------------------------
    def _process(self, frame: Any) -> None:
        if self._engine.tick():
            self._prev_gesture = None
            self._sink.on_log("[STATE] LOCKED → DETECTING")
            self._sink.on_status(MSG_READY)

        if self._engine.is_locked:
            return

        try:
            landmarks = self._tracker.detect(frame)
        except Exception as exc:
            self._sink.on_log(f"[ERROR] Hand tracker: {exc}")
            landmarks = None

        if not _hand_present(landmarks):
            self._stabilizer.reset()
            if self._prev_gesture is not None:
                self._sink.on_log(f"[STATE] {self._prev_gesture.value} → no hand")
                self._prev_gesture = None
            self._sink.on_status(MSG_NO_HAND)
            return

        gesture = classify_gesture(landmarks)
        confirmed = self._stabilizer.update(gesture)

        if gesture != self._prev_gesture:
            prev = self._prev_gesture.value if self._prev_gesture else "no hand"
            self._sink.on_log(f"[STATE] {prev} → {gesture.value}")
            self._prev_gesture = gesture

        self._sink.on_gesture(gesture)
        self._sink.on_status(
            f"Detected: {gesture.value}" if gesture.playable else MSG_DETECTING
        )

        if confirmed is not None:
            self._play(confirmed)

    def _play(self, move: Gesture) -> None:
        outcome = self._engine.play(move)
        if outcome is None:
            return
        tally = self._engine.tally
        self._sink.on_round(outcome)
        self._sink.on_score(tally)
        self._sink.on_log(
            f"[ROUND] {outcome.player_move.value} vs {outcome.cpu_move.value}"
            f" → {outcome.result.value}"
        )
        self._sink.on_log(
            f"[SCORE] W {tally.wins} / D {tally.draws} / L {tally.losses}"
        )
