from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

from domain.enums import Gesture, Outcome

# Type aliases
Landmark3D = Tuple[float, float, float]
LandmarkList = Sequence[Landmark3D]   # 21 points, wrist first

NUM_LANDMARKS = 21


@dataclass(frozen=True)
class StabilizationState:
    """Snapshot of the debouncer: current candidate and its run length."""
    candidate: Gesture = Gesture.UNKNOWN
    count: int = 0


@dataclass(frozen=True)
class RoundOutcome:
    """
    One resolved round.
    Built in full before it is published, never mutated afterwards.
    """
    player_move: Gesture
    cpu_move: Gesture
    result: Outcome

    @property
    def message(self) -> str:
        return self.result.message


@dataclass(frozen=True)
class ScoreTally:
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def rounds(self) -> int:
        return self.wins + self.draws + self.losses


class DisplaySink(Protocol):
    """
    Anything that wants pipeline updates pushed to it.
    The pipeline never reads back from the sink.

    on_status carries the short player-facing line ("Detecting...");
    on_log carries prefixed pipeline messages ("[ROUND] ...", "[ERROR] ...").
    """

    def on_status(self, message: str) -> None: ...

    def on_log(self, message: str) -> None: ...

    def on_gesture(self, gesture: Gesture) -> None: ...

    def on_round(self, outcome: Optional[RoundOutcome]) -> None: ...

    def on_score(self, tally: ScoreTally) -> None: ...


class NullSink:
    """Sink that drops every update (headless runs, tests)."""

    def on_status(self, message: str) -> None:
        pass

    def on_log(self, message: str) -> None:
        pass

    def on_gesture(self, gesture: Gesture) -> None:
        pass

    def on_round(self, outcome: Optional[RoundOutcome]) -> None:
        pass

    def on_score(self, tally: ScoreTally) -> None:
        pass
