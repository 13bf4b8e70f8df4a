from __future__ import annotations

from domain.enums import Outcome
from domain.models import ScoreTally


class ScoreKeeper:
    """Win / draw / loss counters for the session. Only record() and reset() mutate them."""

    def __init__(self) -> None:
        self._wins = 0
        self._draws = 0
        self._losses = 0

    def record(self, outcome: Outcome) -> ScoreTally:
        if outcome is Outcome.WIN:
            self._wins += 1
        elif outcome is Outcome.DRAW:
            self._draws += 1
        else:
            self._losses += 1
        return self.tally

    @property
    def tally(self) -> ScoreTally:
        return ScoreTally(self._wins, self._draws, self._losses)

    def reset(self) -> None:
        self._wins = self._draws = self._losses = 0
