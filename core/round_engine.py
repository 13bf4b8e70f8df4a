"""
RoundEngine — turns a confirmed gesture into a resolved round and owns the
DETECTING / LOCKED session phase.

Design decisions:
  - The CPU move comes from an injected random.Random, so tests can fix it.
  - Cooldown is a deadline, not a timer thread; tick() is polled by the
    frame loop and flips the phase back once the window has elapsed.
  - play() is a no-op while LOCKED, so a late confirmation can never start
    a second round inside the same window.
"""
from __future__ import annotations
import random
from typing import Optional

from domain.enums import Gesture, MOVES, Outcome, SessionPhase
from domain.models import RoundOutcome, ScoreTally
from core.cooldown_manager import CooldownManager
from core.score_keeper import ScoreKeeper
from core.state_stabilizer import GestureStabilizer

# winner -> the move it beats
_BEATS = {
    Gesture.ROCK:     Gesture.SCISSORS,
    Gesture.PAPER:    Gesture.ROCK,
    Gesture.SCISSORS: Gesture.PAPER,
}


def resolve_outcome(player: Gesture, cpu: Gesture) -> Outcome:
    """Result of `player` against `cpu`, from the player's side."""
    if player == cpu:
        return Outcome.DRAW
    if _BEATS.get(player) == cpu:
        return Outcome.WIN
    return Outcome.LOSS


class RoundEngine:
    """
    Usage
    -----
    engine  = RoundEngine(stabilizer, scores, CooldownManager(1.5))
    outcome = engine.play(Gesture.ROCK)     # None if rejected
    ...
    engine.tick()                           # once per frame

    Parameters
    ----------
    stabilizer : GestureStabilizer
        Reset whenever a round starts or the cooldown ends.
    scores : ScoreKeeper
        Receives every outcome exactly once.
    cooldown : CooldownManager
        Length of the LOCKED phase.
    rng : random.Random, optional
        Source for the CPU move.
    """

    def __init__(
        self,
        stabilizer: GestureStabilizer,
        scores: ScoreKeeper,
        cooldown: CooldownManager,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._stabilizer = stabilizer
        self._scores = scores
        self._cooldown = cooldown
        self._rng = rng or random.Random()
        self._phase = SessionPhase.DETECTING
        self._last: Optional[RoundOutcome] = None

    # ------------------------------------------------------------------
    def play(self, player_move: Gesture) -> Optional[RoundOutcome]:
        """
        Resolve a round for `player_move` and enter LOCKED.

        Returns None, with no side effects, when a round is already being
        shown or the move is not playable.
        """
        if self._phase is SessionPhase.LOCKED or not player_move.playable:
            return None

        cpu_move = self._rng.choice(MOVES)
        outcome = RoundOutcome(player_move, cpu_move, resolve_outcome(player_move, cpu_move))

        self._last = outcome
        self._scores.record(outcome.result)
        self._stabilizer.reset()
        self._cooldown.start()
        self._phase = SessionPhase.LOCKED
        return outcome

    def tick(self) -> bool:
        """
        Leave LOCKED once the cooldown has elapsed.
        Returns True only on the call that performs the transition.
        """
        if self._phase is SessionPhase.LOCKED and not self._cooldown.active():
            self._phase = SessionPhase.DETECTING
            self._stabilizer.reset()
            return True
        return False

    def reset(self) -> None:
        """
        User reset: forget the last round, the score and any partial
        detection. A running cooldown is left to finish.
        """
        self._last = None
        self._scores.reset()
        self._stabilizer.reset()

    def clear_outcome(self) -> None:
        self._last = None

    # ---- accessors ----------------------------------------------------
    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_locked(self) -> bool:
        return self._phase is SessionPhase.LOCKED

    @property
    def last_outcome(self) -> Optional[RoundOutcome]:
        return self._last

    @property
    def tally(self) -> ScoreTally:
        return self._scores.tally

    @property
    def cooldown_remaining(self) -> float:
        return self._cooldown.remaining() if self.is_locked else 0.0
