from enum import Enum


class Gesture(str, Enum):
    """Hand shapes produced by the landmark classifier."""
    ROCK     = "Rock"
    PAPER    = "Paper"
    SCISSORS = "Scissors"
    UNKNOWN  = "Unknown"

    @property
    def playable(self) -> bool:
        return self is not Gesture.UNKNOWN


# Moves the CPU is allowed to draw from.
MOVES = (Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS)


class Outcome(str, Enum):
    """Round result from the player's point of view."""
    WIN  = "WIN"
    DRAW = "DRAW"
    LOSS = "LOSS"

    @property
    def message(self) -> str:
        return _OUTCOME_MESSAGES[self]


_OUTCOME_MESSAGES = {
    Outcome.WIN:  "You Win!",
    Outcome.DRAW: "Draw",
    Outcome.LOSS: "You Lose!",
}


class SessionPhase(str, Enum):
    """DETECTING accepts frames, LOCKED ignores them while a result is shown."""
    DETECTING = "DETECTING"
    LOCKED    = "LOCKED"
