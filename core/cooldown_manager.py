"""
CooldownManager — a single fixed-length window after a round during which
no new round may start.
"""
from __future__ import annotations
import time
from typing import Callable, Optional


class CooldownManager:
    """
    Deadline-based cooldown. Nothing runs in the background: callers poll
    active() / remaining(), so expiry can never interrupt a round in flight.

    Usage
    -----
    cm = CooldownManager(duration=1.5)
    cm.start()
    if not cm.active():
        ...  # window is over

    Parameters
    ----------
    duration : float
        Window length in seconds.
    clock : callable
        Monotonic time source (injected in tests).
    """

    def __init__(
        self,
        duration: float = 1.5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if duration < 0:
            raise ValueError(f"cooldown duration must be >= 0, got {duration}")
        self._duration = duration
        self._clock = clock
        self._deadline: Optional[float] = None

    def start(self) -> None:
        """Open (or restart) the window from now."""
        self._deadline = self._clock() + self._duration

    def active(self) -> bool:
        return self._deadline is not None and self._clock() < self._deadline

    def remaining(self) -> float:
        """Seconds left in the window, 0.0 once it has elapsed."""
        if self._deadline is None:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    @property
    def duration(self) -> float:
        return self._duration
