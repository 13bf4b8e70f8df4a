"""
Pipeline wiring shared by the console and Qt front-ends.
"""
from __future__ import annotations
import random
import time
from typing import Callable, Optional

from app.config import AppConfig
from core.cooldown_manager import CooldownManager
from core.frame_pump import FramePump, FrameSource, LandmarkDetector
from core.round_engine import RoundEngine
from core.score_keeper import ScoreKeeper
from core.state_stabilizer import GestureStabilizer
from domain.models import DisplaySink


def build_pump(
    config: AppConfig,
    source: FrameSource,
    tracker: LandmarkDetector,
    sink: Optional[DisplaySink] = None,
    clock: Callable[[], float] = time.monotonic,
) -> FramePump:
    """Create the stabilizer / score / cooldown / engine set for one session."""
    stabilizer = GestureStabilizer(threshold=config.stable_frames)
    engine = RoundEngine(
        stabilizer,
        ScoreKeeper(),
        CooldownManager(config.cooldown, clock=clock),
        rng=random.Random(config.rng_seed),
    )
    return FramePump(source, tracker, engine, stabilizer, sink)
