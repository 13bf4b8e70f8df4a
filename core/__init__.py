from core.gesture_classifier import classify_gesture, fingers_extended
from core.state_stabilizer import GestureStabilizer
from core.cooldown_manager import CooldownManager
from core.score_keeper import ScoreKeeper
from core.round_engine import RoundEngine, resolve_outcome
from core.frame_pump import FramePump

# Camera and HandTracker pull in OpenCV / MediaPipe; import them from their
# modules directly.

__all__ = [
    "classify_gesture",
    "fingers_extended",
    "GestureStabilizer",
    "CooldownManager",
    "ScoreKeeper",
    "RoundEngine",
    "resolve_outcome",
    "FramePump",
]
