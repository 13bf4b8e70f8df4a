from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class AppConfig:
    """
    Central configuration injected into all components.
    No scattered module-level constants.
    """
    # ---- camera --------------------------------------------------------
    camera_device: int = 0
    alt_camera_device: int = 1      # "Switch camera" toggles between the two
    fps_limit: int = 30
    frame_pool_size: int = 2

    # ---- hand tracker --------------------------------------------------
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ---- stabilizer ----------------------------------------------------
    # consecutive identical frames; ~600 ms at a ~10 fps landmark model
    stable_frames: int = 6

    # ---- round cooldown (seconds) -------------------------------------
    cooldown: float = 1.5

    # ---- CPU opponent --------------------------------------------------
    rng_seed: Optional[int] = None

    # ---- UI ------------------------------------------------------------
    window_name: str = "Rock-Paper-Scissors AI"
    mirror: bool = True


# Default singleton — import and use directly, or override in tests.
default_config = AppConfig()
