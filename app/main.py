"""
main.py — console entry point (OpenCV window).

    Camera → HandTracker → classify_gesture → GestureStabilizer
           → RoundEngine → ScoreKeeper → OpenCVUI

Keys: R resets the score, C switches camera, ESC / Q quits.
"""
from __future__ import annotations

from app.config import AppConfig, default_config
from app.pipeline import build_pump
from app.ui import KEY_ESC, OpenCVUI
from core.camera import Camera
from core.frame_pump import FramePump
from core.hand_tracker import HandTracker
from domain.models import DisplaySink


def run(config: AppConfig = default_config) -> None:
    print("="*55)
    print(f"  {config.window_name.upper()}")
    print("="*55)
    print(f"  Camera  : {config.camera_device} (alt {config.alt_camera_device})")
    print(f"  Confirm : {config.stable_frames} frames")
    print(f"  Cooldown: {config.cooldown:.1f}s")
    print("  R reset · C switch camera · ESC quit")
    print("="*55 + "\n")

    camera  = Camera(config.camera_device, config.fps_limit, config.frame_pool_size)
    tracker = HandTracker(
        min_detection_confidence=config.min_detection_confidence,
        min_tracking_confidence=config.min_tracking_confidence,
    )
    ui   = OpenCVUI(config)
    pump = build_pump(config, camera, tracker, sink=ui)

    try:
        while True:
            if not pump.step(on_frame=lambda frame: ui.render(frame, pump.cooldown_remaining)):
                ui.on_log("[WARN] Empty frame — stopping")
                break

            key = ui.poll_key()
            if key in (KEY_ESC, ord("q"), ord("Q")):
                break
            if key in (ord("r"), ord("R")):
                pump.reset_session()
            elif key in (ord("c"), ord("C")):
                camera = switch_camera(config, camera, pump, ui)

    finally:
        camera.release()
        tracker.release()
        ui.close()
        print("\n✓ Application closed cleanly")


def switch_camera(
    config: AppConfig, camera: Camera, pump: FramePump, sink: DisplaySink,
) -> Camera:
    """Open the other configured device and hand it to the pump."""
    target = (
        config.alt_camera_device if camera.device == config.camera_device
        else config.camera_device
    )
    try:
        new_camera = Camera(target, config.fps_limit, config.frame_pool_size)
    except RuntimeError as exc:
        sink.on_log(f"[ERROR] {exc}")
        return camera
    pump.switch_source(new_camera)
    camera.release()
    sink.on_log(f"[STATE] camera {camera.device} → {target}")
    return new_camera


if __name__ == "__main__":
    run()
