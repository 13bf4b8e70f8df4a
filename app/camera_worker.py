"""
CameraWorker — corre el pipeline completo en un QThread y emite señales con
la información necesaria para actualizar la UI.

Separa completamente el procesamiento de la interfaz gráfica: el worker es
el DisplaySink del FramePump y traduce cada actualización a una señal Qt.
"""
from __future__ import annotations
import time
from typing import Optional

import numpy as np
from PyQt6.QtCore import QThread, pyqtSignal

from app.config import AppConfig
from app.pipeline import build_pump
from core.camera import Camera
from core.frame_pump import FramePump
from core.hand_tracker import HandTracker
from domain.enums import Gesture
from domain.models import RoundOutcome, ScoreTally


class CameraWorker(QThread):
    """
    QThread que ejecuta el pipeline de visión + juego.

    Señales:
        frame_ready     — frame BGR como np.ndarray (para mostrar en la UI)
        status_changed  — texto corto para el jugador ("Detecting...")
        gesture_changed — Gesture clasificado en el último frame
        round_finished  — RoundOutcome, o None cuando se limpia
        score_changed   — ScoreTally
        status_msg      — línea de log ([STATE], [ROUND], [ERROR], ...)
    """

    frame_ready     = pyqtSignal(np.ndarray)
    status_changed  = pyqtSignal(str)
    gesture_changed = pyqtSignal(object)   # Gesture
    round_finished  = pyqtSignal(object)   # Optional[RoundOutcome]
    score_changed   = pyqtSignal(object)   # ScoreTally
    status_msg      = pyqtSignal(str)

    def __init__(self, config: AppConfig, parent=None) -> None:
        super().__init__(parent)
        self._config  = config
        self._running = False

        # Acciones del usuario: las marca el hilo de la UI, las consume run()
        self._reset_requested  = False
        self._switch_requested = False

        # Se crean en run() para vivir en el hilo correcto
        self._camera:  Optional[Camera]      = None
        self._tracker: Optional[HandTracker] = None
        self._pump:    Optional[FramePump]   = None

    # ---- DisplaySink ----------------------------------------------------
    def on_status(self, message: str) -> None:
        self.status_changed.emit(message)

    def on_log(self, message: str) -> None:
        self.status_msg.emit(message)

    def on_gesture(self, gesture: Gesture) -> None:
        self.gesture_changed.emit(gesture)

    def on_round(self, outcome: Optional[RoundOutcome]) -> None:
        self.round_finished.emit(outcome)

    def on_score(self, tally: ScoreTally) -> None:
        self.score_changed.emit(tally)

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Bucle principal — corre en el hilo del worker."""
        cfg = self._config

        try:
            self._camera  = Camera(cfg.camera_device, cfg.fps_limit, cfg.frame_pool_size)
            self._tracker = HandTracker(
                min_detection_confidence=cfg.min_detection_confidence,
                min_tracking_confidence=cfg.min_tracking_confidence,
            )
            self._pump = build_pump(cfg, self._camera, self._tracker, sink=self)
        except Exception as exc:
            self.status_msg.emit(f"[ERROR] Inicialización: {exc}")
            self.status_changed.emit("No access to camera")
            return

        self._running = True
        self.status_msg.emit("✅ Pipeline iniciado")
        self.status_changed.emit("Show a gesture to play!")
        self.score_changed.emit(self._pump.engine.tally)

        while self._running:
            self._apply_user_actions()

            # Copia para thread-safety: el buffer vuelve al pool
            if not self._pump.step(on_frame=lambda frame: self.frame_ready.emit(frame.copy())):
                self.status_msg.emit("[WARN] Frame vacío — reintentando")
                time.sleep(0.05)

        self._cleanup()

    # ------------------------------------------------------------------
    def request_reset(self) -> None:
        self._reset_requested = True

    def request_switch_camera(self) -> None:
        self._switch_requested = True

    def stop(self) -> None:
        self._running = False
        self.wait(3000)  # espera hasta 3s a que termine

    # ------------------------------------------------------------------
    def _apply_user_actions(self) -> None:
        if self._reset_requested:
            self._reset_requested = False
            self._pump.reset_session()

        if self._switch_requested:
            self._switch_requested = False
            cfg = self._config
            target = (
                cfg.alt_camera_device if self._camera.device == cfg.camera_device
                else cfg.camera_device
            )
            try:
                new_camera = Camera(target, cfg.fps_limit, cfg.frame_pool_size)
            except RuntimeError as exc:
                self.status_msg.emit(f"[ERROR] {exc}")
                return
            self._pump.switch_source(new_camera)
            self._camera.release()
            self._camera = new_camera
            self.status_msg.emit(f"[STATE] cámara → {target}")

    def _cleanup(self) -> None:
        if self._camera:
            self._camera.release()
        if self._tracker:
            self._tracker.release()
        self.status_msg.emit("🛑 Pipeline detenido")
