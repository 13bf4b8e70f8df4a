"""
qt_main — aplicación PyQt6 que orquesta el worker y la ventana del juego.

Comportamiento:
  • Al arrancar: ventana visible, pipeline corriendo en un QThread.
  • "Switch Camera" / "Reset" → peticiones al worker (se aplican entre frames).
  • Cerrar la ventana → detiene el worker y sale limpiamente.
"""
from __future__ import annotations
import sys

from PyQt6.QtWidgets import QApplication

from app.config import AppConfig, default_config
from app.camera_worker import CameraWorker
from app.game_window import GameWindow


class GameApp:
    """
    Controlador de la aplicación.

    Conecta CameraWorker (hilo) ↔ GameWindow (UI) a través de señales Qt.
    """

    def __init__(self, config: AppConfig = default_config) -> None:
        self._config = config
        self._window = GameWindow(config.window_name, mirror=config.mirror)
        self._worker = CameraWorker(config)
        self._connect_worker()

    def start(self) -> None:
        self._window.show()
        self._worker.start()

    def stop(self) -> None:
        self._worker.stop()

    # ------------------------------------------------------------------
    # Conexión de señales worker ↔ UI
    # ------------------------------------------------------------------
    def _connect_worker(self) -> None:
        self._worker.frame_ready.connect(self._window.on_frame)
        self._worker.status_changed.connect(self._window.on_status_changed)
        self._worker.gesture_changed.connect(self._window.on_gesture)
        self._worker.round_finished.connect(self._window.on_round)
        self._worker.score_changed.connect(self._window.on_score)
        self._worker.status_msg.connect(self._window.on_log)

        self._window.reset_clicked.connect(self._worker.request_reset)
        self._window.switch_clicked.connect(self._worker.request_switch_camera)


def run(config: AppConfig = default_config) -> int:
    qt_app = QApplication(sys.argv)
    game = GameApp(config)
    qt_app.aboutToQuit.connect(game.stop)
    game.start()
    return qt_app.exec()


if __name__ == "__main__":
    sys.exit(run())
