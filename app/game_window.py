"""
GameWindow — ventana que muestra el feed de la cámara con el estado de la
partida: estado de detección, jugada del jugador y de la CPU, resultado y
marcador.

Todos los datos llegan desde CameraWorker vía señales; la ventana nunca
lee del pipeline.
"""
from __future__ import annotations
from typing import Optional

import cv2
import numpy as np
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap, QColor
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QTextEdit, QSizePolicy, QFrame,
)

from domain.enums import Gesture, Outcome
from domain.models import RoundOutcome, ScoreTally

# ---- Colores (RGB para Qt) -----------------------------------------------
_GESTURE_COLORS: dict[Gesture, tuple[int, int, int]] = {
    Gesture.ROCK:     (220,  60,  60),
    Gesture.PAPER:    (80,  220,  80),
    Gesture.SCISSORS: (220, 200,  40),
    Gesture.UNKNOWN:  (140, 140, 140),
}
_OUTCOME_COLORS: dict[Outcome, tuple[int, int, int]] = {
    Outcome.WIN:  (80,  220, 120),
    Outcome.DRAW: (200, 200, 200),
    Outcome.LOSS: (220,  80,  80),
}
_DEFAULT_COLOR = (200, 200, 200)


def _qcolor(rgb: tuple[int, int, int]) -> QColor:
    r, g, b = rgb
    return QColor(r, g, b)


class GameWindow(QWidget):
    """
    Ventana principal del juego.

    - Feed de cámara con los landmarks ya dibujados por HandTracker.
    - Overlay HUD con el gesto en curso.
    - Panel lateral: jugadas, resultado, marcador y log.
    - Botones "Switch Camera" y "Reset" (emiten señales, no tocan el pipeline).
    """

    reset_clicked  = pyqtSignal()
    switch_clicked = pyqtSignal()

    def __init__(self, title: str = "Rock-Paper-Scissors AI", mirror: bool = True, parent=None) -> None:
        super().__init__(parent)
        self._title   = title
        self._mirror  = mirror
        self._gesture = Gesture.UNKNOWN
        self._status  = "Initializing..."

        self._setup_ui()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------
    def _setup_ui(self) -> None:
        self.setWindowTitle(self._title)
        self.setMinimumSize(860, 520)
        self.setStyleSheet("""
            QWidget {
                background-color: #000000;
                color: #e0e0e0;
                font-family: 'Segoe UI', Consolas, monospace;
            }
            QLabel#title {
                font-size: 20px;
                font-weight: 600;
                color: #ffffff;
                padding: 4px 0;
            }
            QLabel#status { font-size: 16px; color: #ffffff; }
            QLabel#badge_label { font-size: 12px; color: #bbbbbb; }
            QLabel#badge_value { font-size: 18px; font-weight: 700; color: #ffffff; }
            QLabel#result {
                font-size: 18px;
                font-weight: 700;
                padding: 8px 16px;
                border-radius: 14px;
                background: rgba(0, 0, 0, 128);
            }
            QTextEdit#log {
                background-color: #111111;
                color: #7ec8a0;
                font-size: 11px;
                border: 1px solid #333;
                border-radius: 4px;
            }
            QPushButton {
                background-color: #111827;
                color: #ffffff;
                font-weight: 600;
                border: 1px solid #374151;
                border-radius: 8px;
                padding: 10px 16px;
            }
            QPushButton:hover { background-color: #1f2937; }
        """)

        root = QHBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(10)

        # ---- LEFT: cámara --------------------------------------------
        left = QVBoxLayout()
        left.setSpacing(6)

        title = QLabel(self._title)
        title.setObjectName("title")
        left.addWidget(title)

        self._camera_label = QLabel()
        self._camera_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._camera_label.setMinimumSize(620, 420)
        self._camera_label.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding
        )
        self._camera_label.setStyleSheet(
            "background:#000; border-radius:6px; border:1px solid #334;"
        )
        left.addWidget(self._camera_label, stretch=1)

        buttons = QHBoxLayout()
        switch_btn = QPushButton("Switch Camera")
        switch_btn.clicked.connect(lambda: self.switch_clicked.emit())
        reset_btn = QPushButton("Reset")
        reset_btn.clicked.connect(lambda: self.reset_clicked.emit())
        buttons.addWidget(switch_btn)
        buttons.addStretch()
        buttons.addWidget(reset_btn)
        left.addLayout(buttons)

        root.addLayout(left, stretch=3)

        # ---- RIGHT: partida + log ------------------------------------
        right = QVBoxLayout()
        right.setSpacing(8)

        self._status_label = QLabel(self._status)
        self._status_label.setObjectName("status")
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        right.addWidget(self._status_label)

        badges = QHBoxLayout()
        self._you_value = self._add_badge(badges, "You")
        self._cpu_value = self._add_badge(badges, "CPU")
        right.addLayout(badges)

        self._result_label = QLabel("")
        self._result_label.setObjectName("result")
        self._result_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._result_label.hide()
        right.addWidget(self._result_label)

        self._score_label = QLabel()
        self._score_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        right.addWidget(self._score_label)
        self.on_score(ScoreTally())

        sep = QFrame()
        sep.setFrameShape(QFrame.Shape.HLine)
        right.addWidget(sep)

        right.addWidget(QLabel("Console log"))
        self._log = QTextEdit()
        self._log.setObjectName("log")
        self._log.setReadOnly(True)
        self._log.setMaximumHeight(200)
        right.addWidget(self._log)

        right.addStretch()
        root.addLayout(right, stretch=1)

    @staticmethod
    def _add_badge(row: QHBoxLayout, caption: str) -> QLabel:
        box = QVBoxLayout()
        label = QLabel(caption)
        label.setObjectName("badge_label")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        value = QLabel("-")
        value.setObjectName("badge_value")
        value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        box.addWidget(label)
        box.addWidget(value)
        row.addLayout(box)
        return value

    # ------------------------------------------------------------------
    # Slots llamados desde CameraWorker via señales
    # ------------------------------------------------------------------
    def on_frame(self, frame: np.ndarray) -> None:
        """Recibe un frame BGR y lo muestra con overlay HUD."""
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        if self._mirror:
            frame_rgb = cv2.flip(frame_rgb, 1)

        self._draw_hud(frame_rgb)

        h, w, ch = frame_rgb.shape
        img = QImage(frame_rgb.data, w, h, ch * w, QImage.Format.Format_RGB888)
        pix = QPixmap.fromImage(img).scaled(
            self._camera_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._camera_label.setPixmap(pix)

    def on_status_changed(self, text: str) -> None:
        self._status = text
        self._status_label.setText(text)

    def on_gesture(self, gesture: Gesture) -> None:
        self._gesture = gesture

    def on_round(self, outcome: Optional[RoundOutcome]) -> None:
        if outcome is None:
            self._you_value.setText("-")
            self._cpu_value.setText("-")
            self._result_label.hide()
            return

        self._you_value.setText(outcome.player_move.value)
        self._cpu_value.setText(outcome.cpu_move.value)
        c = _qcolor(_OUTCOME_COLORS.get(outcome.result, _DEFAULT_COLOR))
        self._result_label.setStyleSheet(f"color: rgb({c.red()},{c.green()},{c.blue()});")
        self._result_label.setText(outcome.message)
        self._result_label.show()

    def on_score(self, tally: ScoreTally) -> None:
        self._score_label.setText(
            f"Wins {tally.wins}  ·  Draws {tally.draws}  ·  Losses {tally.losses}"
        )

    def on_log(self, msg: str) -> None:
        """Mensajes de sistema/debug al log."""
        if msg.startswith("[ROUND]") or msg.startswith("[STATE]") or msg.startswith("[SCORE]"):
            self._log.append(f"<span style='color:#6699cc'>{msg}</span>")
        elif msg.startswith("[ERROR]"):
            self._log.append(f"<span style='color:#ff6b6b'>{msg}</span>")
        else:
            self._log.append(f"<span style='color:#555'>{msg}</span>")
        sb = self._log.verticalScrollBar()
        sb.setValue(sb.maximum())

    # ------------------------------------------------------------------
    # HUD overlay dibujado sobre el frame numpy
    # ------------------------------------------------------------------
    def _draw_hud(self, frame: np.ndarray) -> None:
        r, g, b = _GESTURE_COLORS.get(self._gesture, _DEFAULT_COLOR)
        cv2.putText(frame, self._status,
                    (14, 44), cv2.FONT_HERSHEY_DUPLEX, 1.0, (r, g, b), 2)
