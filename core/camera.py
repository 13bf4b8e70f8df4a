"""
Camera — thin wrapper around OpenCV VideoCapture with FPS limiting.
No ML, no gesture logic.

Frames are leased through frame(): the image buffer goes back into a small
pool when the lease ends and is reused by the next read.
"""
from __future__ import annotations
import time
from collections import deque
from contextlib import contextmanager
from typing import Deque, Iterator, Optional

import cv2
import numpy as np


class Camera:
    """
    Parameters
    ----------
    device : int
        Camera index (0 = default webcam).
    fps_limit : int
        Maximum frames per second to deliver.
    pool_size : int
        Number of released frame buffers kept for reuse.
    """

    def __init__(self, device: int = 0, fps_limit: int = 30, pool_size: int = 2) -> None:
        self._cap = cv2.VideoCapture(device)
        self._device = device
        self._frame_time = 1.0 / fps_limit
        self._prev_time: float = 0.0
        self._pool_size = pool_size
        self._pool: Deque[np.ndarray] = deque()

        if not self._cap.isOpened():
            raise RuntimeError(f"Cannot open camera device {device}")

    # ------------------------------------------------------------------
    def read(self, buffer: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
        """
        Wait until the next frame is due (FPS limiter), then return it.
        `buffer` is filled in place when its shape matches.
        Returns None on read failure.
        """
        wait = self._frame_time - (time.monotonic() - self._prev_time)
        if wait > 0:
            time.sleep(wait)
        self._prev_time = time.monotonic()

        ret, frame = self._cap.read(buffer)
        return frame if ret else None

    @contextmanager
    def frame(self) -> Iterator[Optional[np.ndarray]]:
        """Lease one frame; its buffer is returned to the pool on exit."""
        buffer = self._pool.popleft() if self._pool else None
        frame = self.read(buffer)
        try:
            yield frame
        finally:
            if frame is not None and len(self._pool) < self._pool_size:
                self._pool.append(frame)

    @property
    def device(self) -> int:
        return self._device

    def release(self) -> None:
        self._pool.clear()
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, *_) -> None:
        self.release()
