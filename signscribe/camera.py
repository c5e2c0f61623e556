"""SignScribe Camera Input."""
import logging
import threading
from typing import Optional, Tuple

import cv2
import numpy as np

from signscribe.config import CONFIG

log = logging.getLogger(__name__)


class ThreadedCamera:
    """
    Camera reader running on a daemon thread.

    cv2.VideoCapture.read() blocks; if inference takes longer than a frame
    interval the driver buffer fills up and every tick sees a stale image.
    The reader thread keeps only the freshest frame, and read() never blocks.
    """
    def __init__(self, src: int = 0, capture=None):
        self.cap = capture if capture is not None else cv2.VideoCapture(src)
        self.cap.set(cv2.CAP_PROP_FPS, CONFIG.get("TARGET_FPS", 30))
        if not self.cap.isOpened():
            raise RuntimeError(f"Camera {src} unavailable")

        self.ret, self.frame = self.cap.read()
        self.running = True
        self.lock = threading.Lock()

        self._thread = threading.Thread(target=self._reader, daemon=True)
        self._thread.start()

    def _reader(self):
        while self.running:
            ret, frame = self.cap.read()
            if not ret:
                log.error("camera stream ended")
                with self.lock:
                    self.ret, self.frame = False, None
                self.running = False
                break
            # Lock ensures we don't read a half-written frame
            with self.lock:
                self.ret, self.frame = ret, frame

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        with self.lock:
            if not self.running or self.frame is None:
                return False, None
            return self.ret, self.frame.copy()

    def release(self):
        self.running = False
        self._thread.join(timeout=1.0)
        self.cap.release()
