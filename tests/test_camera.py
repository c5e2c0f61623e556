import time
import unittest

import numpy as np

from signscribe.camera import ThreadedCamera

# Mock for cv2.VideoCapture
class MockCapture:
    def __init__(self, n_frames=None):
        self.n_frames = n_frames  # None = endless stream
        self.count = 0
        self.released = False

    def set(self, prop, value):
        return True

    def isOpened(self):
        return True

    def read(self):
        if self.n_frames is not None and self.count >= self.n_frames:
            return False, None
        self.count += 1
        time.sleep(0.001)
        return True, np.full((4, 4, 3), self.count, dtype=np.uint8)

    def release(self):
        self.released = True

class ClosedCapture(MockCapture):
    def isOpened(self):
        return False

class TestThreadedCamera(unittest.TestCase):
    def test_live_stream_returns_frames(self):
        cam = ThreadedCamera(capture=MockCapture())
        try:
            ret, frame = cam.read()
            self.assertTrue(ret)
            self.assertEqual(frame.shape, (4, 4, 3))
        finally:
            cam.release()
        self.assertTrue(cam.cap.released)

    def test_stream_end_is_reported(self):
        """After the stream ends, read() must not keep serving the last frame."""
        cam = ThreadedCamera(capture=MockCapture(n_frames=3))
        cam._thread.join(timeout=2.0)
        self.assertFalse(cam._thread.is_alive())

        ret, frame = cam.read()
        self.assertFalse(ret)
        self.assertIsNone(frame)
        cam.release()

    def test_unopened_camera_raises(self):
        with self.assertRaises(RuntimeError):
            ThreadedCamera(capture=ClosedCapture())

if __name__ == '__main__':
    unittest.main()
