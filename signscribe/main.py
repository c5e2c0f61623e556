"""
SignScribe - Main Entry Point.
==============================

Runs the sampling loop that feeds the commit engine:
1. Perception: grab the freshest camera frame (ThreadedCamera).
2. Classification: reduce the classifier's candidates to the argmax.
3. Commit: one TranslatorSession.tick() per frame.
4. Feedback: render the HUD and the committed text.

Usage:
    $ python -m signscribe.main
"""
import logging
import time

import cv2
import numpy as np

from signscribe.camera import ThreadedCamera
from signscribe.classifier import LandmarkClassifier
from signscribe.config import CONFIG, PATHS, EngineConfig, init_environment
from signscribe.core.clock import MonotonicClock
from signscribe.core.types import best_prediction
from signscribe.session import TranslatorSession
from signscribe.text_sink import FileTextSink
from signscribe.ui.hud import HUD

log = logging.getLogger("signscribe")

TRACK_THRESHOLD = "Threshold %"
TRACK_HOLD = "Hold ms"


def _setup_trackbars(window_name: str, config: EngineConfig):
    def nothing(x): pass

    cv2.createTrackbar(TRACK_THRESHOLD, window_name, int(round(config.threshold * 100)), 100, nothing)
    cv2.setTrackbarMin(TRACK_THRESHOLD, window_name, 70)
    cv2.createTrackbar(TRACK_HOLD, window_name, config.hold_ms, 1200, nothing)
    cv2.setTrackbarMin(TRACK_HOLD, window_name, 200)


def _read_trackbars(window_name: str, config: EngineConfig):
    config.set_threshold(cv2.getTrackbarPos(TRACK_THRESHOLD, window_name) / 100.0)
    config.set_hold_ms(cv2.getTrackbarPos(TRACK_HOLD, window_name))


def _open_camera(session: TranslatorSession):
    try:
        cam = ThreadedCamera(CONFIG["CAMERA_INDEX"])
    except RuntimeError as exc:
        session.report_error(exc)
        return None
    session.start()
    return cam


def _export_text(session: TranslatorSession):
    text = session.copy_text()
    try:
        PATHS["EXPORT"].write_text(text, encoding="utf-8")
    except OSError as exc:
        log.error("export failed: %s", exc)
        return
    print(f"📋 COPIED: {text!r} -> {PATHS['EXPORT']}")


def main():
    """
    Main Event Loop.
    """
    # 1. Boot Sequence
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    init_environment()
    print("🚀 SIGNSCRIBE: ONLINE")
    print("   -> Press 'ESC' to Exit")
    print("   -> Press 'C' to Toggle Camera")
    print("   -> Press 'R' to Reset Text")
    print("   -> Press 'Y' to Copy Text")

    # 2. Initialize Subsystems
    window_name = CONFIG["WINDOW_NAME"]
    cv2.namedWindow(window_name)

    config = EngineConfig.from_config(CONFIG)
    session = TranslatorSession(FileTextSink(PATHS["TEXT_STORE"]), config)
    _setup_trackbars(window_name, config)

    hud = HUD()
    clock = MonotonicClock()

    try:
        classifier = LandmarkClassifier()
    except (FileNotFoundError, RuntimeError) as exc:
        session.report_error(exc)
        classifier = None

    cam = _open_camera(session) if classifier else None

    # Warmup time for auto-exposure cameras
    time.sleep(CONFIG["WARMUP_SECONDS"])
    prev_time = 0

    try:
        while True:
            _read_trackbars(window_name, config)
            frame = None

            # --- 1. PERCEPTION ---
            if cam is not None and session.is_running:
                ret, frame = cam.read()
                if not ret or frame is None:
                    # Failed tick: engine state untouched, timers still run
                    session.report_error()
                    session.poll(clock.now_ms())
                    frame = None
                else:
                    frame = cv2.flip(frame, 1)

                    # --- 2. CLASSIFICATION ---
                    try:
                        candidates = classifier.predict(frame)
                    except Exception as exc:
                        session.report_error(exc)
                        session.poll(clock.now_ms())
                    else:
                        # --- 3. COMMIT ---
                        best = best_prediction(candidates)
                        if best is None:
                            session.poll(clock.now_ms())
                        else:
                            session.tick(best, clock.now_ms())

            if frame is None:
                frame = np.zeros((480, 640, 3), dtype=np.uint8)

            # --- 4. FEEDBACK ---
            landmarks = classifier.last_landmarks if classifier and session.is_running else None
            hud.render(frame, session, landmarks, clock.now_ms())

            curr = time.time()
            fps = 1/(curr-prev_time) if (curr-prev_time) > 0 else 0
            prev_time = curr
            hud.draw_fps(frame, fps)

            cv2.imshow(window_name, frame)

            # Input Handling
            k = cv2.waitKey(1) & 0xFF
            if k == 27: break # ESC
            elif k == ord('r'):
                session.reset_text()
            elif k == ord('y'):
                _export_text(session)
            elif k == ord('c'):
                if session.is_running:
                    session.stop()
                    if cam is not None:
                        cam.release()
                    cam = None
                elif classifier is not None:
                    cam = _open_camera(session)

    finally:
        # Graceful Shutdown
        session.stop()
        if cam is not None:
            cam.release()
        if classifier is not None:
            classifier.close()
        cv2.destroyAllWindows()
        print("🔴 SYSTEM OFFLINE")

if __name__ == "__main__":
    main()
