"""
SignScribe Configuration Management.
====================================

This module defines the tunable parameters of the SignScribe translator.
The parameters are organized in layers, from the raw classifier signal up to
the runtime that drives the camera loop.

! WARNING !
Changing `SIGN_LABELS` requires retraining the ONNX model.
Only the confidence threshold and the hold time are user-tunable at runtime;
the release debounce and the word gap are fixed constants.
"""

from pathlib import Path
import math
import os

# --- SYSTEM PATHS ---
FILE_PATH = Path(__file__).resolve()
PROJECT_ROOT = FILE_PATH.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

PATHS = {
    "MODELS_DIR": PROJECT_ROOT / "models",
    "MODEL": PROJECT_ROOT / "models" / "letters_model.onnx",
    "LABEL_MAP": PROJECT_ROOT / "models" / "label_map.pkl",
    "TEXT_STORE": DATA_DIR / "session_text.txt",
    "EXPORT": DATA_DIR / "export.txt",
}

# --- LABEL DEFINITIONS ---
# Fallback class order when label_map.pkl is missing.
# MUST match the alphabetical order used at training time.
SIGN_LABELS = [chr(c) for c in range(ord("A"), ord("Z") + 1)]

# Reported by the classifier when no hand is in frame.
NO_HAND_LABEL = "NO_HAND"

# --- FIXED TIMING CONSTANTS (ms) ---
RELEASE_MS = 300        # Below-threshold time before the same letter may repeat
WORD_GAP_MS = 3000      # Inactivity after the last letter before a space

# --- CLAMP RANGES ---
THRESHOLD_RANGE = (0.70, 1.00)
HOLD_MS_RANGE = (200, 1200)

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: INPUT SIGNAL (Classifier)
    # =========================================================
    "TARGET_FPS": 30,               # Hardware limit for Camera
    "MAX_HANDS": 1,                 # Letters are signed with one hand
    "MIN_DETECTION_CONF": 0.5,      # MediaPipe hand detection
    "MIN_TRACKING_CONF": 0.5,       # MediaPipe hand tracking
    "LEFT_HAND_MODE": False,        # Mirrors X-axis before inference

    # =========================================================
    # LAYER 2: COMMIT ENGINE (User Tunable)
    # =========================================================
    "THRESHOLD": 0.95,              # Strict default for high accuracy
    "HOLD_MS": 600,                 # Dwell before a letter is trusted

    # =========================================================
    # LAYER 3: RUNTIME
    # =========================================================
    "CAMERA_INDEX": 0,              # OpenCV device ID
    "WARMUP_SECONDS": 1.0,          # Auto-exposure settle time
    "WINDOW_NAME": "SignScribe",
}


def clamp(value, low, high):
    return min(high, max(low, value))


class EngineConfig:
    """
    Runtime-tunable commit parameters.

    Setters clamp out-of-range input instead of rejecting it, so the values
    read back are always inside THRESHOLD_RANGE and HOLD_MS_RANGE.
    """
    def __init__(self, threshold: float = 0.95, hold_ms: int = 600):
        self._threshold = THRESHOLD_RANGE[0]
        self._hold_ms = HOLD_MS_RANGE[0]
        self.set_threshold(threshold)
        self.set_hold_ms(hold_ms)

    @classmethod
    def from_config(cls, config: dict) -> "EngineConfig":
        return cls(config.get("THRESHOLD", 0.95), config.get("HOLD_MS", 600))

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def hold_ms(self) -> int:
        return self._hold_ms

    def set_threshold(self, value: float) -> float:
        self._threshold = clamp(float(value), *THRESHOLD_RANGE)
        return self._threshold

    def set_hold_ms(self, ms: float) -> int:
        self._hold_ms = int(clamp(math.floor(ms + 0.5), *HOLD_MS_RANGE))
        return self._hold_ms

    def __repr__(self):
        return f"EngineConfig(threshold={self._threshold:.2f}, hold_ms={self._hold_ms})"


def init_environment():
    """
    Creates necessary directories safely at runtime.
    """
    os.makedirs(DATA_DIR, exist_ok=True)
    os.makedirs(PATHS["MODELS_DIR"], exist_ok=True)
