"""
SignScribe Letter Classifier (The Eyes).
=======================================

Implements the classifier port for live camera frames:
1. **MediaPipe Hands:** extracts the 21-point hand skeleton from the frame.
2. **ONNX Runtime:** scores the normalized skeleton against every letter class.

No temporal smoothing happens here. Jitter rejection is the commit engine's
job; this module reports exactly what the model sees on each frame.
"""

import logging
import os
from typing import Any, List

import cv2
import joblib
import mediapipe as mp
import numpy as np
import onnxruntime as ort

from signscribe.config import CONFIG, PATHS, SIGN_LABELS, NO_HAND_LABEL
from signscribe.core.interfaces import IClassifier
from signscribe.core.types import Prediction
from signscribe.hand_utils import pre_process_landmark, decode_scores

log = logging.getLogger(__name__)


class LandmarkClassifier(IClassifier):
    """
    Attributes:
        session (ort.InferenceSession): The ONNX runtime session.
        label_map (dict): Int -> String mapping for letter classes.
        hands: MediaPipe Hands tracker.
    """
    def __init__(self, model_path=None, label_map_path=None):
        self.model_path = str(model_path or PATHS["MODEL"])
        self.label_map_path = str(label_map_path or PATHS["LABEL_MAP"])
        self._load_resources()

        self.hands = mp.solutions.hands.Hands(
            max_num_hands=CONFIG["MAX_HANDS"],
            min_detection_confidence=CONFIG["MIN_DETECTION_CONF"],
            min_tracking_confidence=CONFIG["MIN_TRACKING_CONF"],
            model_complexity=1
        )
        self.last_landmarks = None

    def _load_resources(self):
        """Loads the ONNX model and Label Map from disk."""
        if not os.path.exists(self.label_map_path):
            log.warning("Label map missing: %s (using alphabetical fallback)", self.label_map_path)
            self.label_map = {i: label for i, label in enumerate(SIGN_LABELS)}
        else:
            log.info("loading label map: %s", self.label_map_path)
            self.label_map = joblib.load(self.label_map_path)

        if not os.path.exists(self.model_path):
            raise FileNotFoundError(f"ONNX model not found at: {self.model_path}")

        log.info("loading ONNX model: %s", self.model_path)
        # CPU Provider is sufficient for this lightweight model
        self.session = ort.InferenceSession(self.model_path, providers=['CPUExecutionProvider'])
        self.input_name = self.session.get_inputs()[0].name
        self.output_name = self.session.get_outputs()[0].name

    def predict(self, frame: Any) -> List[Prediction]:
        """
        Pipeline: Detect -> Preprocess -> Infer -> Decode.

        Args:
            frame: BGR image (already mirrored for display).

        Returns:
            One Prediction per class, or a single zero-confidence NO_HAND
            prediction when no hand is visible (a lowered hand is a release).
        """
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.hands.process(rgb)

        if not results.multi_hand_landmarks:
            self.last_landmarks = None
            return [Prediction(NO_HAND_LABEL, 0.0)]

        lms = results.multi_hand_landmarks[0]
        self.last_landmarks = lms

        feats = pre_process_landmark(lms.landmark, flip_x=CONFIG.get("LEFT_HAND_MODE", False))
        input_data = np.array([feats], dtype=np.float32)
        scores = self.session.run([self.output_name], {self.input_name: input_data})[0][0]

        return decode_scores(scores, self.label_map)

    def close(self):
        self.hands.close()
