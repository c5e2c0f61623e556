"""
SignScribe Landmark Processing Utilities.
========================================

Handles the spatial normalization of hand data and the decoding of model
scores. Raw camera coordinates depend on where the hand is in the frame and
how close it is to the camera; the feature vector must not.
"""

import numpy as np
from typing import Any, Dict, List

from signscribe.core.types import Prediction

def pre_process_landmark(landmark_list: Any, flip_x: bool = False) -> List[float]:
    """
    Transforms 21 landmarks into a normalized 63-float feature vector.

    Steps:
    1. Convert to NumPy.
    2. Mirror X if Left Hand mode.
    3. Translate: Wrist (Point 0) becomes the origin.
    4. Normalize: Scale max absolute value to 1.0.
    5. Flatten: 21x3 -> 63.
    """
    if hasattr(landmark_list[0], 'x'):
        coords = np.array([[lm.x, lm.y, lm.z] for lm in landmark_list], dtype=np.float64)
    else:
        coords = np.array(landmark_list, dtype=np.float64).reshape(-1, 3)

    if flip_x:
        coords[:, 0] *= -1

    coords -= coords[0].copy()

    max_value = np.max(np.abs(coords))
    if max_value == 0:
        max_value = 1.0
    coords /= max_value

    return coords.flatten().tolist()

def clean_label(raw_label: str) -> str:
    # Legacy export artifacts: "0 A", "1. B" -> "A", "B"
    if "." in raw_label:
        raw_label = raw_label.split(".")[-1]
    parts = raw_label.strip().split(" ", 1)
    if len(parts) == 2 and parts[0].isdigit():
        return parts[1].strip()
    return raw_label.strip()

def decode_scores(scores: Any, label_map: Dict[int, str]) -> List[Prediction]:
    """
    Turns a model score vector into one Prediction per class.
    Classes missing from the label map are skipped.
    """
    scores = np.asarray(scores, dtype=np.float64).ravel()
    predictions = []
    for idx, score in enumerate(scores):
        label = label_map.get(idx)
        if label is None:
            continue
        predictions.append(Prediction(clean_label(label), float(np.clip(score, 0.0, 1.0))))
    return predictions
