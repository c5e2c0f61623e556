"""
SignScribe Types.
Central definition of Data Contracts to prevent circular imports.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional


# --- CLASSIFIER TYPES ---
@dataclass(frozen=True)
class Prediction:
    label: str
    confidence: float  # 0.0 - 1.0


def best_prediction(candidates: Iterable[Prediction]) -> Optional[Prediction]:
    """
    Argmax over the candidate set.
    Ties keep the first candidate encountered. Returns None for an empty set.
    """
    best = None
    for candidate in candidates:
        if best is None or candidate.confidence > best.confidence:
            best = candidate
    return best


# --- ENGINE OUTPUT TYPES ---
class ActionKind(Enum):
    NONE = auto()
    EMIT = auto()           # Commit one character
    EMIT_BOUNDARY = auto()  # Commit a word separator


BOUNDARY = " "


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    text: str = ""

    @classmethod
    def none(cls) -> "Action":
        return cls(ActionKind.NONE)

    @classmethod
    def emit(cls, char: str) -> "Action":
        return cls(ActionKind.EMIT, char)

    @classmethod
    def boundary(cls) -> "Action":
        return cls(ActionKind.EMIT_BOUNDARY, BOUNDARY)

    @property
    def is_none(self) -> bool:
        return self.kind == ActionKind.NONE
