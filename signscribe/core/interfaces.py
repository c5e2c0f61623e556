"""
SignScribe Core Interfaces.
Defines the abstract contracts for the collaborators around the commit engine.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from signscribe.core.types import Prediction

class IClassifier(ABC):
    """
    Abstract Protocol for per-frame sign classification.
    """
    @abstractmethod
    def predict(self, frame: Any) -> List[Prediction]: pass

    def close(self) -> None:
        pass

class ITextSink(ABC):
    """
    Abstract Protocol for the committed text destination.
    Append-only during a session; insertion order is preserved.
    """
    @abstractmethod
    def append(self, text: str) -> None: pass

    @property
    @abstractmethod
    def text(self) -> str: pass

    @abstractmethod
    def reset(self) -> None: pass

    def copy_text(self) -> str:
        """Trimmed text for copy-out."""
        return self.text.strip()
