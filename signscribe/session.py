"""
SignScribe Translator Session.
=============================

The single serialized processing point of the translator. A session owns:
1. The CommitEngine (and through it the EngineState), created on start()
   and discarded on stop().
2. The BoundaryScheduler holding the pending word-boundary deadline.
3. References to the shared EngineConfig and the text sink.

Ordering rule: within one tick, the engine's decision (and any boundary
reschedule it causes) is applied *before* due deadlines are evaluated, so a
commit and a deadline falling on the same instant never produce a space.
"""
import logging
from typing import List, Optional

from signscribe.config import EngineConfig
from signscribe.core.commit_engine import CommitEngine
from signscribe.core.interfaces import ITextSink
from signscribe.core.scheduler import BoundaryScheduler
from signscribe.core.types import Action, ActionKind, Prediction

log = logging.getLogger(__name__)

STATUS_LISTENING = "Listening to signs…"
STATUS_RECOGNIZING = "Recognizing sign for: {label}"
STATUS_CAMERA_OFF = "Camera off"
STATUS_ERROR = "Camera or model error"


class TranslatorSession:
    def __init__(self, sink: ITextSink, config: Optional[EngineConfig] = None):
        self.sink = sink
        self.config = config or EngineConfig()
        self.scheduler = BoundaryScheduler()
        self.engine: Optional[CommitEngine] = None

        # --- DISPLAY STATE ---
        self.status = STATUS_CAMERA_OFF
        self.recognized_label: Optional[str] = None
        self.confidence: Optional[float] = None
        self.last_confidence: Optional[float] = None

    # =========================================================
    # LIFECYCLE
    # =========================================================
    @property
    def is_running(self) -> bool:
        return self.engine is not None

    def start(self):
        if self.engine is None:
            self.engine = CommitEngine()
            log.info("session started (%r)", self.config)
        self.status = STATUS_LISTENING

    def stop(self):
        """Stops ticking and cancels the outstanding boundary deadline."""
        self.scheduler.cancel()
        if self.engine is not None:
            log.info("session stopped")
        self.engine = None
        self.status = STATUS_CAMERA_OFF

    def report_error(self, exc: Exception = None):
        if exc is not None:
            log.error("tick failed: %s", exc)
        self.status = STATUS_ERROR

    # =========================================================
    # PROCESSING
    # =========================================================
    def tick(self, prediction: Prediction, now: float) -> List[Action]:
        """
        Feeds one best prediction. Returns the actions applied to the sink
        (at most one commit followed by at most one boundary).
        """
        if self.engine is None:
            return []

        # A delivered tick means capture and inference recovered
        if self.status == STATUS_ERROR:
            self.status = STATUS_LISTENING

        self.last_confidence = prediction.confidence
        if prediction.confidence >= self.config.threshold:
            self.recognized_label = prediction.label
            self.confidence = prediction.confidence
            self.status = STATUS_RECOGNIZING.format(label=prediction.label)

        applied = []
        action = self.engine.on_tick(prediction, now, self.config)
        if action.kind == ActionKind.EMIT:
            self._apply(action)
            self.scheduler.schedule(self.engine.pending_boundary_deadline)
            applied.append(action)

        applied.extend(self.poll(now))
        return applied

    def poll(self, now: float) -> List[Action]:
        """Delivers a due boundary deadline. Safe to call without a tick."""
        if self.engine is None:
            return []
        due = self.scheduler.pop_due(now)
        if due is None:
            return []
        action = self.engine.on_boundary_deadline(now, due, self.sink.text)
        if action.is_none:
            return []
        self._apply(action)
        return [action]

    def _apply(self, action: Action):
        self.sink.append(action.text)
        if action.kind == ActionKind.EMIT:
            log.info("✍️ %s", action.text)
        else:
            log.info("␣ word boundary")

    # =========================================================
    # USER COMMANDS
    # =========================================================
    def reset_text(self):
        self.sink.reset()
        self.scheduler.cancel()
        if self.engine is not None:
            self.engine.reset()
            self.status = STATUS_LISTENING
        self.recognized_label = None
        self.confidence = None
        log.info("text reset")

    def copy_text(self) -> str:
        return self.sink.copy_text()

    def hold_progress(self, now: float) -> float:
        if self.engine is None:
            return 0.0
        return self.engine.hold_progress(now, self.config)

    @property
    def text(self) -> str:
        return self.sink.text
