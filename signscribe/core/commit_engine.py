"""
SignScribe Commit Engine (The Gatekeeper).
==========================================

Turns the per-frame (label, confidence) stream into committed characters.

Two timers gate every commit:
1. **Hold (dwell):** a label must stay the top above-threshold candidate for
   `hold_ms` before it is trusted. One-frame misclassifications never survive.
2. **Release:** after a commit, the *same* label may only commit again once
   confidence has dropped below threshold for at least RELEASE_MS. This is
   what separates "still holding A" from "signed A twice".

A third, independent deadline inserts a word boundary after WORD_GAP_MS of
output inactivity. The engine only records that deadline; delivering it is
the scheduler's job (see BoundaryScheduler).
"""
import logging

from signscribe.config import EngineConfig, RELEASE_MS, WORD_GAP_MS
from signscribe.core.engine_state import EngineState
from signscribe.core.types import Action, Prediction, BOUNDARY

log = logging.getLogger(__name__)


class CommitEngine:
    """
    Attributes:
        state (EngineState): Gating state. Mutated only by on_tick,
            on_boundary_deadline and reset.
    """
    def __init__(self, state: EngineState = None):
        self.state = state or EngineState()

    def on_tick(self, prediction: Prediction, now: float, config: EngineConfig) -> Action:
        """
        Advances the state machine by one sampling tick.

        Args:
            prediction: The argmax candidate for this tick.
            now: Current monotonic instant (ms).
            config: Current threshold / hold time.

        Returns:
            Action.emit(char), or Action.none().
        """
        st = self.state

        # --- 1. ABOVE THRESHOLD: DWELL ---
        if prediction.confidence >= config.threshold:
            label = prediction.label
            if label != st.tracked_label:
                st.track(label, now)

            held_long_enough = (now - st.tracked_since) >= config.hold_ms
            released = (st.release_started_at is not None
                        and (now - st.release_started_at) >= RELEASE_MS)

            if held_long_enough and (label != st.last_emitted_label or released):
                st.last_emitted_label = label
                st.release_started_at = None
                st.pending_boundary_deadline = now + WORD_GAP_MS
                log.debug("commit %r at %.0fms (boundary due %.0fms)",
                          label, now, st.pending_boundary_deadline)
                return Action.emit(label.upper())

            return Action.none()

        # --- 2. BELOW THRESHOLD: RELEASE ---
        # Start the release timer once per excursion.
        if st.release_started_at is None:
            st.release_started_at = now
        st.clear_tracking()
        return Action.none()

    def on_boundary_deadline(self, now: float, deadline: float, text: str) -> Action:
        """
        Handles a delivered word-boundary deadline.

        The deadline value doubles as a version marker: a delivery whose
        deadline no longer matches the pending one was superseded by a later
        commit and is ignored.
        """
        st = self.state
        if st.pending_boundary_deadline is None or deadline != st.pending_boundary_deadline:
            log.debug("stale boundary deadline %.0fms ignored at %.0fms", deadline, now)
            return Action.none()

        st.pending_boundary_deadline = None
        if text and not text.endswith(BOUNDARY):
            return Action.boundary()
        return Action.none()

    @property
    def pending_boundary_deadline(self):
        return self.state.pending_boundary_deadline

    def hold_progress(self, now: float, config: EngineConfig) -> float:
        """Fraction (0.0 - 1.0) of the dwell completed for the tracked label."""
        st = self.state
        if st.tracked_since is None:
            return 0.0
        return min(max(now - st.tracked_since, 0.0) / config.hold_ms, 1.0)

    def reset(self):
        self.state.reset()
