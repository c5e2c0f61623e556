"""
SignScribe Engine State.
Owned by exactly one CommitEngine; only the engine mutates it.
"""
from typing import Optional

class EngineState:
    def __init__(self):
        # --- DWELL TRACKING ---
        # Invariant: tracked_since is set iff tracked_label is set.
        self.tracked_label: Optional[str] = None
        self.tracked_since: Optional[float] = None

        # --- COMMIT HISTORY ---
        self.last_emitted_label: Optional[str] = None

        # --- TIMERS (ms instants) ---
        self.release_started_at: Optional[float] = None
        self.pending_boundary_deadline: Optional[float] = None

    def track(self, label: str, now: float):
        self.tracked_label = label
        self.tracked_since = now

    def clear_tracking(self):
        self.tracked_label = None
        self.tracked_since = None

    def reset(self):
        self.clear_tracking()
        self.last_emitted_label = None
        self.release_started_at = None
        self.pending_boundary_deadline = None

    def __repr__(self):
        return (f"EngineState(tracked={self.tracked_label!r}@{self.tracked_since}, "
                f"last={self.last_emitted_label!r}, release={self.release_started_at}, "
                f"boundary={self.pending_boundary_deadline})")
