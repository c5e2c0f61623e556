"""
SignScribe Boundary Scheduler.

Holds the single outstanding word-boundary deadline. The session polls it at
the end of every tick, so a due deadline is delivered at the same serialized
point as ticks instead of from a separate timer thread.
"""
from typing import Optional


class BoundaryScheduler:
    def __init__(self):
        self._deadline: Optional[float] = None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def schedule(self, deadline: float):
        """Supersedes any earlier deadline."""
        self._deadline = deadline

    def cancel(self):
        self._deadline = None

    def pop_due(self, now: float) -> Optional[float]:
        if self._deadline is None or now < self._deadline:
            return None
        due, self._deadline = self._deadline, None
        return due
