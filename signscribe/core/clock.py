"""SignScribe Clock (monotonic, milliseconds)."""
import time


class MonotonicClock:
    """Milliseconds from time.monotonic(); unaffected by wall-clock changes."""
    def now_ms(self) -> float:
        return time.monotonic() * 1000.0
