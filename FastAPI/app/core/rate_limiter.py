import threading
import time


class FixedWindowLimiter:
    """
    In-memory fixed-window counter keyed by "<client>:<route>".
    Process-local; each API worker keeps its own windows.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[int, float]] = {}

    def hit(self, key: str, limit: int, window_seconds: int = 60) -> tuple[bool, int]:
        """
        Count one request against ``key``. Returns (allowed, retry_after_seconds).
        """
        now = self._clock()
        with self._lock:
            count, started = self._windows.get(key, (0, now))
            if now - started >= window_seconds:
                count, started = 0, now
            if count >= limit:
                return False, max(1, int(window_seconds - (now - started)))
            self._windows[key] = (count + 1, started)
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = FixedWindowLimiter()
