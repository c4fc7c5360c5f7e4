"""
Fixed-window request budget per client
"""
import math
import threading
import time
from typing import Callable, Dict, Tuple


class FixedWindowRateLimiter:
    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> Tuple[bool, int]:
        """
        Count one request for `key`.
        Returns (allowed, seconds until the current window resets).
        """
        now = self.clock()
        with self._lock:
            expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
            for k in expired:
                del self._windows[k]
            started, count = self._windows.get(key, (now, 0))
            count += 1
            self._windows[key] = (started, count)
        retry_after = max(1, math.ceil(self.window_seconds - (now - started)))
        return count <= self.max_requests, retry_after

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        """Clients with an open window"""
        return len(self._windows)
