import time
import threading


class RateLimiter:
    """Thread-safe minimum spacing between upstream API calls."""

    def __init__(self, min_interval: float = 0.2):
        self.min_interval = min_interval
        self._last_request_time = 0.0
        self._lock = threading.Lock()

    def wait(self):
        if self.min_interval <= 0:
            return
        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self.min_interval:
                time.sleep(self.min_interval - elapsed)
            self._last_request_time = time.monotonic()


_host_limiters = {}
_registry_lock = threading.Lock()


def get_host_limiter(base_url: str, min_interval: float = 0.2) -> RateLimiter:
    """Get or create the limiter shared by every client of ``base_url``."""
    with _registry_lock:
        limiter = _host_limiters.get(base_url)
        if limiter is None or limiter.min_interval != min_interval:
            limiter = RateLimiter(min_interval)
            _host_limiters[base_url] = limiter
        return limiter
