# ABOUTME: Request throttling for Notion API calls.
# ABOUTME: Provides Throttle to space out sequential requests under the API limit.

import time


class Throttle:
    """Spaces out sequential calls to a fixed maximum rate.

    Exports issue one request at a time, so no locking is needed; the caller
    simply waits until the minimum interval since the previous call has passed.
    """

    def __init__(self, calls_per_second: float = 2.5):
        """Initialize the throttle.

        Args:
            calls_per_second: Maximum requests per second. Default 2.5 leaves
                headroom below Notion's 3/sec limit.
        """
        self._min_interval = 1.0 / calls_per_second
        self._last_call: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    def wait(self) -> None:
        """Block until the next request may be sent."""
        now = time.monotonic()
        if self._last_call is not None:
            wait_time = self._last_call + self._min_interval - now
            if wait_time > 0:
                time.sleep(wait_time)
        self._last_call = time.monotonic()
