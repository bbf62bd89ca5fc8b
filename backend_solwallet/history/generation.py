"""
Caller-side guard against stale history results.

The reconstructor keeps no state between calls; a caller that may issue a
new request before the previous one resolves takes a token per request and
drops any result whose token is no longer current.
"""

from __future__ import annotations

import threading


class RequestGeneration:
    """Monotonic request counter; only the latest token is current."""

    def __init__(self) -> None:
        self._current = 0
        self._lock = threading.Lock()

    def begin(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    def invalidate(self) -> None:
        """Make every outstanding token stale (e.g. the view went away)."""
        with self._lock:
            self._current += 1
