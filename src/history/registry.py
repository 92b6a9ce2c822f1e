"""Tracks which sessions already had their result handed off."""

from __future__ import annotations

import time
from typing import Callable

DEFAULT_MAX_ENTRIES = 100
DEFAULT_TTL_SECONDS = 60 * 60


class HandoffRegistry:
    """Bounded, time-expiring set of session ids.

    Guards against saving the same finished session twice when the
    finish notification arrives more than once. Entries expire after
    ``ttl_seconds``; beyond ``max_entries`` the oldest are dropped.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._marked: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._marked)

    def cleanup(self) -> None:
        """Drop expired entries, then the oldest ones beyond the size limit."""
        now = self._clock()
        for session_id, marked_at in list(self._marked.items()):
            if now - marked_at > self.ttl_seconds:
                del self._marked[session_id]

        overflow = len(self._marked) - self.max_entries
        if overflow > 0:
            oldest = sorted(self._marked.items(), key=lambda item: item[1])[:overflow]
            for session_id, _ in oldest:
                del self._marked[session_id]

    def is_handed_off(self, session_id: str) -> bool:
        self.cleanup()
        return session_id in self._marked

    def mark_handed_off(self, session_id: str) -> None:
        self._marked[session_id] = self._clock()
        self.cleanup()

    def unmark(self, session_id: str) -> None:
        """Forget a session so its hand-off can be retried."""
        self._marked.pop(session_id, None)
