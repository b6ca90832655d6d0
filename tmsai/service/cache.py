"""Short-lived response cache."""

import time
from typing import Callable


class ResponseCache:
    """Expiring map of cache key -> response text. Expiry is checked on read."""

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    @staticmethod
    def make_key(user_id: str, message: str, model: str) -> str:
        return f"{user_id}:{message}:{model}"

    def set(self, key: str, response: str) -> None:
        self._entries[key] = (response, self._clock())

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        response, stored_at = entry
        if self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return None
        return response

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
