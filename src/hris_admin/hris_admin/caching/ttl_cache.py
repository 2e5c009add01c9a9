from __future__ import annotations

import time
from typing import Any, Callable, Dict, Hashable, Optional

_MISSING = object()


class TTLCache:
    """In-process key -> (value, stored_at) map with a fixed time-to-live.

    Expiry is lazy: an entry older than ``ttl_seconds`` is dropped the next
    time it is read. There is no background sweep and no size bound, and no
    locking; concurrent writers simply last-write-wins.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.time):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._values: Dict[Hashable, Any] = {}
        self._stored_at: Dict[Hashable, float] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def set(self, key: Hashable, value: Any) -> None:
        self._values[key] = value
        self._stored_at[key] = self._clock()

    def _is_fresh(self, key: Hashable) -> bool:
        stored_at = self._stored_at.get(key)
        if stored_at is None:
            return False
        return self._clock() - stored_at < self._ttl

    def get(self, key: Hashable, default: Any = None) -> Any:
        if not self._is_fresh(key):
            self.delete(key)
            return default
        return self._values.get(key, default)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: Hashable) -> None:
        self._values.pop(key, None)
        self._stored_at.pop(key, None)

    def clear(self) -> None:
        self._values.clear()
        self._stored_at.clear()

    def age_seconds(self, key: Hashable) -> Optional[float]:
        stored_at = self._stored_at.get(key)
        return None if stored_at is None else self._clock() - stored_at

    def timestamps(self) -> Dict[Hashable, float]:
        return dict(self._stored_at)

    def __len__(self) -> int:
        return len(self._values)
