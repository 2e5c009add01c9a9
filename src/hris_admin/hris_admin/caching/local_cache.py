from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from ..core.constants import LOCAL_CACHE_TTL_SECONDS
from ..core.logging import get_logger
from .ttl_cache import TTLCache

log = get_logger("local_cache")

SUB_SECTIONS = "subSections"
USERS = "users"
ATTENDANCE_COUNT = "attendance"


class LocalDataCache:
    """Read-through cache of the datasets the admin screens hit most.

    ``initialize()`` loads every dataset in parallel and only then marks the
    cache ready. Two concurrent initialisations both run the full load; the
    later one wins. Readers must check ``is_ready()`` first.
    """

    def __init__(
        self,
        loaders: Dict[str, Callable[[], Any]],
        *,
        cache: Optional[TTLCache] = None,
    ):
        self._loaders = dict(loaders)
        self._cache = cache if cache is not None else TTLCache(LOCAL_CACHE_TTL_SECONDS)
        self._ready = False

    def initialize(self) -> bool:
        log.info("Initializing local data cache (%s)", ", ".join(self._loaders))
        try:
            with ThreadPoolExecutor(max_workers=max(1, len(self._loaders))) as pool:
                futures = {key: pool.submit(loader) for key, loader in self._loaders.items()}
                results = {key: fut.result() for key, fut in futures.items()}
        except Exception as e:
            log.error("Local data cache initialization failed: %s", e)
            self._ready = False
            return False

        for key, value in results.items():
            self._cache.set(key, value)
            log.info("Local cache updated: %s (%s)", key, _describe(value))

        self._ready = True
        return True

    def refresh(self) -> bool:
        return self.initialize()

    def _refresh_one(self, key: str):
        try:
            value = self._loaders[key]()
        except Exception as e:
            log.error("Failed to refresh %s cache: %s", key, e)
            return None
        self._cache.set(key, value)
        return value

    def refresh_sub_sections(self):
        return self._refresh_one(SUB_SECTIONS)

    def refresh_users(self):
        return self._refresh_one(USERS)

    def sub_sections(self):
        return self._cache.get(SUB_SECTIONS)

    def users(self):
        return self._cache.get(USERS)

    def attendance_count(self):
        return self._cache.get(ATTENDANCE_COUNT)

    def clear(self) -> None:
        log.info("Clearing local data cache")
        self._cache.clear()
        self._ready = False

    def is_ready(self) -> bool:
        return self._ready

    def status(self) -> dict:
        sub_sections = self.sub_sections()
        users = self.users()
        return {
            "isInitialized": self._ready,
            "subSectionsCount": len(sub_sections) if sub_sections is not None else 0,
            "usersCount": len(users) if users is not None else 0,
            "attendanceCount": self.attendance_count() or 0,
            "hasSubSections": sub_sections is not None,
            "hasUsers": users is not None,
            "timestamps": {str(k): v for k, v in self._cache.timestamps().items()},
        }


def _describe(value: Any) -> str:
    return f"{len(value)} items" if isinstance(value, (list, tuple)) else str(value)
