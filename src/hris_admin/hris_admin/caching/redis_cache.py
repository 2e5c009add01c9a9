from __future__ import annotations

import json
from typing import Any, Iterable, Optional

import redis

from ..core.logging import get_logger

log = get_logger("report_cache")


class ReportCache:
    """JSON values in Redis with SETEX; every failure degrades to a miss.

    A ``ReportCache(None)`` is a valid, permanently disabled cache.
    """

    def __init__(self, client: Optional[redis.Redis]):
        self._client = client

    @classmethod
    def connect(cls, redis_config: dict) -> "ReportCache":
        client = redis.Redis(
            host=redis_config.get("host", "localhost"),
            port=int(redis_config.get("port", 6379)),
            password=redis_config.get("password") or None,
            db=int(redis_config.get("db", 0)),
            socket_connect_timeout=5,
            socket_timeout=5,
            decode_responses=True,
        )
        try:
            client.ping()
        except redis.RedisError as e:
            log.warning("Redis unavailable, using query cache only: %s", e)
            return cls(None)
        log.info("Redis cache connected for reports (%s:%s)", redis_config.get("host"), redis_config.get("port"))
        return cls(client)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def get_json(self, key: str) -> Optional[Any]:
        if self._client is None:
            return None
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            log.warning("Cache read failed for %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            log.warning("Discarding undecodable cache entry %s: %s", key, e)
            return None

    def set_json(self, key: str, value: Any, ttl_seconds: int) -> bool:
        if self._client is None:
            return False
        try:
            self._client.setex(key, int(ttl_seconds), json.dumps(value))
            return True
        except (redis.RedisError, TypeError, ValueError) as e:
            log.warning("Cache write failed for %s: %s", key, e)
            return False

    def delete_prefixes(self, prefixes: Iterable[str]) -> int:
        if self._client is None:
            return 0
        deleted = 0
        try:
            for prefix in prefixes:
                keys = list(self._client.scan_iter(match=f"{prefix}*"))
                if keys:
                    deleted += int(self._client.delete(*keys))
        except redis.RedisError as e:
            log.warning("Cache invalidation failed: %s", e)
        return deleted

    def close(self) -> None:
        if self._client is None:
            return
        try:
            self._client.close()
        except redis.RedisError as e:
            log.warning("Redis close error: %s", e)
