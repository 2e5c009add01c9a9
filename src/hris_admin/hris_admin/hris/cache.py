from __future__ import annotations

import json
from typing import Any, Optional

from ..caching.ttl_cache import TTLCache
from ..core.constants import HRIS_DIVISION_LEVEL, HRIS_SECTION_LEVEL, LOCAL_CACHE_TTL_SECONDS
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from .client import HrisClient

log = get_logger("hris_cache")

HIERARCHY = "company_hierarchy"
DIVISIONS = "divisions"
SECTIONS = "sections"
EMPLOYEES = "employees"


def _level(item: dict) -> Optional[int]:
    try:
        return int(item.get("DEF_LEVEL"))
    except (TypeError, ValueError):
        return None


def split_hierarchy(hierarchy: list[dict]) -> tuple[list[dict], list[dict]]:
    divisions = [i for i in hierarchy if _level(i) == HRIS_DIVISION_LEVEL]
    sections = [i for i in hierarchy if _level(i) == HRIS_SECTION_LEVEL]
    return divisions, sections


class HrisDataCache:
    """TTL cache of HRIS hierarchy and employee data."""

    def __init__(self, client: HrisClient, *, cache: Optional[TTLCache] = None):
        self._client = client
        self._cache = cache if cache is not None else TTLCache(LOCAL_CACHE_TTL_SECONDS)
        self._ready = False

    def initialize(self) -> bool:
        log.info("Initializing HRIS data cache")
        try:
            self._client.login()
            hierarchy = self._client.read_data(HIERARCHY, {})
            employees = self._client.read_data("employee", {})
        except DomainError as e:
            log.error("Failed to initialize HRIS cache: %s", e)
            self._ready = False
            return False

        divisions, sections = split_hierarchy(hierarchy)
        self._cache.set(HIERARCHY, hierarchy)
        self._cache.set(DIVISIONS, divisions)
        self._cache.set(SECTIONS, sections)
        self._cache.set(EMPLOYEES, employees)
        self._ready = True

        log.info(
            "HRIS cache initialized: hierarchy=%d divisions=%d sections=%d employees=%d",
            len(hierarchy), len(divisions), len(sections), len(employees),
        )
        return True

    def refresh(self) -> bool:
        self.clear()
        return self.initialize()

    def clear(self, key: Optional[str] = None) -> None:
        if key:
            self._cache.delete(key)
            return
        self._cache.clear()
        self._ready = False

    def is_ready(self) -> bool:
        return self._ready

    def get_cached_or_fetch(self, collection: str, filter_array: Optional[dict] = None, project: str = "", paginate: bool = False) -> Any:
        key = f"{collection}_{json.dumps(filter_array or {}, sort_keys=True)}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        data = self._client.read_data(collection, filter_array or {}, project, paginate)
        self._cache.set(key, data)
        return data

    def _from_hierarchy(self, key: str) -> Optional[list[dict]]:
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        hierarchy = self._cache.get(HIERARCHY)
        if hierarchy is None:
            return None
        divisions, sections = split_hierarchy(hierarchy)
        derived = divisions if key == DIVISIONS else sections
        self._cache.set(key, derived)
        return derived

    def divisions(self) -> Optional[list[dict]]:
        return self._from_hierarchy(DIVISIONS)

    def sections(self) -> Optional[list[dict]]:
        return self._from_hierarchy(SECTIONS)

    def employees(self) -> Optional[list[dict]]:
        return self._cache.get(EMPLOYEES)

    def status(self) -> dict:
        divisions = self.divisions()
        sections = self.sections()
        employees = self.employees()
        return {
            "isInitialized": self._ready,
            "divisionsCount": len(divisions or []),
            "sectionsCount": len(sections or []),
            "employeesCount": len(employees or []),
            "tokenValid": self._client.has_valid_token(),
        }
