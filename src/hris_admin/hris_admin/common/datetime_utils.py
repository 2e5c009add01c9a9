from __future__ import annotations

import time
from datetime import date, datetime, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    return now_utc().isoformat()


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


def elapsed_ms(started_ms: float) -> int:
    return int(round(monotonic_ms() - started_ms))
