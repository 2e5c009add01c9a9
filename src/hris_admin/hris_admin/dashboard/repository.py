from __future__ import annotations

from typing import Protocol


class DashboardRepository(Protocol):
    def total_counts(self) -> dict:
        """Counts of divisions, sections, sub-sections and active employees."""
        raise NotImplementedError
