from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedTime:
    """Calendar position of a time index (one index unit = one month)."""

    time_index: int
    year: int
    month: int  # 1-based, 1 = Jan
    label: str  # e.g. "Nov 2025"

    @property
    def is_pre_epoch(self) -> bool:
        return self.time_index < 0
