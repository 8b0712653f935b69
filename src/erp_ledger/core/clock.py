"""Injectable clocks for records that arrive without a date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time, naive local."""

    def now(self) -> datetime:
        return datetime.now()


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock pinned to a single instant, for deterministic runs."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant
