from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from .errors import ConfigurationError, RotationError


class Page(IntEnum):
    CONDITION = 0
    PRECIPITATION = 1
    HIGH_LOW = 2


@dataclass(frozen=True)
class RotationSchedule:
    """Cycles display pages on a fixed cadence keyed to the second of the minute.

    Stateless: the page is a pure function of the wall clock, so every display
    rendering the same instant agrees on the page.
    """
    page_count: int = len(Page)
    page_duration_secs: int = 3

    def __post_init__(self) -> None:
        if self.page_count < 1 or self.page_duration_secs < 1:
            raise ConfigurationError(
                f"page_count ({self.page_count}) and page_duration_secs "
                f"({self.page_duration_secs}) must both be at least 1"
            )

    @property
    def cycle_secs(self) -> int:
        return self.page_count * self.page_duration_secs

    def page_for_second(self, second: int) -> int:
        index = (second % self.cycle_secs) // self.page_duration_secs
        if not 0 <= index < self.page_count:
            raise RotationError(f"page index {index} outside 0..{self.page_count - 1}")
        return index

    def page_index(self, now: datetime) -> int:
        return self.page_for_second(now.second)
