from __future__ import annotations

import sys
from abc import abstractmethod
from datetime import datetime
from typing import Optional, TextIO

from .base import Display
from .text import (
    NO_TEMP,
    NO_WEATHER,
    WeatherSummary,
    date_str,
    high_text,
    low_text,
    page_text,
    precipitation_text,
    summarize,
    temp_str,
    time_str,
    truncate_to_characters,
)
from ..domain.errors import RenderError
from ..domain.models import Fresh, Staleness
from ..domain.rotation import Page


class ConsoleDisplay(Display):
    """Character-LCD layout drawn as a framed block of text rows."""

    width = 16

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @abstractmethod
    def rows(self, now: datetime, page: Page, summary: Optional[WeatherSummary]) -> list[str]:
        """Text rows for one frame; summary is None when weather is unavailable."""

    def render(self, now: datetime, page_index: int, weather: Staleness, brightness: float) -> None:
        page = self._page(page_index)
        summary = summarize(weather.snapshot, now) if isinstance(weather, Fresh) else None

        border = f"-{'-' * self.width}-"
        lines = ["", border]
        lines += [f"|{row:<{self.width}.{self.width}}|" for row in self.rows(now, page, summary)]
        lines += [border, f"Current light: {brightness:.2f}"]

        stream = self._stream or sys.stdout
        try:
            stream.write("\n".join(lines) + "\n")
            stream.flush()
        except OSError as e:
            raise RenderError(self.name, "write", str(e)) from e


class Console16x2Display(ConsoleDisplay):
    name = "console16x2"
    width = 16

    def rows(self, now: datetime, page: Page, summary: Optional[WeatherSummary]) -> list[str]:
        if summary is None:
            return [
                f"{time_str(now)} {NO_WEATHER:>10}",
                f"{date_str(now)} {NO_TEMP:>5}",
            ]
        return [
            f"{time_str(now)} {page_text(page, summary, now, 10):>10}",
            f"{date_str(now)} {temp_str(summary.temperature, summary.units)}",
        ]


class Console20x4Display(ConsoleDisplay):
    name = "console20x4"
    width = 20

    def rows(self, now: datetime, page: Page, summary: Optional[WeatherSummary]) -> list[str]:
        # time is always 5 chars, date is always 10 chars
        if summary is None:
            return [
                f"{time_str(now)} {NO_WEATHER:>14}",
                f"{date_str(now)} {NO_TEMP:>9}",
                "",
                "",
            ]

        if page is Page.CONDITION:
            fourth_row = f"Updated {time_str(summary.fetched_at.astimezone(now.tzinfo))}"
        elif page is Page.PRECIPITATION:
            fourth_row = high_text(summary, now)
        else:
            fourth_row = low_text(summary, now)

        return [
            f"{time_str(now)} {truncate_to_characters(summary.condition, 14):>14}",
            f"{date_str(now)} {temp_str(summary.temperature, summary.units):>9}",
            precipitation_text(summary.change, now),
            fourth_row,
        ]
