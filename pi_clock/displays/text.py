"""Text formatting shared by the character displays."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..domain.errors import ForecastError
from ..domain.forecast import high_low_temp, next_precipitation_change
from ..domain.models import (
    HighLow,
    NoChange,
    PrecipitationChange,
    Start,
    Stop,
    TemperatureUnits,
    WeatherSnapshot,
)
from ..domain.rotation import Page

logger = logging.getLogger(__name__)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

NO_WEATHER = "WEATHER"
NO_TEMP = "ERR"
CONDITION_CHARS = 7


def truncate_to_characters(s: str, length: int) -> str:
    """Shorten to ``length`` keeping the first letter: Thunderstorm -> T'storm."""
    if len(s) <= length:
        return s
    return f"{s[0]}'{s[len(s) - length + 2:]}"


def split_time(t: datetime) -> list[int]:
    """HH:MM as four digits, for segment displays."""
    return [t.hour // 10 % 10, t.hour % 10, t.minute // 10 % 10, t.minute % 10]


def time_str(t: datetime) -> str:
    h1, h2, m1, m2 = split_time(t)
    return f"{h1}{h2}:{m1}{m2}"


def date_str(t: datetime) -> str:
    return f"{WEEKDAYS[t.weekday()]} {MONTHS[t.month - 1]} {t.day:<2}"


def temp_str(temperature: float, units: TemperatureUnits) -> str:
    return f"{round(temperature):>3}°{units.as_char()}"


@dataclass(frozen=True)
class WeatherSummary:
    condition: str
    temperature: float
    units: TemperatureUnits
    fetched_at: datetime
    change: PrecipitationChange
    high_low: Optional[HighLow]


def summarize(snapshot: WeatherSnapshot, now: datetime) -> WeatherSummary:
    try:
        high_low = high_low_temp(snapshot, now)
    except ForecastError as e:
        logger.debug("No high/low available: %s", e)
        high_low = None

    return WeatherSummary(
        condition=snapshot.current.condition.value,
        temperature=snapshot.current.temperature,
        units=snapshot.units,
        fetched_at=snapshot.fetched_at,
        change=next_precipitation_change(snapshot, now),
        high_low=high_low,
    )


def _local_hhmm(at: datetime, now: datetime) -> str:
    return time_str(at.astimezone(now.tzinfo))


def precipitation_text(change: PrecipitationChange, now: datetime, short: bool = False) -> str:
    if isinstance(change, Start):
        kind = change.kind.value
        if short:
            return f"{truncate_to_characters(kind, 4)}@{_local_hhmm(change.at, now)}"
        return f"{kind} at {_local_hhmm(change.at, now)}"

    if isinstance(change, Stop):
        if short:
            return f"Dry@{_local_hhmm(change.at, now)}"
        return f"{change.kind.value} ends {_local_hhmm(change.at, now)}"

    if isinstance(change, NoChange):
        if change.current is None:
            return "No rain" if short else "No rain all day"
        kind = change.current.value
        if short:
            return f"{truncate_to_characters(kind, 6)} 24h"
        return f"{kind} all day"

    raise TypeError(f"Unknown precipitation change: {change!r}")


def high_low_short(summary: WeatherSummary) -> str:
    if summary.high_low is None:
        return "H-- L--"
    return f"H{round(summary.high_low.high.temperature)} L{round(summary.high_low.low.temperature)}"


def high_text(summary: WeatherSummary, now: datetime) -> str:
    if summary.high_low is None:
        return "High: --"
    high = summary.high_low.high
    return f"High: {round(high.temperature)}°{summary.units.as_char()} at {_local_hhmm(high.at, now)}"


def low_text(summary: WeatherSummary, now: datetime) -> str:
    if summary.high_low is None:
        return "Low: --"
    low = summary.high_low.low
    return f"Low: {round(low.temperature)}°{summary.units.as_char()} at {_local_hhmm(low.at, now)}"


def page_text(page: Page, summary: WeatherSummary, now: datetime, width: int) -> str:
    """Short rotating text for a single row segment."""
    if page is Page.CONDITION:
        text = truncate_to_characters(summary.condition, CONDITION_CHARS)
    elif page is Page.PRECIPITATION:
        text = precipitation_text(summary.change, now, short=True)
    else:
        text = high_low_short(summary)
    return truncate_to_characters(text, width)
